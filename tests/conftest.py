"""
Pytest configuration and shared fixtures for the droidprocs test suite.

This module provides a builder for fake procfs trees, sample file contents
and configuration fixtures used across the test modules.
"""

import sys
from pathlib import Path
from typing import Dict, Optional, Sequence

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from droidprocs.config import clear_config_cache  # noqa: E402
from droidprocs.models.config import (  # noqa: E402
    ClassificationSettings,
    PlatformSettings,
    ProcfsSettings,
    ProcsConfig,
    PsSettings,
)


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")


# ============================================================================
# Sample procfs content
# ============================================================================


def make_stat_line(
    pid: int,
    comm: str,
    state: str = "S",
    ppid: int = 1,
    utime: int = 30,
    stime: int = 10,
    vsize: int = 1048576,
    rss: int = 256,
    rt_priority: int = 0,
    policy: int = 0,
    nice: int = 0,
) -> str:
    """Build a /proc/<pid>/stat line with the 39 fields following the name."""
    fields = [
        state, ppid, pid, pid, 0, -1, 4194560, 100, 0, 0, 0,
        utime, stime, 0, 0, 20, nice, 12, 0, 5000,
        vsize, rss, 18446744073709551615, 1, 1, 0, 0, 0,
        0, 0, 0, 4612, 0, 0, 0, 17, 2,
        rt_priority, policy,
    ]
    return f"{pid} ({comm}) " + " ".join(str(f) for f in fields) + "\n"


def make_status(name: str, uid: int, gid: Optional[int] = None) -> str:
    gid = uid if gid is None else gid
    return (
        f"Name:\t{name}\n"
        "State:\tS (sleeping)\n"
        f"Uid:\t{uid}\t{uid}\t{uid}\t{uid}\n"
        f"Gid:\t{gid}\t{gid}\t{gid}\t{gid}\n"
        "VmRSS:\t    1024 kB\n"
        "Threads:\t12\n"
    )


class FakeProcfs:
    """Builds a directory tree that looks like /proc under a temporary path."""

    def __init__(self, root: Path):
        self.root = root
        self.root.mkdir(parents=True, exist_ok=True)

    def __str__(self) -> str:
        return str(self.root)

    def add_entry(self, name: str) -> Path:
        """Create a bare directory entry (e.g. 'self' or a pid without files)."""
        path = self.root / name
        path.mkdir(parents=True, exist_ok=True)
        return path

    def add_process(
        self,
        pid: int,
        cmdline: Sequence[str] = (),
        comm: Optional[str] = None,
        uid: int = 0,
        state: str = "S",
        policy: int = 0,
        statm: str = "1000 250 100 10 0 500 0\n",
        oom_score_adj: Optional[int] = 0,
        cgroup: Optional[str] = None,
        extra_files: Optional[Dict[str, str]] = None,
    ) -> Path:
        """Create /<pid>/ with stat, statm, status, cmdline and oom files."""
        comm = comm if comm is not None else (cmdline[0].split("/")[-1][:15] if cmdline else "kworker/0:1")
        path = self.add_entry(str(pid))
        (path / "stat").write_text(make_stat_line(pid, comm, state=state, policy=policy))
        (path / "statm").write_text(statm)
        (path / "status").write_text(make_status(comm, uid))
        (path / "cmdline").write_bytes(b"".join(arg.encode() + b"\x00" for arg in cmdline))
        if oom_score_adj is not None:
            (path / "oom_score_adj").write_text(f"{oom_score_adj}\n")
            (path / "oom_adj").write_text(f"{oom_score_adj * 17 // 1000}\n")
            (path / "oom_score").write_text("42\n")
        if cgroup is not None:
            (path / "cgroup").write_text(cgroup)
        for filename, content in (extra_files or {}).items():
            (path / filename).write_text(content)
        return path


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def fake_procfs(tmp_path):
    """An empty fake proc root."""
    return FakeProcfs(tmp_path / "proc")


@pytest.fixture
def app_data_dir(tmp_path):
    """A fake /data/data with one directory per installed package."""
    path = tmp_path / "data" / "data"
    for package in ("com.example.app", "com.example", "com.android.chrome"):
        (path / package).mkdir(parents=True)
    return path


@pytest.fixture
def test_config(fake_procfs, app_data_dir, tmp_path):
    """A configuration pointing at the fake proc root and data directory."""
    return ProcsConfig(
        procfs=ProcfsSettings(
            root=str(fake_procfs),
            page_size=4096,
            cpuctl_tasks=str(tmp_path / "dev" / "cpuctl" / "tasks"),
            enhanced_attribution="off",
        ),
        classification=ClassificationSettings(
            require_app_data_dir=True,
            app_data_dir=str(app_data_dir),
        ),
        ps=PsSettings(command="toolbox ps -p -P -x -c", su_binary="su"),
        platform=PlatformSettings(sdk_version=24),
    )


@pytest.fixture
def sample_config_data():
    """Sample configuration data as loaded from TOML."""
    return {
        "procfs": {
            "root": "/proc",
            "page_size": 0,
            "cpuctl_tasks": "/dev/cpuctl/tasks",
            "enhanced_attribution": "auto",
        },
        "classification": {
            "require_app_data_dir": True,
            "app_data_dir": "/data/data",
        },
        "ps": {
            "command": "toolbox ps -p -P -x -c",
            "su_binary": "su",
        },
        "platform": {
            "sdk_version": 24,
        },
    }


@pytest.fixture(autouse=True)
def clear_config_after_test():
    """Reset the configuration singleton between tests."""
    yield
    clear_config_cache()


@pytest.fixture
def stat_line():
    """Factory for /proc/<pid>/stat lines."""
    return make_stat_line
