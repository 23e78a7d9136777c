"""
Unit tests for the process query layer.

Scans run against a fake proc root with the data directory check pointed at
a temporary /data/data.
"""

import logging
from unittest.mock import Mock, patch

import pytest

from droidprocs.aggregation.query import ProcessQuery, is_system_uid
from droidprocs.models.apps import RunningAppProcessInfo
from droidprocs.procfs.process import AppProcessRecord
from droidprocs.ps.parser import parse_ps_line
from droidprocs.system.packages import StaticPackageService


@pytest.fixture
def device(fake_procfs):
    """A proc root with kernel threads, daemons and app processes."""
    fake_procfs.add_process(1, cmdline=["/init"], uid=0)
    fake_procfs.add_process(2, cmdline=[], comm="kthreadd", uid=0)
    fake_procfs.add_process(500, cmdline=["system_server"], uid=1000)
    fake_procfs.add_process(600, cmdline=["com.example.app"], uid=10052, policy=0)
    fake_procfs.add_process(601, cmdline=["com.example:remote"], uid=10041, policy=0)
    fake_procfs.add_process(602, cmdline=["com.android.chrome"], uid=10077, policy=3)
    fake_procfs.add_process(603, cmdline=["com.example"], uid=1000, policy=0)
    fake_procfs.add_entry("self")
    return fake_procfs


@pytest.fixture
def packages():
    return StaticPackageService(
        launch_intents={
            "com.example.app": "com.example.app/.MainActivity",
            "com.example": "com.example/.Main",
            "com.android.chrome": "com.android.chrome/.Main",
        },
        labels={"com.example.app": "Example"},
    )


@pytest.mark.unit
class TestProcessQuery:
    """Test cases for process and app listings."""

    def test_list_processes(self, device, test_config):
        """Test that every readable pid is listed."""
        query = ProcessQuery(test_config)

        assert {p.pid for p in query.list_processes()} == {1, 2, 500, 600, 601, 602, 603}

    def test_list_app_processes(self, device, test_config):
        """Test that only package-named processes with data directories are apps."""
        apps = ProcessQuery(test_config).list_app_processes()

        assert all(isinstance(app, AppProcessRecord) for app in apps)
        by_pid = {app.pid: app for app in apps}
        assert set(by_pid) == {600, 601, 602, 603}
        assert by_pid[600].uid == 10052
        assert by_pid[600].foreground is True
        assert by_pid[602].foreground is False

    def test_foreground_filter(self, device, test_config, packages):
        """Test exclusion of secondary processes, system uids and background apps."""
        query = ProcessQuery(test_config)

        foreground = query.list_foreground_app_processes(packages)

        assert [app.pid for app in foreground] == [600]

    def test_secondary_process_excluded_despite_foreground(self, test_config, packages):
        """Test that a colon-qualified name is never a foreground app."""
        app = AppProcessRecord(pid=601, name="com.example:remote", uid=10041, foreground=True)
        query = ProcessQuery(test_config)

        assert query.is_foreground_app(app, packages) is False

    def test_unlaunchable_package_excluded(self, test_config):
        """Test that packages without a launch intent are excluded."""
        app = AppProcessRecord(pid=700, name="com.example.app", uid=10052, foreground=True)
        query = ProcessQuery(test_config)

        assert query.is_foreground_app(app, StaticPackageService()) is False

    def test_enhanced_attribution(self, fake_procfs, test_config):
        """Test that cgroups drive uid and foreground when enabled."""
        fake_procfs.add_process(
            800, cmdline=["com.example.app"], uid=10099, policy=0,
            cgroup="3:cpuacct:/uid_10052/pid_800\n2:cpu:/bg_non_interactive\n",
        )
        query = ProcessQuery(test_config, enhanced_attribution=True)

        app = query.list_app_processes()[0]

        assert app.uid == 10052
        assert app.foreground is False

    def test_is_my_process_in_foreground(self, device, test_config):
        """Test the check for the calling process."""
        query = ProcessQuery(test_config)

        assert query.is_my_process_in_foreground(600) is True
        assert query.is_my_process_in_foreground(602) is False
        assert query.is_my_process_in_foreground(1) is False
        assert query.is_my_process_in_foreground(4242) is False

    @patch("droidprocs.aggregation.query.os.getpid", return_value=600)
    def test_is_my_process_defaults_to_own_pid(self, mock_getpid, device, test_config):
        """Test that the calling process's pid is used by default."""
        assert ProcessQuery(test_config).is_my_process_in_foreground() is True

    def test_running_app_process_info(self, device, test_config):
        """Test the name, pid and uid summaries."""
        infos = ProcessQuery(test_config).running_app_process_info()

        assert RunningAppProcessInfo(name="com.example.app", pid=600, uid=10052) in infos
        assert len(infos) == 4

    def test_app_label(self, test_config, packages):
        """Test labels with the package-name fallback and memoisation."""
        query = ProcessQuery(test_config)
        service = Mock(wraps=packages)

        main = AppProcessRecord(pid=1, name="com.example.app:ui", uid=10052)
        other = AppProcessRecord(pid=2, name="com.android.chrome", uid=10077)

        assert query.app_label(main, service) == "Example"
        assert query.app_label(main, service) == "Example"
        assert query.app_label(other, service) == "com.android.chrome"
        assert service.get_label.call_count == 2

    def test_injected_logger(self, fake_procfs, test_config):
        """Test that classification diagnostics go to the injected logger."""
        fake_procfs.add_process(1, cmdline=["/init"])
        log = Mock(spec=logging.Logger)

        ProcessQuery(test_config, logger=log).list_app_processes()

        assert "not an app process" in log.debug.call_args[0][0]

    @patch("droidprocs.aggregation.query.is_process_info_hidden", return_value=True)
    def test_process_info_hidden(self, mock_hidden, test_config):
        """Test that the check targets the configured proc root."""
        assert ProcessQuery(test_config).process_info_hidden() is True
        mock_hidden.assert_called_once_with(test_config.procfs.root)

    @pytest.mark.parametrize("uid,expected", [(0, False), (1000, True), (9999, True), (10000, False)])
    def test_is_system_uid(self, uid, expected):
        """Test the fixed system id range."""
        assert is_system_uid(uid) is expected


@pytest.mark.unit
class TestUidConsistency:
    """Test that the procfs and ps paths agree on the uid of a process."""

    @pytest.mark.parametrize(
        "user,sdk_version",
        [("u0_a52", 24), ("app_52", 16)],
    )
    @patch("droidprocs.system.identity.pwd.getpwnam", side_effect=KeyError("not in passwd"))
    def test_same_uid_from_both_paths(self, mock_getpwnam, fake_procfs, test_config, user, sdk_version):
        """Test a classified app and its ps line for the same pid."""
        fake_procfs.add_process(12345, cmdline=["com.example.app"], uid=10052)
        line = (
            f"{user} 12345 512 204800 51200 0 10 -4 0 0 fg c0123456 deadbeef S "
            "com.example.app 340 120 (u:10052, s:10052)"
        )

        app = ProcessQuery(test_config).app_process(12345)
        info = parse_ps_line(line)

        assert app is not None
        assert info.pid == app.pid
        assert info.uid == app.uid == 10052
        assert info.is_app(sdk_version=sdk_version) is True

    @patch("droidprocs.system.identity.pwd.getpwnam", side_effect=KeyError("not in passwd"))
    def test_same_uid_with_cgroup_attribution(self, mock_getpwnam, fake_procfs, test_config):
        """Test agreement when the uid comes from the cpuacct cgroup."""
        fake_procfs.add_process(
            12346, cmdline=["com.example.app"], uid=10052,
            cgroup="3:cpuacct:/uid_10052/pid_12346\n2:cpu:/\n",
        )
        line = (
            "u0_a52 12346 512 204800 51200 0 10 -4 0 0 fg c0123456 deadbeef S "
            "com.example.app (u:10052, s:10052)"
        )

        app = ProcessQuery(test_config, enhanced_attribution=True).app_process(12346)

        assert parse_ps_line(line).uid == app.uid == 10052
