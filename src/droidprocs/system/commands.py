"""
Command execution through a privileged shell.

The library treats the privileged shell as a black box returning an exit
status plus captured output. SuCommandRunner is the default transport; any
object with a compatible `run` method can be injected instead.
"""

import logging
import shlex
import subprocess
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence, Tuple

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Exit status and captured output of one command."""

    exit_code: int
    stdout: List[str] = field(default_factory=list)
    stderr: str = ""

    @property
    def is_successful(self) -> bool:
        return self.exit_code == 0


class CommandRunner(Protocol):
    """Anything that can run a shell command string with elevated privileges."""

    def run(self, command: str) -> CommandResult:
        ...


def run_command(args: Sequence[str], input_text: Optional[str] = None) -> Tuple[int, str, str]:
    """Execute a command and capture its output with robust error handling.

    Args:
        args: Program and arguments, not interpreted by a shell.
        input_text: Optional text written to the command's stdin.

    Returns:
        Tuple of (return_code, stdout_string, stderr_string).
        return_code is -1 for execution errors.

    Note:
        No timeout is applied; a hung command blocks the caller, which is
        responsible for running this off any latency-sensitive thread.
    """
    logger.debug(f"Executing command: {shlex.join(args)}")
    try:
        process = subprocess.run(
            list(args),
            input=input_text,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
        return process.returncode, process.stdout, process.stderr
    except FileNotFoundError as e:
        logger.warning(f"Command not found: {args[0]}: {e}")
        return -1, "", f"Error: Command not found '{args[0]}'"
    except OSError as e:
        logger.error(f"Unexpected error while running '{args[0]}': {type(e).__name__}: {e}", exc_info=True)
        return -1, "", f"An unexpected error occurred: {e}"


class SuCommandRunner:
    """
    Runs commands as root through the `su` binary (`su -c <command>`).

    A denied request, a missing binary and a failing command all surface as a
    non-zero exit code.
    """

    def __init__(self, su_binary: str = "su"):
        self.su_binary = su_binary

    def run(self, command: str) -> CommandResult:
        exit_code, stdout, stderr = run_command([self.su_binary, "-c", command])
        if exit_code != 0:
            logger.info(f"'{self.su_binary} -c {command}' exited with {exit_code}: {stderr.strip()}")
        return CommandResult(exit_code=exit_code, stdout=stdout.splitlines(), stderr=stderr)
