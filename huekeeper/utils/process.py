"""
External process execution for HueKeeper.

The color picker and the clipboard tools are separate programs. This module
wraps subprocess so both are launched the same way: wait for the program to
exit, capture its output, and report launch problems as ProcessLaunchError.

No timeout is applied: a picker runs until the user clicks somewhere on
screen, however long that takes.
"""

import logging
import subprocess
import tempfile
from dataclasses import dataclass
from typing import Optional, Sequence

logger = logging.getLogger(__name__)


class HueKeeperError(Exception):
    """Base class for HueKeeper errors."""


class ProcessLaunchError(HueKeeperError):
    """An external program was missing, not executable, or exited with an error."""

    def __init__(self, message: str, exit_code: Optional[int] = None, stderr: str = ""):
        super().__init__(message)
        self.exit_code = exit_code
        self.stderr = stderr


@dataclass
class ProcessResult:
    """Outcome of a finished external process."""

    exit_code: int
    stdout: bytes
    stderr: bytes

    @property
    def stdout_text(self) -> str:
        return self.stdout.decode("utf-8", errors="replace")

    @property
    def stderr_text(self) -> str:
        return self.stderr.decode("utf-8", errors="replace")


def run_process(
    path: str,
    args: Sequence[str] = (),
    stdin: Optional[bytes] = None,
    capture_stdout: bool = True,
) -> ProcessResult:
    """
    Run an external program and wait for it to finish.

    Args:
        path: Program path or name (looked up on PATH)
        args: Command line arguments
        stdin: Bytes to feed to the program's standard input
        capture_stdout: Collect standard output. Turn off for programs that
            leave a background child running (xclip, wl-copy)

    Returns:
        ProcessResult with exit code and captured output

    Raises:
        ProcessLaunchError: If the program could not be started
    """
    cmd = [path, *args]
    logger.debug(f"Running: {' '.join(cmd)}")

    # stderr goes to a file: a forked child inheriting a pipe would keep it
    # open and communicate() would never see EOF
    try:
        with tempfile.TemporaryFile() as stderr_file:
            completed = subprocess.run(
                cmd,
                input=stdin,
                stdin=None if stdin is not None else subprocess.DEVNULL,
                stdout=subprocess.PIPE if capture_stdout else subprocess.DEVNULL,
                stderr=stderr_file,
            )
            stderr_file.seek(0)
            stderr = stderr_file.read()
    except (OSError, ValueError) as e:
        # FileNotFoundError, PermissionError, embedded NUL in the path
        logger.error(f"Failed to launch {path}: {e}")
        raise ProcessLaunchError(str(e)) from e

    return ProcessResult(
        exit_code=completed.returncode,
        stdout=completed.stdout or b"",
        stderr=stderr,
    )
