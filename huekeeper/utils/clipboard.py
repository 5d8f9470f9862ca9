"""
Clipboard integration for HueKeeper.

This module copies color strings to the system clipboard by piping them into
the platform's clipboard tool (clip, pbcopy, wl-copy or xclip).
"""

import logging
import os
import subprocess
import sys
from typing import Callable, List, Optional, Tuple

from .process import ProcessLaunchError, ProcessResult, run_process

# Set up logging
logger = logging.getLogger(__name__)

# Platform -> (program, arguments). Linux picks between Wayland and X11 at runtime.
CLIPBOARD_PROGRAMS = {
    "win32": ("clip", []),
    "darwin": ("pbcopy", []),
}
WAYLAND_CLIPBOARD = ("wl-copy", [])
X11_CLIPBOARD = ("xclip", ["-selection", "clipboard"])


def check_tool_available(name: str) -> bool:
    """Check if a command line tool is available on the system."""
    try:
        result = subprocess.run(
            ['which', name],
            capture_output=True,
            text=True,
            timeout=2
        )
        return result.returncode == 0
    except Exception as e:
        logger.warning(f"Error checking for {name}: {e}")
        return False


class ClipboardInvoker:
    """Copies text to the clipboard through an external program."""

    def __init__(
        self,
        platform: Optional[str] = None,
        runner: Callable[..., ProcessResult] = run_process,
        tool_available: Callable[[str], bool] = check_tool_available,
    ):
        """
        Initialize the clipboard invoker.

        Args:
            platform: Platform identifier (defaults to sys.platform)
            runner: Process runner, see huekeeper.utils.process.run_process
            tool_available: Predicate telling whether a tool is on PATH
        """
        self.platform = platform or sys.platform
        self.runner = runner
        self.tool_available = tool_available

    def select_program(self) -> Tuple[str, List[str]]:
        """Pick the clipboard program for the current platform."""
        if self.platform in CLIPBOARD_PROGRAMS:
            return CLIPBOARD_PROGRAMS[self.platform]

        # Prefer wl-copy under Wayland, fall back to xclip everywhere else
        if os.environ.get("WAYLAND_DISPLAY") and self.tool_available(WAYLAND_CLIPBOARD[0]):
            return WAYLAND_CLIPBOARD
        return X11_CLIPBOARD

    def copy(self, text: str) -> None:
        """
        Copy text to the clipboard.

        Args:
            text: Text to copy

        Raises:
            ProcessLaunchError: If the clipboard tool is missing or fails
        """
        program, args = self.select_program()
        result = self.runner(program, args, stdin=text.encode("utf-8"), capture_stdout=False)

        if result.exit_code != 0:
            stderr = result.stderr_text.strip()
            message = stderr or f"{program} exited with {result.exit_code}"
            logger.error(f"Failed to copy to clipboard: {message}")
            raise ProcessLaunchError(message, exit_code=result.exit_code, stderr=stderr)

        logger.info(f"Copied to clipboard with {program}: {text}")

    def is_available(self) -> bool:
        """
        Test if clipboard operations are available.

        Returns:
            True if the platform's clipboard tool can be found, False otherwise
        """
        program, _ = self.select_program()
        if self.platform in CLIPBOARD_PROGRAMS:
            # clip and pbcopy ship with the OS
            return True
        available = self.tool_available(program)
        if not available:
            logger.warning(f"{program} not found in PATH - clipboard functionality disabled")
        return available
