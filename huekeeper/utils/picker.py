"""Screen color picker invocation.

HueKeeper doesn't sample pixels itself. It launches a platform color picker
that lets the user click anywhere on screen and prints the chosen color on
standard output:

1. Windows / macOS - bundled binaries in <install dir>/bin
2. Linux - hyprpicker under Wayland, xcolor under X11 (from PATH)
"""

import logging
import os
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

from .color_codec import normalize
from .paths import HueKeeperPaths
from .process import ProcessLaunchError, ProcessResult, run_process

logger = logging.getLogger(__name__)

# Bundled picker binaries, relative to the bin directory
BUNDLED_PICKERS = {
    "win32": "color_picker_windows.exe",
    "darwin": "color_picker_macos",
}
WAYLAND_PICKER = "hyprpicker"
X11_PICKER = "xcolor"


class PickerState(Enum):
    """Picker invocation state machine."""
    IDLE = "idle"
    INVOKING = "invoking"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class PickOutcome:
    """Result of one picker run.

    color is set only when state is SUCCEEDED. error carries the captured
    error text for FAILED runs; invalid_output marks a picker that exited
    cleanly but printed something that isn't a color.
    """

    state: PickerState
    color: Optional[str] = None
    error: str = ""
    invalid_output: bool = False

    @property
    def succeeded(self) -> bool:
        return self.state == PickerState.SUCCEEDED


def ensure_executable(bin_path: str, platform: Optional[str] = None) -> None:
    """
    Make a bundled picker binary executable on macOS.

    Archives don't always preserve the executable bit. A failure here is
    ignored; launching the binary reports the real problem.

    Args:
        bin_path: Path to the picker binary
        platform: Platform identifier (defaults to sys.platform)
    """
    if (platform or sys.platform) != "darwin":
        return
    if not os.path.exists(bin_path):
        return
    try:
        os.chmod(bin_path, 0o755)
    except OSError as e:
        logger.debug(f"Could not chmod {bin_path}: {e}")


class PickerInvoker:
    """Runs the platform color picker and reads the picked color."""

    def __init__(
        self,
        install_dir: Optional[str] = None,
        platform: Optional[str] = None,
        runner: Callable[..., ProcessResult] = run_process,
    ):
        """
        Initialize the picker invoker.

        Args:
            install_dir: Directory containing bin/ with bundled pickers
            platform: Platform identifier (defaults to sys.platform)
            runner: Process runner, see huekeeper.utils.process.run_process
        """
        self.install_dir = install_dir
        self.platform = platform or sys.platform
        self.runner = runner
        self.state = PickerState.IDLE

    def select_program(self) -> Tuple[str, List[str]]:
        """Get the picker program and its arguments for the current platform."""
        if self.platform in BUNDLED_PICKERS:
            bin_dir = HueKeeperPaths.get_bin_dir(self.install_dir)
            return os.path.join(bin_dir, BUNDLED_PICKERS[self.platform]), []

        if os.environ.get("WAYLAND_DISPLAY"):
            return WAYLAND_PICKER, []
        return X11_PICKER, []

    def pick(self) -> PickOutcome:
        """
        Launch the picker and wait for the user to choose a color.

        Returns:
            PickOutcome describing the final state
        """
        if self.state == PickerState.INVOKING:
            logger.error("Color picker is already running")
            return PickOutcome(PickerState.FAILED, error="color picker is already running")

        program, args = self.select_program()
        logger.info(f"Starting color picker from: {program}")

        ensure_executable(program, self.platform)
        self.state = PickerState.INVOKING

        try:
            result = self.runner(program, args)
        except ProcessLaunchError as e:
            return self._finish(PickOutcome(PickerState.FAILED, error=str(e)))
        except Exception as e:
            logger.exception(f"Unexpected error running color picker {program}")
            return self._finish(PickOutcome(PickerState.FAILED, error=str(e)))

        if result.exit_code != 0:
            error = result.stderr_text.strip() or f"color picker exited with {result.exit_code}"
            logger.error(f"Color picker failed: {error}")
            return self._finish(PickOutcome(PickerState.FAILED, error=error))

        output = result.stdout_text.strip()
        color = normalize(output)
        if color is None:
            logger.warning(f"Invalid or empty color from stdout: {output}")
            return self._finish(
                PickOutcome(
                    PickerState.FAILED,
                    error=f"invalid color from picker: {output!r}",
                    invalid_output=True,
                )
            )

        return self._finish(PickOutcome(PickerState.SUCCEEDED, color=color))

    def _finish(self, outcome: PickOutcome) -> PickOutcome:
        self.state = outcome.state
        return outcome
