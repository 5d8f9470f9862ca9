"""Shared pytest fixtures for HueKeeper tests."""

from typing import List, Optional, Tuple

import pytest

from huekeeper.context import HueKeeperContext
from huekeeper.host import HostSignals
from huekeeper.plugin import QueryHandler
from huekeeper.registry import ColorRegistry
from huekeeper.utils.clipboard import ClipboardInvoker
from huekeeper.utils.picker import PickerInvoker
from huekeeper.utils.process import ProcessLaunchError, ProcessResult
from huekeeper.utils.settings_store import MemorySettingsStore, SettingsAdapter


class RecordingHost(HostSignals):
    """Host that remembers every signal it received."""

    def __init__(self):
        self.notifications: List[Tuple[str, bool]] = []
        self.logs: List[Tuple[str, str]] = []
        self.hidden = 0
        self.refreshes: List[bool] = []
        self.queries: List[str] = []

    def notify(self, message: str, error: bool = False) -> None:
        self.notifications.append((message, error))

    def log(self, level: str, message: str) -> None:
        self.logs.append((level, message))

    def hide_ui(self) -> None:
        self.hidden += 1

    def refresh_results(self, preserve_selected_index: bool = True) -> None:
        self.refreshes.append(preserve_selected_index)

    def change_query(self, query_text: str) -> None:
        self.queries.append(query_text)

    @property
    def messages(self) -> List[str]:
        return [message for message, _ in self.notifications]


class FakeRunner:
    """Stands in for run_process: returns a canned result and records calls."""

    def __init__(self, exit_code: int = 0, stdout: bytes = b"", stderr: bytes = b"",
                 error: Optional[Exception] = None):
        self.result = ProcessResult(exit_code=exit_code, stdout=stdout, stderr=stderr)
        self.error = error
        self.calls = []

    def __call__(self, path, args=(), stdin=None, capture_stdout=True):
        self.calls.append({"path": path, "args": list(args), "stdin": stdin,
                           "capture_stdout": capture_stdout})
        if self.error is not None:
            raise self.error
        return self.result


# ============================================================================
# Store / Registry Fixtures
# ============================================================================


@pytest.fixture
def store() -> MemorySettingsStore:
    return MemorySettingsStore()


@pytest.fixture
def adapter(store: MemorySettingsStore) -> SettingsAdapter:
    return SettingsAdapter(store)


@pytest.fixture
def registry(adapter: SettingsAdapter) -> ColorRegistry:
    return ColorRegistry(adapter)


# ============================================================================
# Host / Process Fixtures
# ============================================================================


@pytest.fixture
def host() -> RecordingHost:
    return RecordingHost()


@pytest.fixture
def picker_runner() -> FakeRunner:
    return FakeRunner(stdout=b"#a1b2c3\n")


@pytest.fixture
def clipboard_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def context(store, host, picker_runner, clipboard_runner, tmp_path) -> HueKeeperContext:
    return HueKeeperContext(
        settings=store,
        host=host,
        picker=PickerInvoker(install_dir=str(tmp_path), platform="win32", runner=picker_runner),
        clipboard=ClipboardInvoker(platform="darwin", runner=clipboard_runner),
        install_dir=str(tmp_path),
    )


@pytest.fixture
def handler(context: HueKeeperContext) -> QueryHandler:
    return QueryHandler(context)


@pytest.fixture
def launch_error() -> ProcessLaunchError:
    return ProcessLaunchError("[Errno 2] No such file or directory: 'xcolor'")
