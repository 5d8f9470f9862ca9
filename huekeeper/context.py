"""Runtime context shared by HueKeeper components.

Everything a component needs from the outside world (settings, host,
external programs) is passed in through HueKeeperContext rather than
looked up globally, so each piece can be built with fakes in tests.
"""

from dataclasses import dataclass, field
from typing import Optional

from huekeeper.host import DesktopHost, HostSignals
from huekeeper.utils.clipboard import ClipboardInvoker
from huekeeper.utils.paths import HueKeeperPaths
from huekeeper.utils.picker import PickerInvoker
from huekeeper.utils.settings_store import QSettingsStore, SettingsStore


@dataclass
class HueKeeperContext:
    """Injectable dependencies for one HueKeeper instance."""

    settings: SettingsStore
    host: HostSignals
    picker: PickerInvoker
    clipboard: ClipboardInvoker
    install_dir: str = field(default_factory=HueKeeperPaths.get_install_dir)
    trigger_keyword: str = HueKeeperPaths.TRIGGER_KEYWORD


def create_default_context(
    settings_path: Optional[str] = None,
    install_dir: Optional[str] = None,
    settings: Optional[SettingsStore] = None,
) -> HueKeeperContext:
    """
    Build a context wired to the real desktop.

    Args:
        settings_path: Custom settings file. If None, uses the default location.
        install_dir: Custom install directory holding bin/. If None, uses default.
        settings: Ready-made settings store, replaces the QSettings file

    Returns:
        HueKeeperContext using QSettings, notify-send and the platform tools
    """
    if settings is None:
        if settings_path is None:
            HueKeeperPaths.ensure_directories()
            settings_path = HueKeeperPaths.get_settings_path()
        settings = QSettingsStore(settings_path)
    install_dir = install_dir or HueKeeperPaths.get_install_dir()

    return HueKeeperContext(
        settings=settings,
        host=DesktopHost(),
        picker=PickerInvoker(install_dir=install_dir),
        clipboard=ClipboardInvoker(),
        install_dir=install_dir,
    )
