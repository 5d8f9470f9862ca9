"""
Host signals for HueKeeper.

The host is whatever displays HueKeeper's results: a launcher, or the
command-line host in huekeeper.cli. The core only talks to it through the
one-way signals defined by HostSignals.
"""

import logging
from typing import List, Optional

from huekeeper.utils.notifications import NotificationSystem

logger = logging.getLogger(__name__)

# Host log level names -> logging levels
LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


class HostSignals:
    """One-way signals from the core to the host UI."""

    def notify(self, message: str, error: bool = False) -> None:
        raise NotImplementedError

    def log(self, level: str, message: str) -> None:
        raise NotImplementedError

    def hide_ui(self) -> None:
        raise NotImplementedError

    def refresh_results(self, preserve_selected_index: bool = True) -> None:
        raise NotImplementedError

    def change_query(self, query_text: str) -> None:
        raise NotImplementedError


class DesktopHost(HostSignals):
    """Host for running HueKeeper outside a launcher.

    Notifications become desktop notifications and log calls go to the
    logging module. UI signals are recorded so the command-line host can
    act on them after an action finished.
    """

    def __init__(self, notifications: Optional[NotificationSystem] = None):
        self.notifications = notifications or NotificationSystem()
        self.messages: List[str] = []
        self.hidden = False
        self.refresh_requested = False
        self.pending_query: Optional[str] = None

    def notify(self, message: str, error: bool = False) -> None:
        self.messages.append(message)
        if error:
            self.notifications.send_error(message)
        else:
            self.notifications.send(message)

    def log(self, level: str, message: str) -> None:
        logger.log(LOG_LEVELS.get(level.lower(), logging.INFO), message)

    def hide_ui(self) -> None:
        self.hidden = True

    def refresh_results(self, preserve_selected_index: bool = True) -> None:
        self.refresh_requested = True

    def change_query(self, query_text: str) -> None:
        self.pending_query = query_text
