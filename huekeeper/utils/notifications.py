"""
Desktop notification system for HueKeeper.

Notifications go through notify-send, so they show up in whatever
notification daemon the desktop runs. When notify-send is missing the
message is only logged.
"""

import logging
import subprocess
from typing import Optional

logger = logging.getLogger(__name__)


class NotificationTimeouts:
    """Timeout constants for notifications (milliseconds)."""

    NOTIFICATION_DISPLAY_MS = 3000
    ERROR_NOTIFICATION_MS = 5000


class NotificationSystem:
    """Handles desktop notifications for HueKeeper."""

    APP_NAME = "HueKeeper"

    def __init__(self, available: Optional[bool] = None):
        """
        Initialize the notification system.

        Args:
            available: Force availability instead of probing for notify-send
        """
        if available is None:
            available = self._check_notification_support()
        self.notification_available = available

    def _check_notification_support(self) -> bool:
        try:
            result = subprocess.run(
                ["which", "notify-send"],
                capture_output=True,
                timeout=2,
            )
            return result.returncode == 0
        except Exception as e:
            logger.warning(f"Failed to check for notify-send: {e}")
            return False

    def send(
        self,
        message: str,
        title: str = "HueKeeper",
        urgency: str = "normal",
        icon: str = "color-select",
        timeout_ms: int = NotificationTimeouts.NOTIFICATION_DISPLAY_MS,
    ) -> bool:
        """
        Send a desktop notification.

        Args:
            message: Notification message body
            title: Notification title
            urgency: Urgency level ("low", "normal", or "critical")
            icon: Icon name to display
            timeout_ms: How long the notification stays visible

        Returns:
            True if notify-send was launched, False otherwise
        """
        if not self.notification_available:
            logger.info(f"Notification not available: {title} - {message}")
            return False

        try:
            subprocess.Popen(
                [
                    "notify-send",
                    "-i", icon,
                    "-u", urgency,
                    "-t", str(timeout_ms),
                    "-a", self.APP_NAME,
                    title,
                    message,
                ],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
            return True
        except Exception as e:
            logger.error(f"Failed to send notification: {e}")
            return False

    def send_error(self, message: str) -> bool:
        """Show an error notification."""
        return self.send(
            message,
            title=f"{self.APP_NAME} - Error",
            urgency="critical",
            icon="dialog-error",
            timeout_ms=NotificationTimeouts.ERROR_NOTIFICATION_MS,
        )
