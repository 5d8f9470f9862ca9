"""
Result data produced for the host.

A query returns a list of ResultEntry objects. Each entry carries the
actions the host can offer for it; invoking an action runs the callback and
never lets an exception escape to the host.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

# Icon types understood by hosts
ICON_SVG = "svg"
ICON_EMOJI = "emoji"
ICON_RELATIVE = "relative"


@dataclass
class Icon:
    """Icon descriptor. Rendering is left to the host."""

    image_type: str
    image_data: str


@dataclass
class FormField:
    """Text input shown by a form action before it runs."""

    key: str
    label: str
    default_value: str = ""
    tooltip: str = ""
    max_lines: int = 1


@dataclass
class ResultAction:
    """An action attached to a result entry.

    Execute actions take no input. Form actions (form is non-empty) receive
    the submitted field values as a dict keyed by FormField.key.
    """

    name: str
    callback: Callable[[Dict[str, str]], None]
    is_default: bool = False
    prevent_hide: bool = False
    icon: Optional[Icon] = None
    form: List[FormField] = field(default_factory=list)
    on_error: Optional[Callable[[str], None]] = None

    def invoke(self, values: Optional[Dict[str, str]] = None) -> bool:
        """
        Run the action.

        Args:
            values: Submitted form values (form actions only)

        Returns:
            True if the callback completed, False if it raised
        """
        try:
            self.callback(dict(values or {}))
            return True
        except Exception as e:
            logger.exception(f"Action '{self.name}' failed")
            if self.on_error is not None:
                self.on_error(f"{self.name} failed: {e}")
            return False


@dataclass
class ResultEntry:
    """A single row in the host's result list."""

    title: str
    subtitle: str = ""
    id: str = ""
    icon: Optional[Icon] = None
    group: str = ""
    group_score: int = 0
    actions: List[ResultAction] = field(default_factory=list)

    def default_action(self) -> Optional[ResultAction]:
        """Get the action the host runs on Enter."""
        for action in self.actions:
            if action.is_default:
                return action
        return self.actions[0] if self.actions else None

    def find_action(self, name: str) -> Optional[ResultAction]:
        """Look up an action by name."""
        for action in self.actions:
            if action.name == name:
                return action
        return None
