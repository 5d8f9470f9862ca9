"""
HueKeeper query handler and command routing.

A host hands every query to QueryHandler.handle() as a (command, search text)
pair:

- no command: search favorites and history
- "pick": offer to pick a new color from the screen
- anything else: explain that the command is unknown
"""

import logging
from typing import List

from huekeeper.context import HueKeeperContext
from huekeeper.query import ACTION_PICK, APP_ICON, QueryEngine
from huekeeper.registry import ColorRegistry
from huekeeper.results import ResultAction, ResultEntry
from huekeeper.utils.settings_store import SettingsAdapter, SettingsWriteError

logger = logging.getLogger(__name__)

COMMAND_PICK = "pick"
COMMANDS = (COMMAND_PICK,)


class QueryHandler:
    """Entry point a launcher (or the CLI host) talks to."""

    def __init__(self, context: HueKeeperContext):
        self.context = context
        self.registry = ColorRegistry(SettingsAdapter(context.settings))
        self.engine = QueryEngine(context, self.registry)

    @property
    def host(self):
        return self.context.host

    def init(self) -> None:
        """Called once by the host after loading the plugin."""
        self.host.log("Info", "Init finished")

    def handle(self, command: str, search_text: str) -> List[ResultEntry]:
        """
        Answer a query.

        Args:
            command: Command word after the trigger keyword, or "" for search
            search_text: Remaining query text

        Returns:
            Result entries for the host to display
        """
        command = (command or "").strip()

        if not command:
            return self.engine.search(search_text)

        if command == COMMAND_PICK:
            return [self.build_pick_result()]

        logger.info(f"Unknown command: {command}")
        return [
            ResultEntry(
                title=f"Unknown command: {command}",
                subtitle=f"Available commands: {', '.join(COMMANDS)}",
                icon=APP_ICON,
            )
        ]

    def build_pick_result(self) -> ResultEntry:
        return ResultEntry(
            title="Pick a color",
            subtitle="Click anywhere on screen to save its color to the history",
            icon=APP_ICON,
            actions=[
                ResultAction(
                    name=ACTION_PICK,
                    callback=lambda _values: self.pick_color(),
                    is_default=True,
                    on_error=lambda message: self.host.notify(message, error=True),
                )
            ],
        )

    def pick_color(self) -> None:
        """Run the picker and record the picked color."""
        outcome = self.context.picker.pick()

        if not outcome.succeeded:
            if outcome.invalid_output:
                # Logged by the picker, no notification
                return
            self.host.notify(f"Color picker failed: {outcome.error}", error=True)
            return

        try:
            color = self.registry.record_pick(outcome.color)
        except SettingsWriteError as e:
            logger.error(f"Picked {outcome.color} but could not record it: {e}")
            self.host.notify(f"{e} ({outcome.color})", error=True)
            return
        if color is None:
            return

        self.host.notify(f"Picked {color}")
        self.host.hide_ui()
