#!/usr/bin/env python3
"""
HueKeeper CLI interface and command routing.

This module handles command-line argument parsing and acts as a minimal
host for the query handler: it prints results, and runs the same actions a
launcher would offer (copy, favorite, keywords, remove, pick).

Main entry point: huekeeper/__main__.py or the huekeeper console script.
"""

import argparse
import logging
import sys
from typing import List, Optional

from huekeeper.context import HueKeeperContext, create_default_context
from huekeeper.plugin import COMMAND_PICK, QueryHandler
from huekeeper.query import (
    ACTION_COPY,
    ACTION_EDIT_KEYWORDS,
    ACTION_FAVORITE,
    ACTION_REMOVE_HISTORY,
    ACTION_UNFAVORITE,
    KEYWORD_FIELD,
)
from huekeeper.results import ResultAction, ResultEntry
from huekeeper.utils.color_codec import normalize
from huekeeper.utils.settings_store import MemorySettingsStore, SettingsWriteError

logger = logging.getLogger(__name__)

MEMORY_SETTINGS = ":memory:"


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def build_context(args) -> HueKeeperContext:
    """Create the runtime context from command-line options."""
    if args.settings == MEMORY_SETTINGS:
        return create_default_context(install_dir=args.install_dir, settings=MemorySettingsStore())
    return create_default_context(settings_path=args.settings, install_dir=args.install_dir)


def print_results(results: List[ResultEntry]) -> None:
    """Print result entries as a grouped table."""
    current_group = None
    for entry in results:
        if entry.group != current_group:
            current_group = entry.group
            if current_group:
                print(f"\n{current_group}")
                print("-" * 60)
        actions = ", ".join(action.name for action in entry.actions)
        print(f"{entry.title:<10} {entry.subtitle:<30} [{actions}]")


def find_color_entry(handler: QueryHandler, raw_color: str) -> Optional[ResultEntry]:
    """Find the result entry for a color among favorites and history."""
    color = normalize(raw_color)
    if color is None:
        print(f"Error: '{raw_color}' is not a color (expected RRGGBB or #RRGGBB)")
        return None

    for entry in handler.handle("", color.lower()):
        if entry.title == color:
            return entry

    print(f"Color {color} is not in favorites or history")
    return None


def run_action(handler: QueryHandler, action: ResultAction, values=None) -> int:
    """Invoke an action and report any notification it produced."""
    host = handler.host
    before = len(host.messages)
    ok = action.invoke(values)

    for message in host.messages[before:]:
        print(message)

    if host.pending_query:
        print(f"Try: {host.pending_query}")
    return 0 if ok else 1


def cmd_query(handler: QueryHandler, args) -> int:
    """Handle query command."""
    results = handler.handle(args.command or "", args.query)
    print_results(results)
    return 0


def cmd_pick(handler: QueryHandler, args) -> int:
    """Handle pick command."""
    entry = handler.handle(COMMAND_PICK, "")[0]
    action = entry.default_action()

    print("Pick a color on screen...")
    code = run_action(handler, action)
    if not handler.host.hidden:
        # The host is only hidden after a color was recorded
        return 1
    return code


def cmd_record(handler: QueryHandler, args) -> int:
    """Add a color to the history without running the picker."""
    try:
        color = handler.registry.record_pick(args.record)
    except SettingsWriteError as e:
        print(f"Error: {e}")
        return 1
    if color is None:
        print(f"Error: '{args.record}' is not a color (expected RRGGBB or #RRGGBB)")
        return 1
    print(f"Recorded {color}")
    return 0


def cmd_copy(handler: QueryHandler, args) -> int:
    """Handle copy command."""
    entry = find_color_entry(handler, args.copy)
    if entry is None:
        return 1
    return run_action(handler, entry.find_action(ACTION_COPY))


def cmd_favorite(handler: QueryHandler, args) -> int:
    """Toggle a color's favorite state."""
    entry = find_color_entry(handler, args.favorite)
    if entry is None:
        return 1

    action = entry.find_action(ACTION_FAVORITE) or entry.find_action(ACTION_UNFAVORITE)
    code = run_action(handler, action)
    if code == 0:
        print(f"{entry.title}: {action.name.lower()} done")
    return code


def cmd_keywords(handler: QueryHandler, args) -> int:
    """Set the keywords of a color."""
    raw_color, keyword_text = args.keywords
    entry = find_color_entry(handler, raw_color)
    if entry is None:
        return 1

    code = run_action(handler, entry.find_action(ACTION_EDIT_KEYWORDS), {KEYWORD_FIELD: keyword_text})
    if code == 0:
        keywords = handler.registry.keywords().get(entry.title, [])
        print(f"{entry.title}: {', '.join(keywords) if keywords else '(no keywords)'}")
    return code


def cmd_remove(handler: QueryHandler, args) -> int:
    """Remove a color from the history."""
    entry = find_color_entry(handler, args.remove)
    if entry is None:
        return 1

    action = entry.find_action(ACTION_REMOVE_HISTORY)
    if action is None:
        print(f"{entry.title} is not in the history")
        return 1

    code = run_action(handler, action)
    if code == 0:
        print(f"Removed {entry.title} from history")
    return code


def cmd_test_clipboard(handler: QueryHandler, args) -> int:
    """Test clipboard functionality."""
    print("Testing clipboard availability...")

    if handler.context.clipboard.is_available():
        print("✅ Clipboard is available")
        return 0
    print("❌ Clipboard is not available")
    return 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI interface."""
    parser = argparse.ArgumentParser(
        description="HueKeeper - Pick, keep and find screen colors",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --pick                           # Pick a color from the screen
  %(prog)s --query                          # List favorites and history
  %(prog)s --query "brand blue"             # Search hex codes and keywords
  %(prog)s --copy 1A2B3C                    # Copy a color to the clipboard
  %(prog)s --favorite "#1A2B3C"             # Toggle favorite
  %(prog)s --keywords 1A2B3C "brand, logo"  # Replace keywords ("" clears)
  %(prog)s --remove 1A2B3C                  # Remove from history
        """,
    )

    # Commands
    parser.add_argument(
        "--query", nargs="?", const="", metavar="TEXT",
        help="Search favorites and history (empty lists everything)",
    )
    parser.add_argument(
        "--command", metavar="CMD",
        help="Launcher command to send along with --query (e.g. pick)",
    )
    parser.add_argument("--pick", action="store_true", help="Pick a color from the screen")
    parser.add_argument("--record", metavar="COLOR", help="Add a color to the history")
    parser.add_argument("--copy", metavar="COLOR", help="Copy a color to the clipboard")
    parser.add_argument("--favorite", metavar="COLOR", help="Toggle a color's favorite state")
    parser.add_argument(
        "--keywords", nargs=2, metavar=("COLOR", "TEXT"),
        help="Set comma separated keywords for a color",
    )
    parser.add_argument("--remove", metavar="COLOR", help="Remove a color from the history")
    parser.add_argument(
        "--test-clipboard", action="store_true", help="Test clipboard functionality"
    )

    # Configuration
    parser.add_argument(
        "--settings", metavar="PATH",
        help=f"Settings file (default: ~/.config/huekeeper/settings.ini, '{MEMORY_SETTINGS}' for none)",
    )
    parser.add_argument(
        "--install-dir", metavar="PATH",
        help="Directory containing bin/ with the bundled color pickers",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    # Parse arguments
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    handler = QueryHandler(build_context(args))
    handler.init()

    # Execute commands
    if args.pick:
        return cmd_pick(handler, args)
    elif args.record:
        return cmd_record(handler, args)
    elif args.copy:
        return cmd_copy(handler, args)
    elif args.favorite:
        return cmd_favorite(handler, args)
    elif args.keywords:
        return cmd_keywords(handler, args)
    elif args.remove:
        return cmd_remove(handler, args)
    elif args.test_clipboard:
        return cmd_test_clipboard(handler, args)
    elif args.query is not None or args.command:
        args.query = args.query or ""
        return cmd_query(handler, args)
    else:
        parser.print_help()
        return 0
