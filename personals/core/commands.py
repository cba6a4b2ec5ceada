"""Plugin command handlers for the personal list.

Each handler takes the session, the page source of the running map and the
command arguments, and returns the usual command result dictionary:
{"lines": [...], "hints": [...], "events_triggered": [...]}.
"""

from __future__ import annotations
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from .models import NpcRecord, PageSource, normalize_id
from .parser import extract_ids, parse_npc_blocks
from .state import PersonalSession

CommandResult = Dict[str, Any]


class CommandError(Exception):
    """Raised for commands this module does not handle."""
    pass


def _result(lines: List[str], events: Optional[List[str]] = None) -> CommandResult:
    return {"lines": lines, "hints": [], "events_triggered": events or []}


def enable_personal_menu(session: PersonalSession, source: Optional[PageSource], args: Sequence[str]) -> CommandResult:
    session.enable_menu()
    return _result([f"{session.menu_title} menu enabled."])


def disable_personal_menu(session: PersonalSession, source: Optional[PageSource], args: Sequence[str]) -> CommandResult:
    session.disable_menu()
    return _result([f"{session.menu_title} menu disabled."])


def add_personal_to_list(session: PersonalSession, source: Optional[PageSource], args: Sequence[str]) -> CommandResult:
    """Handle 'AddPersonalToList [id...]'.

    Without ids, every personal defined on the running event's page is added.
    With ids, the active pages of all map events are searched for each id.
    """
    registry = session.registry
    lines: List[str] = []
    events: List[str] = []

    def upsert(record: NpcRecord):
        is_new = not registry.has(record.id)
        registry.upsert(record)
        if is_new:
            lines.append(f"Added to {session.menu_title}: {record.name}")
            events.append(f"personal_added:{record.id}")
        else:
            lines.append(f"Updated in {session.menu_title}: {record.name}")

    if source is None:
        return _result(["No map loaded."])

    if args:
        for target in args:
            target_id = normalize_id(target)
            found = False
            for page in source.all_pages():
                for record in parse_npc_blocks(page, target_id):
                    upsert(record)
                    found = True
            if not found:
                logging.info(f"AddPersonalToList: no personal with id {target_id} on this map")
        return _result(lines, events)

    page = source.current_page()
    if not page:
        return _result(lines)
    for record in parse_npc_blocks(page):
        upsert(record)
    return _result(lines, events)


def remove_personal_from_list(session: PersonalSession, source: Optional[PageSource], args: Sequence[str]) -> CommandResult:
    """Handle 'RemovePersonalFromList [id...]'.

    Without ids, the personals defined on the running event's page are removed.
    """
    if args:
        ids = [normalize_id(a) for a in args]
    else:
        page = source.current_page() if source is not None else None
        if not page:
            return _result([])
        ids = extract_ids(page)

    lines: List[str] = []
    events: List[str] = []
    for npc_id in ids:
        record = session.registry.get(npc_id)
        if session.registry.remove(npc_id):
            lines.append(f"Removed from {session.menu_title}: {record.name}")
            events.append(f"personal_removed:{npc_id}")
    return _result(lines, events)


PLUGIN_COMMANDS: Dict[str, Callable[[PersonalSession, Optional[PageSource], Sequence[str]], CommandResult]] = {
    "EnablePersonalMenu": enable_personal_menu,
    "DisablePersonalMenu": disable_personal_menu,
    "AddPersonalToList": add_personal_to_list,
    "RemovePersonalFromList": remove_personal_from_list,
}


def is_plugin_command(command: str) -> bool:
    return command in PLUGIN_COMMANDS


def dispatch(session: PersonalSession, source: Optional[PageSource], command: str,
             args: Sequence[str] = ()) -> CommandResult:
    """Run a plugin command by name.

    Raises:
        CommandError: If the command is not a personal list command
    """
    handler = PLUGIN_COMMANDS.get(command)
    if handler is None:
        raise CommandError(f"Unknown plugin command: {command}")
    logging.debug(f"Plugin command {command} {' '.join(args)}".rstrip())
    return handler(session, source, list(args))


def run_plugin_command(session: PersonalSession, source: Optional[PageSource], text: str) -> CommandResult:
    """Split a raw plugin command line ('AddPersonalToList 1 2') and run it."""
    parts = text.split()
    if not parts:
        raise CommandError("Empty plugin command")
    return dispatch(session, source, parts[0], parts[1:])
