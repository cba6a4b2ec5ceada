"""Minimal text host for the personal list.

Usage (example):
    python run.py [map.json]
Then type plugin commands or viewer commands:
    AddPersonalToList
    list
    show 1
    next
"""
from __future__ import annotations
import difflib
import logging
import sys
from pathlib import Path
from typing import Optional

from game.bootstrap import create_pager, load_map_and_session
from personals.core.commands import CommandError, is_plugin_command, run_plugin_command
from personals.core.loader import MapLoadError
from config import get_log_level

PROMPT = "> "

COMMAND_HELP = {
    'EnablePersonalMenu': {'usage': 'EnablePersonalMenu', 'desc': 'Enable the personal list menu.'},
    'DisablePersonalMenu': {'usage': 'DisablePersonalMenu', 'desc': 'Disable the personal list menu.'},
    'AddPersonalToList': {'usage': 'AddPersonalToList [id ...]', 'desc': 'Add the current event\'s personals, or the given ids from any event.'},
    'RemovePersonalFromList': {'usage': 'RemovePersonalFromList [id ...]', 'desc': 'Remove the current event\'s personals, or the given ids.'},
    'event': {'usage': 'event <id> [page]', 'desc': 'Select the running event (and optionally its active page).'},
    'events': {'usage': 'events', 'desc': 'List the map events.'},
    'list': {'usage': 'list', 'desc': 'Show the collected personals.'},
    'show': {'usage': 'show <id>', 'desc': 'Show a personal and the first page of its details.'},
    'next': {'usage': 'next', 'desc': 'Next details page.'},
    'prev': {'usage': 'prev', 'desc': 'Previous details page.'},
    'help': {'usage': 'help [command]', 'desc': 'List commands, or show the usage of one.'},
    'quit': {'usage': 'quit | exit', 'desc': 'Leave.'},
}


def help_lines():
    lines = ["Available commands:"]
    max_usage = max(len(info['usage']) for info in COMMAND_HELP.values())
    for name, info in COMMAND_HELP.items():
        lines.append(f" {info['usage'].ljust(max_usage)}  - {info['desc']}")
    return lines


def render_page(pager):
    lines = list(pager.current_page())
    footer = pager.footer()
    if footer:
        lines.append(footer.rjust(40))
    return lines


def render_header(record):
    lines = [f"== {record.name} =="]
    if record.category:
        lines.append(f"   {record.category}")
    if record.face_sheet_name:
        lines.append(f"   Face: {record.face_sheet_name} #{record.face_index}")
    if record.icon_ids:
        lines.append("   Icons: " + " ".join(f"[{i}]" for i in record.icon_ids))
    return lines


def game_loop(map_path: Optional[Path] = None):
    try:
        source, session = load_map_and_session(map_path)
    except MapLoadError as e:
        print(f"[ERROR] {e}")
        return
    pager = create_pager()
    print(f"-- {len(source.events)} events loaded. Type 'help' for the command list. --")

    while True:
        try:
            cmd = input(PROMPT).strip()
        except EOFError:
            break
        if not cmd:
            continue
        if cmd in {"quit", "exit"}:
            print("Goodbye.")
            break
        parts = cmd.split()
        name, args = parts[0], parts[1:]

        if name == "help":
            if not args:
                for line in help_lines():
                    print(line)
                continue
            info = COMMAND_HELP.get(args[0])
            if info:
                print(f"Usage: {info['usage']}\n{info['desc']}")
            else:
                close = difflib.get_close_matches(args[0], COMMAND_HELP.keys(), n=3)
                suffix = f" Did you mean: {', '.join(close)}" if close else ""
                print(f"Command '{args[0]}' not found.{suffix}")
            continue

        if is_plugin_command(name):
            try:
                res = run_plugin_command(session, source, cmd)
            except CommandError as e:
                print(f"[ERROR] {e}")
                continue
            for line in res["lines"]:
                print(line)
            continue

        if name == "events":
            for event in source.events.values():
                marker = "*" if event.id == source.current_event_id else " "
                print(f"{marker} {event.id}: {event.name} (page {event.page_index + 1}/{len(event.pages)})")
        elif name == "event":
            if not args or not args[0].isdigit():
                print("Usage: event <id> [page]")
                continue
            event_id = int(args[0])
            if event_id not in source.events:
                print(f"No event {event_id} on this map.")
                continue
            source.current_event_id = event_id
            if len(args) > 1 and args[1].isdigit():
                source.set_page_index(event_id, int(args[1]) - 1)
            print(f"Running event {event_id}.")
        elif name == "list":
            if not session.menu_enabled:
                print(f"The {session.menu_title} menu is disabled.")
                continue
            personals = session.personals()
            print(f"=== {session.menu_title} ===")
            if not personals:
                print("Nobody yet.")
            for record in personals:
                print(f" {record.id}: {record.name}")
        elif name == "show":
            if not args:
                print("Usage: show <id>")
                continue
            record = session.registry.get(args[0])
            if not record:
                print(f"Personal '{args[0]}' is not in the list.")
                continue
            for line in render_header(record):
                print(line)
            pager.set_text(record.description)
            for line in render_page(pager):
                print(line)
        elif name in {"next", "prev"}:
            moved = pager.next_page() if name == "next" else pager.previous_page()
            if moved:
                for line in render_page(pager):
                    print(line)
        else:
            close = difflib.get_close_matches(name, COMMAND_HELP.keys(), n=3)
            suffix = f" Did you mean: {', '.join(close)}" if close else ""
            print(f"Unknown command '{name}'.{suffix}")


def main():
    logging.basicConfig(level=get_log_level(), format="%(levelname)s %(name)s: %(message)s")
    try:
        # Force UTF-8 output on Windows so the page footer arrows print
        sys.stdout.reconfigure(encoding='utf-8')
    except AttributeError:
        pass
    map_path = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    game_loop(map_path)


if __name__ == "__main__":
    main()
