"""Map loader - reads event pages from RPG Maker style map JSON files.

Each event has a list of pages, each page a list of commands
({"code": ..., "parameters": [...]}). Comment commands (108 for the first
line, 408 for the following ones) carry the personal definitions.
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

from .models import CommentLine

COMMENT_CODE = 108
COMMENT_CONTINUATION_CODE = 408
COMMENT_CODES = (COMMENT_CODE, COMMENT_CONTINUATION_CODE)


class MapLoadError(Exception):
    """Exception raised when a map file cannot be loaded."""
    pass


class MapEvent:
    """A map event with its pages already converted to comment lines."""

    def __init__(self, event_id: int, name: str, pages: List[List[CommentLine]], page_index: int = 0):
        self.id = event_id
        self.name = name
        self.pages = pages
        self.page_index = page_index

    def active_page(self) -> Optional[List[CommentLine]]:
        if 0 <= self.page_index < len(self.pages):
            return self.pages[self.page_index]
        return None


def _page_lines(cmd_list: List[Any]) -> List[CommentLine]:
    """Convert an event command list to parser input."""
    lines: List[CommentLine] = []
    if not isinstance(cmd_list, list):
        return lines
    for cmd in cmd_list:
        if not isinstance(cmd, dict):
            continue
        code = cmd.get("code")
        if code in COMMENT_CODES:
            params = cmd.get("parameters")
            if not isinstance(params, list) or not params:
                params = [""]
            lines.append(CommentLine(str(params[0]), True))
        else:
            lines.append(CommentLine("", False))
    return lines


def _as_int(value: Any, default: Optional[int] = None) -> Optional[int]:
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def build_events_from_dict(data: Dict[str, Any]) -> Dict[int, MapEvent]:
    """Build map events from decoded map data.

    Null event slots are skipped; events with a malformed id or page index
    are skipped with a warning.

    Raises:
        MapLoadError: If "events" is neither a list nor null
    """
    raw_events = data.get("events") or []
    if not isinstance(raw_events, list):
        raise MapLoadError(f"Map events must be a list, got {type(raw_events).__name__}")
    events: Dict[int, MapEvent] = {}
    for raw in raw_events:
        if not raw or not isinstance(raw, dict):
            continue
        name = raw.get("name") or ""
        if "id" not in raw:
            logging.warning(f"Skipping map event without id: {name or '?'}")
            continue
        event_id = _as_int(raw["id"])
        if event_id is None:
            logging.warning(f"Skipping map event with invalid id {raw['id']!r}: {name or '?'}")
            continue
        page_index = _as_int(raw.get("pageIndex"), 0)
        if page_index is None:
            logging.warning(f"Skipping map event {event_id} with invalid pageIndex {raw.get('pageIndex')!r}")
            continue
        raw_pages = raw.get("pages") or []
        if not isinstance(raw_pages, list):
            logging.warning(f"Map event {event_id} has no page list, treating it as empty")
            raw_pages = []
        # Malformed pages become empty slots; positions match pageIndex
        pages = [
            _page_lines(page.get("list")) if isinstance(page, dict) else []
            for page in raw_pages
        ]
        events[event_id] = MapEvent(event_id=event_id, name=str(name), pages=pages, page_index=page_index)
    return events


class MapEventSource:
    """Page source over the events of one map."""

    def __init__(self, events: Dict[int, MapEvent], current_event_id: Optional[int] = None):
        self.events = events
        self.current_event_id = current_event_id

    def current_page(self) -> Optional[List[CommentLine]]:
        event = self.events.get(self.current_event_id)
        return event.active_page() if event else None

    def all_pages(self) -> Iterator[List[CommentLine]]:
        for event in self.events.values():
            page = event.active_page()
            if page is not None:
                yield page

    def set_page_index(self, event_id: int, page_index: int) -> bool:
        event = self.events.get(event_id)
        if not event:
            return False
        event.page_index = page_index
        return True


def load_map(path: Union[str, Path]) -> MapEventSource:
    """Load a map JSON file.

    Raises:
        MapLoadError: If the file is missing, is not valid JSON or has a malformed event list
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise MapLoadError(f"Failed to load map {path}: {e}")
    if not isinstance(data, dict):
        raise MapLoadError(f"Map {path} must contain a JSON object")
    events = build_events_from_dict(data)
    logging.info(f"Loaded map {path} with {len(events)} events")
    return MapEventSource(events)
