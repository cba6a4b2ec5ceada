"""Comment block parser for personal (NPC) definitions.

Event pages describe personals with comment lines like:

    Type: NPC
    ID: 1
    Name: John, the Innkeeper
    Category: Bartender
    Face: Actor1, 3
    Icon: 1,2,3
    Details: John has served travelers for years,
    and always has a story to tell.

Recognized keys:
- Type: starts a new block when the value contains NPC
- ID / Name / Category: plain text fields
- Face: sheet name and optional face index
- Icon: up to 3 icon indexes
- Details: description; following unrecognized lines are appended to it
"""

from __future__ import annotations
import re
from typing import Iterable, List, Optional

from .models import CommentLine, MAX_ICONS, NpcRecord, PersonalId, normalize_id

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_int(text: Optional[str]) -> Optional[int]:
    """Parse the leading integer of ``text`` ("3abc" -> 3, "abc" -> None)."""
    if text is None:
        return None
    match = _LEADING_INT.match(text)
    if not match:
        return None
    return int(match.group(1))


class _Draft:
    """Record under construction while scanning a block."""

    def __init__(self):
        self.type_is_npc = True
        self.id = ""
        self.name = ""
        self.category = ""
        self.face_sheet_name = ""
        self.face_index = 0
        self.icon_ids: List[int] = []
        self.description = ""

    def is_complete(self) -> bool:
        return self.type_is_npc and bool(self.name) and bool(self.id)

    def to_record(self) -> NpcRecord:
        return NpcRecord(
            id=self.id,
            name=self.name,
            category=self.category,
            face_sheet_name=self.face_sheet_name,
            face_index=self.face_index,
            icon_ids=tuple(self.icon_ids),
            description=self.description,
        )


def _is_npc_type_line(line: str) -> bool:
    return line.startswith("Type:") and "NPC" in line[len("Type:"):]


def _apply_face(draft: _Draft, value: str):
    parts = value.split(",")
    draft.face_sheet_name = parts[0].strip()
    index = parse_int(parts[1]) if len(parts) > 1 else None
    draft.face_index = index if index is not None else 0


def _apply_icons(draft: _Draft, value: str):
    icons = []
    for part in value.split(","):
        icon = parse_int(part.strip())
        if icon is not None:
            icons.append(icon)
    draft.icon_ids = icons[:MAX_ICONS]


def parse_npc_blocks(lines: Iterable[CommentLine], wanted_id: Optional[PersonalId] = None) -> List[NpcRecord]:
    """Extract personal records from the comment lines of an event page.

    Args:
        lines: Page lines in order; non-comment lines only end a Details
            continuation
        wanted_id: If given, only records with this id are returned

    Returns:
        Complete records in block order. Blocks sharing an id are returned
        separately; merging them is up to the registry.
    """
    wanted = normalize_id(wanted_id) if wanted_id is not None else None
    results: List[NpcRecord] = []
    draft: Optional[_Draft] = None
    reading_details = False

    def finalize():
        if draft is not None and draft.is_complete():
            if wanted is None or draft.id == wanted:
                results.append(draft.to_record())

    for entry in lines:
        if not entry.is_comment:
            reading_details = False
            continue

        raw = entry.text
        line = raw.strip()

        if _is_npc_type_line(line):
            finalize()
            draft = _Draft()
            reading_details = False
            continue

        if draft is None:
            continue

        if line.startswith("ID:"):
            draft.id = line[3:].strip()
            reading_details = False
        elif line.startswith("Name:"):
            draft.name = line[5:].strip()
            reading_details = False
        elif line.startswith("Category:"):
            draft.category = line[9:].strip()
            reading_details = False
        elif line.startswith("Face:"):
            _apply_face(draft, line[5:])
            reading_details = False
        elif line.startswith("Icon:"):
            _apply_icons(draft, line[5:])
            reading_details = False
        elif line.startswith("Details:"):
            draft.description = line[8:].strip()
            reading_details = True
        elif reading_details:
            # Continuation text is kept as authored
            draft.description += "\n" + raw

    finalize()
    return results


def extract_ids(lines: Iterable[CommentLine]) -> List[str]:
    """Ids of every complete block on a page, in order (duplicates kept)."""
    return [record.id for record in parse_npc_blocks(lines)]
