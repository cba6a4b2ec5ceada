"""Personal list data models and host capability interfaces."""

from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Any, Callable, Dict, Iterable, List, Optional, Protocol, Tuple, Union

# Maximum number of icons shown next to a personal
MAX_ICONS = 3

PersonalId = Union[str, int, float]
PersonalCallback = Callable[[str], Any]


def normalize_id(value: PersonalId) -> str:
    """Return the canonical string form of a personal id.

    Game logic may pass ids as numbers (``7``) or strings (``"7"``); both must
    address the same entry. Integral floats collapse to their integer form.
    """
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True)
class CommentLine:
    """One line of an event page, as seen by the record parser."""
    text: str
    is_comment: bool = True


@dataclass(frozen=True)
class NpcRecord:
    """A collected personal (NPC) entry."""
    id: str
    name: str
    category: str = ""
    face_sheet_name: str = ""  # empty = no face image
    face_index: int = 0
    icon_ids: Tuple[int, ...] = field(default_factory=tuple)
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["icon_ids"] = list(self.icon_ids)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NpcRecord":
        return cls(
            id=normalize_id(data["id"]),
            name=data.get("name", ""),
            category=data.get("category", ""),
            face_sheet_name=data.get("face_sheet_name", ""),
            face_index=int(data.get("face_index", 0)),
            icon_ids=tuple(data.get("icon_ids", []))[:MAX_ICONS],
            description=data.get("description", ""),
        )


class PageSource(Protocol):
    """Provides the comment content of map event pages."""

    def current_page(self) -> Optional[List[CommentLine]]:
        """Active page of the event running the command, or None."""

    def all_pages(self) -> Iterable[List[CommentLine]]:
        """Active page of every event on the current map."""


class TextMeasurer(Protocol):
    def __call__(self, text: str) -> int: ...


class FacePreloader(Protocol):
    def preload_face(self, sheet_name: str) -> None: ...
