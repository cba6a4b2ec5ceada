"""Registry of collected personals with add/remove notifications."""

from __future__ import annotations
import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Tuple

from .models import FacePreloader, NpcRecord, PersonalCallback, PersonalId, normalize_id


class PersonalRegistry:
    """Collected personals in discovery order.

    Listeners are registered per id and are never persisted; game logic
    registers them again on every session start.
    """

    def __init__(self, preloader: Optional[FacePreloader] = None):
        self.entries: Dict[str, NpcRecord] = {}
        self.listeners: Dict[str, Dict[str, List[PersonalCallback]]] = {}
        self.preloader = preloader

    def upsert(self, record: NpcRecord):
        """Insert a new personal or overwrite an existing one in place.

        Only an insertion notifies the ``added`` listeners.
        """
        npc_id = normalize_id(record.id)
        if record.id != npc_id:
            record = replace(record, id=npc_id)
        is_new = npc_id not in self.entries
        # Dict assignment keeps the position of existing keys
        self.entries[npc_id] = record
        if record.face_sheet_name and self.preloader is not None:
            self.preloader.preload_face(record.face_sheet_name)
        if is_new:
            logging.info(f"Personal {npc_id} added to list")
            self._trigger(npc_id, "added")

    def upsert_many(self, records: Iterable[NpcRecord]):
        for record in records:
            self.upsert(record)

    def remove(self, npc_id: PersonalId) -> bool:
        """Remove a personal. Returns True if it was in the list."""
        npc_id = normalize_id(npc_id)
        if npc_id not in self.entries:
            return False
        del self.entries[npc_id]
        logging.info(f"Personal {npc_id} removed from list")
        self._trigger(npc_id, "removed")
        return True

    def remove_many(self, ids: Iterable[PersonalId]):
        for npc_id in ids:
            self.remove(npc_id)

    def has(self, npc_id: PersonalId) -> bool:
        return normalize_id(npc_id) in self.entries

    def get(self, npc_id: PersonalId) -> Optional[NpcRecord]:
        return self.entries.get(normalize_id(npc_id))

    def all(self) -> Tuple[NpcRecord, ...]:
        """Snapshot of the list in display order."""
        return tuple(self.entries.values())

    def on_added(self, npc_id: PersonalId, callback: PersonalCallback):
        self._listeners_for(npc_id)["added"].append(callback)

    def on_removed(self, npc_id: PersonalId, callback: PersonalCallback):
        self._listeners_for(npc_id)["removed"].append(callback)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, npc_id) -> bool:
        return self.has(npc_id)

    def _listeners_for(self, npc_id: PersonalId) -> Dict[str, List[PersonalCallback]]:
        npc_id = normalize_id(npc_id)
        if npc_id not in self.listeners:
            self.listeners[npc_id] = {"added": [], "removed": []}
        return self.listeners[npc_id]

    def _trigger(self, npc_id: str, event: str):
        callbacks = self.listeners.get(npc_id, {}).get(event, [])
        # Copy so callbacks registered during dispatch wait for the next event
        for callback in list(callbacks):
            callback(npc_id)
