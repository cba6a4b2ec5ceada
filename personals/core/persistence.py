"""Snapshot/restore of the personal list for the host's save system.

The host decides where and how the snapshot is written; these helpers only
convert the registry to plain JSON-compatible data and back.
"""
from __future__ import annotations
import logging
from typing import Any, Dict, Optional

import jsonschema

from .models import FacePreloader, NpcRecord
from .registry import PersonalRegistry
from .schema import SNAPSHOT_SCHEMA

# Snapshot format version - increment when making breaking changes
SNAPSHOT_VERSION = 1


class SnapshotError(Exception):
    """Exception raised when a snapshot cannot be restored."""
    pass


def snapshot_registry(registry: PersonalRegistry) -> Dict[str, Any]:
    """Convert the registry entries to a serializable dictionary.

    Listeners are process-local and are not part of the snapshot.
    """
    return {
        "version": SNAPSHOT_VERSION,
        "order": list(registry.entries.keys()),
        "entries": {npc_id: record.to_dict() for npc_id, record in registry.entries.items()},
    }


def restore_registry(data: Dict[str, Any], preloader: Optional[FacePreloader] = None) -> PersonalRegistry:
    """Rebuild a registry from a snapshot without notifying listeners.

    Raises:
        SnapshotError: If the data does not match the snapshot schema or was
            written by a newer version
    """
    try:
        jsonschema.validate(data, SNAPSHOT_SCHEMA)
    except jsonschema.ValidationError as e:
        raise SnapshotError(f"Invalid personal list snapshot: {e.message}")

    version = data["version"]
    if version > SNAPSHOT_VERSION:
        raise SnapshotError(f"Snapshot version {version} is newer than supported version {SNAPSHOT_VERSION}")

    order = data["order"]
    entries = data["entries"]
    if set(order) != set(entries):
        raise SnapshotError("Snapshot order does not match its entries")

    registry = PersonalRegistry(preloader=preloader)
    for npc_id in order:
        record = NpcRecord.from_dict(entries[npc_id])
        if record.id != npc_id:
            raise SnapshotError(f"Snapshot entry {npc_id} carries id {record.id}")
        registry.entries[npc_id] = record
        if record.face_sheet_name and preloader is not None:
            preloader.preload_face(record.face_sheet_name)

    logging.info(f"Restored {len(registry.entries)} personals from snapshot")
    return registry
