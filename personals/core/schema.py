"""JSON schema for personal list snapshots.

Snapshots are stored by the host inside its own save data; this schema
guards the restore path against hand-edited or foreign saves.
"""

NPC_RECORD_SCHEMA = {
    "type": "object",
    "required": ["id", "name"],
    "properties": {
        "id": {"type": "string", "minLength": 1},
        "name": {"type": "string", "minLength": 1},
        "category": {"type": "string"},
        "face_sheet_name": {"type": "string"},
        "face_index": {"type": "integer"},
        "icon_ids": {"type": "array", "items": {"type": "integer"}, "maxItems": 3},
        "description": {"type": "string"}
    },
    "additionalProperties": False
}

SNAPSHOT_SCHEMA = {
    "type": "object",
    "required": ["version", "order", "entries"],
    "properties": {
        "version": {"type": "integer", "minimum": 1},
        "order": {"type": "array", "items": {"type": "string"}, "uniqueItems": True},
        "entries": {
            "type": "object",
            "additionalProperties": NPC_RECORD_SCHEMA
        }
    },
    "additionalProperties": False
}
