"""Session state for the personal list.

Owned by the host's game state container and passed to whoever needs it.
The registry entries and the menu flag are saved with the game; listeners
are not and must be registered again after a load.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from .models import FacePreloader, NpcRecord, PersonalCallback, PersonalId
from .persistence import restore_registry, snapshot_registry
from .registry import PersonalRegistry


@dataclass
class PersonalSession:
    registry: PersonalRegistry = field(default_factory=PersonalRegistry)
    menu_enabled: bool = True
    menu_title: str = "Personals"

    # --- Query/notification API for game logic ---
    def is_personal_added(self, npc_id: PersonalId) -> bool:
        return self.registry.has(npc_id)

    def on_personal_added(self, npc_id: PersonalId, callback: PersonalCallback):
        self.registry.on_added(npc_id, callback)

    def on_personal_removed(self, npc_id: PersonalId, callback: PersonalCallback):
        self.registry.on_removed(npc_id, callback)

    def personals(self) -> Tuple[NpcRecord, ...]:
        return self.registry.all()

    # --- Menu visibility ---
    def enable_menu(self):
        self.menu_enabled = True

    def disable_menu(self):
        self.menu_enabled = False

    # --- Save data ---
    def to_save_data(self) -> Dict[str, Any]:
        return {
            "menu_enabled": self.menu_enabled,
            "personal_list": snapshot_registry(self.registry),
        }

    @classmethod
    def from_save_data(cls, data: Dict[str, Any], preloader: Optional[FacePreloader] = None,
                       default_enabled: bool = True, menu_title: str = "Personals") -> "PersonalSession":
        """Rebuild a session from save data (missing keys fall back to defaults)."""
        if "personal_list" in data:
            registry = restore_registry(data["personal_list"], preloader=preloader)
        else:
            registry = PersonalRegistry(preloader=preloader)
        return cls(
            registry=registry,
            menu_enabled=bool(data.get("menu_enabled", default_enabled)),
            menu_title=menu_title,
        )
