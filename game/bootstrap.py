"""Bootstrap utilities: load a map JSON and create the personal list session."""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional, Tuple

from personals.core.faces import HttpFacePreloader
from personals.core.loader import MapEventSource, load_map
from personals.core.paginator import DescriptionPager, MonospaceMeasurer
from personals.core.registry import PersonalRegistry
from personals.core.state import PersonalSession
from config import (
    get_char_width,
    get_enable_initial,
    get_face_base_url,
    get_face_timeout,
    get_line_height,
    get_menu_title,
    get_page_label,
    get_viewport_height,
    get_viewport_width,
)

ASSETS_DIR = Path(__file__).resolve().parent.parent / "assets" / "maps"
MAP_FILE = ASSETS_DIR / "map001.json"


def create_face_preloader() -> Optional[HttpFacePreloader]:
    """HTTP preloader if PL_FACE_BASE_URL is configured, otherwise None."""
    base_url = get_face_base_url()
    if not base_url:
        return None
    return HttpFacePreloader(base_url, timeout=get_face_timeout())


def new_session(preloader: Optional[HttpFacePreloader] = None) -> PersonalSession:
    return PersonalSession(
        registry=PersonalRegistry(preloader=preloader),
        menu_enabled=get_enable_initial(),
        menu_title=get_menu_title(),
    )


def create_pager() -> DescriptionPager:
    return DescriptionPager(
        MonospaceMeasurer(get_char_width()),
        get_viewport_width(),
        get_viewport_height(),
        get_line_height(),
        page_label=get_page_label(),
    )


def load_map_and_session(map_path: Optional[Path] = None) -> Tuple[MapEventSource, PersonalSession]:
    source = load_map(map_path or MAP_FILE)
    # Start on the first event so page commands have something to read
    if source.events:
        source.current_event_id = next(iter(source.events))
    session = new_session(create_face_preloader())
    logging.info(f"-- Session ready: {len(source.events)} map events --")
    return source, session
