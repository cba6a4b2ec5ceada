"""Central configuration for the personal list.

All tunable values (menu title, viewport geometry, face preloading, logging)
have a sensible default and can be overridden via environment variables.
"""
from __future__ import annotations
import os
from typing import Optional

def _get_int_env(name: str, default: int, minval: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        v = int(raw)
        if minval is not None and v < minval:
            return default
        return v
    except ValueError:
        return default


def _get_float_env(name: str, default: float, minval: float | None = None) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        v = float(raw)
        if minval is not None and v < minval:
            return default
        return v
    except ValueError:
        return default


def _get_bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    val = raw.strip().lower()
    return val in {"1", "true", "yes", "on"}


# ---------------- Menu ----------------

def get_menu_title() -> str:
    """Title of the personal list menu. Var: PL_MENU_TITLE (default 'Personals')."""
    return os.getenv("PL_MENU_TITLE", "Personals").strip() or "Personals"


def get_enable_initial() -> bool:
    """Menu visibility for a new game. Var: PL_ENABLE_INITIAL (default True)."""
    return _get_bool_env("PL_ENABLE_INITIAL", True)


def get_page_label() -> str:
    """Label of the description page footer. Var: PL_PAGE_LABEL (default 'Page')."""
    return os.getenv("PL_PAGE_LABEL", "Page")


# ---------------- Detail pane geometry (pixel) ----------------

def get_viewport_width() -> int:
    return _get_int_env("PL_VIEWPORT_WIDTH", 516, minval=1)


def get_viewport_height() -> int:
    return _get_int_env("PL_VIEWPORT_HEIGHT", 360, minval=1)


def get_line_height() -> int:
    return _get_int_env("PL_LINE_HEIGHT", 36, minval=1)


def get_char_width() -> int:
    """Cell width used by the monospace text measurer. Var: PL_CHAR_WIDTH."""
    return _get_int_env("PL_CHAR_WIDTH", 12, minval=1)


# ---------------- Face preloading ----------------

def get_face_base_url() -> Optional[str]:
    """Base URL of the face sheets. Var: PL_FACE_BASE_URL (unset = no HTTP preloading)."""
    raw = os.getenv("PL_FACE_BASE_URL")
    if raw is None or not raw.strip():
        return None
    return raw.strip()


def get_face_timeout() -> float:
    """Timeout of face sheet requests in seconds. Var: PL_FACE_TIMEOUT (default 5.0)."""
    return _get_float_env("PL_FACE_TIMEOUT", 5.0, minval=0.1)


# ---------------- Logging ----------------

def get_log_level() -> str:
    """Root logging level of the text host. Var: PL_LOG_LEVEL (default WARNING)."""
    level = os.getenv("PL_LOG_LEVEL", "WARNING").strip().upper()
    if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        return "WARNING"
    return level


__all__ = [
    # Menu
    "get_menu_title", "get_enable_initial", "get_page_label",
    # Geometry
    "get_viewport_width", "get_viewport_height", "get_line_height", "get_char_width",
    # Faces
    "get_face_base_url", "get_face_timeout",
    # Logging
    "get_log_level",
]
