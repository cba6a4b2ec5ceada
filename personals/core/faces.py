"""Background preloading of face sheets over HTTP.

Preloading is fire-and-forget: the registry asks for a sheet and moves on,
a failed download is only logged and the display falls back to no face.
"""

from __future__ import annotations
import logging
import threading
from typing import Dict, Optional
from urllib.parse import quote

import requests


class HttpFacePreloader:
    """Fetches face sheets (``<base_url>/<sheet>.png``) on daemon threads."""

    def __init__(self, base_url: str, timeout: float = 5.0, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self._cache: Dict[str, bytes] = {}
        self._pending: Dict[str, threading.Thread] = {}
        self._lock = threading.Lock()

    def face_url(self, sheet_name: str) -> str:
        return f"{self.base_url}/{quote(sheet_name)}.png"

    def preload_face(self, sheet_name: str) -> None:
        """Start downloading a sheet unless it is cached or already in flight."""
        if not sheet_name:
            return
        with self._lock:
            if sheet_name in self._cache or sheet_name in self._pending:
                return
            thread = threading.Thread(
                target=self._fetch, args=(sheet_name,), name=f"face-{sheet_name}", daemon=True
            )
            self._pending[sheet_name] = thread
        thread.start()

    def get_face(self, sheet_name: str) -> Optional[bytes]:
        with self._lock:
            return self._cache.get(sheet_name)

    def is_loaded(self, sheet_name: str) -> bool:
        return self.get_face(sheet_name) is not None

    def wait(self, timeout: Optional[float] = None):
        """Block until the downloads started so far are finished."""
        with self._lock:
            threads = list(self._pending.values())
        for thread in threads:
            thread.join(timeout)

    def _fetch(self, sheet_name: str):
        try:
            response = self.session.get(self.face_url(sheet_name), timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logging.warning(f"Face sheet {sheet_name} could not be preloaded: {e}")
        else:
            with self._lock:
                self._cache[sheet_name] = response.content
            logging.debug(f"Face sheet {sheet_name} preloaded ({len(response.content)} bytes)")
        finally:
            with self._lock:
                self._pending.pop(sheet_name, None)
