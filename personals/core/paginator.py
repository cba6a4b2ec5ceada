"""Word wrapping and page splitting for personal descriptions.

Text width is always measured by the host (font metrics are not known here);
pages are rebuilt from scratch on every layout call.
"""

from __future__ import annotations
import unicodedata
from typing import List, Optional

from .models import TextMeasurer

Page = List[str]

# Footer shown under the text when a description spans several pages
FOOTER_TEMPLATE = "{label}: {current}/{total} (◀ ▶)"


class MonospaceMeasurer:
    """Pixel width for fixed-cell fonts (wide CJK glyphs use two cells)."""

    def __init__(self, char_width: int = 12):
        self.char_width = char_width

    def __call__(self, text: str) -> int:
        cells = 0
        for ch in text:
            cells += 2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1
        return cells * self.char_width


def wrap_text(text: str, max_width: float, measure: TextMeasurer) -> List[str]:
    """Greedy word wrap on single spaces.

    A word is added to the current line while ``line + word + " "`` still
    fits. A word wider than the viewport still gets a line of its own.
    """
    lines = [""]
    current = ""
    for word in (text or "").split(" "):
        candidate = current + word + " "
        if measure(candidate) > max_width and current:
            current = word + " "
            lines.append(current)
        else:
            current = candidate
            lines[-1] = current
    # Every line carries the separator of its last word
    return [line[:-1] for line in lines]


def lines_per_page(viewport_height: float, line_height: float) -> int:
    """Text lines per page; one line is kept free for the page footer."""
    if line_height <= 0:
        return 1
    return max(1, int(viewport_height // line_height) - 1)


def paginate(lines: List[str], per_page: int) -> List[Page]:
    per_page = max(1, per_page)
    return [lines[i:i + per_page] for i in range(0, len(lines), per_page)]


def layout(text: str, viewport_width: float, viewport_height: float, line_height: float,
           measure: TextMeasurer) -> List[Page]:
    """Wrap ``text`` to the viewport width and split it into pages."""
    lines = wrap_text(text, viewport_width, measure)
    return paginate(lines, lines_per_page(viewport_height, line_height))


class DescriptionPager:
    """Page navigation over a laid out description.

    ``next_page``/``previous_page`` return whether the page changed, so the
    display only needs to redraw on True.
    """

    def __init__(self, measure: TextMeasurer, viewport_width: float, viewport_height: float,
                 line_height: float, page_label: str = "Page"):
        self.measure = measure
        self.viewport_width = viewport_width
        self.viewport_height = viewport_height
        self.line_height = line_height
        self.page_label = page_label
        self.text = ""
        self.pages: List[Page] = []
        self.current_page_index = 0

    def set_text(self, text: str):
        self.text = text or ""
        self._relayout()

    def resize(self, viewport_width: float, viewport_height: float, line_height: Optional[float] = None):
        self.viewport_width = viewport_width
        self.viewport_height = viewport_height
        if line_height is not None:
            self.line_height = line_height
        if self.pages:
            self._relayout()

    def clear(self):
        self.text = ""
        self.pages = []
        self.current_page_index = 0

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def current_page(self) -> Page:
        if not self.pages:
            return []
        return self.pages[self.current_page_index]

    def next_page(self) -> bool:
        if self.current_page_index < self.page_count - 1:
            self.current_page_index += 1
            return True
        return False

    def previous_page(self) -> bool:
        if self.current_page_index > 0:
            self.current_page_index -= 1
            return True
        return False

    def footer(self) -> Optional[str]:
        """Page indicator text, or None when everything fits on one page."""
        if self.page_count <= 1:
            return None
        return FOOTER_TEMPLATE.format(
            label=self.page_label,
            current=self.current_page_index + 1,
            total=self.page_count,
        )

    def _relayout(self):
        self.pages = layout(self.text, self.viewport_width, self.viewport_height,
                            self.line_height, self.measure)
        self.current_page_index = 0
