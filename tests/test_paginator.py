"""Tests for description wrapping and paging."""

import pytest
from personals.core.paginator import (
    DescriptionPager,
    MonospaceMeasurer,
    layout,
    lines_per_page,
    paginate,
    wrap_text,
)


def char_count(text):
    """One pixel per character keeps widths easy to reason about."""
    return len(text)


class TestWrap:
    def test_short_text_single_line(self):
        """Test that short text stays on one line."""
        assert wrap_text("hello world", 100, char_count) == ["hello world"]

    def test_greedy_fill(self):
        """Test that words fill a line greedily."""
        # "aaa bbb " is 8 wide, adding "ccc " would make 12
        assert wrap_text("aaa bbb ccc", 10, char_count) == ["aaa bbb", "ccc"]

    def test_trailing_space_counts_toward_width(self):
        """Test that the trailing space is measured."""
        # "aaa bbb" is 7 wide but is measured as "aaa bbb " (8)
        assert wrap_text("aaa bbb", 7, char_count) == ["aaa", "bbb"]

    def test_overlong_word_gets_own_line(self):
        """Test that an over-wide word gets its own line."""
        assert wrap_text("a verylongword b", 6, char_count) == ["a", "verylongword", "b"]

    def test_overlong_first_word(self):
        """Test an over-wide first word."""
        assert wrap_text("verylongword", 4, char_count) == ["verylongword"]

    def test_empty_text(self):
        """Test that empty text gives one empty line."""
        assert wrap_text("", 10, char_count) == [""]

    def test_newlines_are_ordinary_content(self):
        """Test that newlines are not line breaks for wrapping."""
        assert wrap_text("one\ntwo three", 100, char_count) == ["one\ntwo three"]


class TestPaging:
    @pytest.mark.parametrize("height,line_height,expected", [
        (360, 36, 9),
        (100, 36, 1),
        (36, 36, 1),
        (10, 36, 1),
        (72, 36, 1),
        (108, 36, 2),
        (100, 0, 1),
    ])
    def test_lines_per_page(self, height, line_height, expected):
        """Test lines per page for several viewport sizes."""
        assert lines_per_page(height, line_height) == expected

    def test_paginate_keeps_remainder(self):
        """Test that the last page holds the remainder."""
        assert paginate(["a", "b", "c", "d", "e"], 2) == [["a", "b"], ["c", "d"], ["e"]]

    def test_exact_fit_is_one_page(self):
        """Test that text filling the viewport is one page."""
        # 4 lines of height 10 in a 50px viewport: 5 rows minus the footer row
        text = "aa bb cc dd"
        pages = layout(text, 3, 50, 10, char_count)
        assert pages == [["aa", "bb", "cc", "dd"]]

    def test_one_more_line_makes_two_pages(self):
        """Test that one extra line starts a second page."""
        pages = layout("aa bb cc dd ee", 3, 50, 10, char_count)
        assert pages == [["aa", "bb", "cc", "dd"], ["ee"]]

    def test_layout_is_idempotent(self):
        """Test that layout gives the same pages twice."""
        text = "The harbor master counts every ship that enters the bay " * 5
        first = layout(text, 120, 90, 18, char_count)
        second = layout(text, 120, 90, 18, char_count)
        assert first == second


class TestDescriptionPager:
    @pytest.fixture
    def pager(self):
        return DescriptionPager(char_count, 3, 50, 10, page_label="Page")

    def test_single_page_has_no_footer(self, pager):
        """Test that a single page has no footer."""
        pager.set_text("aa bb cc dd")
        assert pager.page_count == 1
        assert pager.footer() is None

    def test_navigation(self, pager):
        """Test moving between pages and the footer text."""
        pager.set_text("aa bb cc dd ee ff gg hh ii")
        assert pager.page_count == 3
        assert pager.current_page() == ["aa", "bb", "cc", "dd"]
        assert pager.footer() == "Page: 1/3 (◀ ▶)"
        assert pager.previous_page() is False
        assert pager.current_page_index == 0
        assert pager.next_page() is True
        assert pager.next_page() is True
        assert pager.current_page() == ["ii"]
        assert pager.next_page() is False
        assert pager.current_page_index == 2
        assert pager.footer() == "Page: 3/3 (◀ ▶)"
        assert pager.previous_page() is True
        assert pager.current_page_index == 1

    def test_new_text_resets_index(self, pager):
        """Test that new text goes back to the first page."""
        pager.set_text("aa bb cc dd ee ff")
        pager.next_page()
        pager.set_text("aa bb cc dd ee ff")
        assert pager.current_page_index == 0

    def test_resize_relayouts(self, pager):
        """Test that resizing lays the text out again."""
        pager.set_text("aa bb cc dd ee ff")
        pager.next_page()
        pager.resize(100, 50)
        assert pager.page_count == 1
        assert pager.current_page_index == 0

    def test_clear(self, pager):
        """Test clearing the pager."""
        pager.set_text("aa bb cc dd ee ff")
        pager.clear()
        assert pager.page_count == 0
        assert pager.current_page() == []
        assert pager.next_page() is False


class TestMonospaceMeasurer:
    def test_ascii(self):
        """Test the width of ASCII text."""
        assert MonospaceMeasurer(12)("abc ") == 48

    def test_wide_characters_take_two_cells(self):
        """Test that wide characters take two cells."""
        assert MonospaceMeasurer(10)("日本") == 40
