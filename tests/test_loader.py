"""Tests for the map loader and bootstrap."""

import json
import logging
import pytest
from personals.core.commands import run_plugin_command
from personals.core.loader import MapLoadError, build_events_from_dict, load_map
from personals.core.parser import parse_npc_blocks
from game.bootstrap import MAP_FILE, load_map_and_session


@pytest.fixture
def map_data():
    return {
        "events": [
            None,
            {
                "id": 1,
                "name": "Guard",
                "pages": [
                    {"list": [
                        {"code": 108, "parameters": ["Type: NPC"]},
                        {"code": 408, "parameters": ["ID: 5"]},
                        {"code": 408, "parameters": ["Name: Bram"]},
                        {"code": 408, "parameters": ["Details: Watches the gate."]},
                        {"code": 401, "parameters": ["Halt!"]},
                        {"code": 408, "parameters": ["after dialogue"]},
                        {"code": 0, "parameters": []},
                    ]},
                    {"list": [
                        {"code": 108, "parameters": ["Type: NPC"]},
                        {"code": 408, "parameters": ["ID: 5"]},
                        {"code": 408, "parameters": ["Name: Bram (off duty)"]},
                    ]},
                ],
            },
            {"name": "broken, no id", "pages": []},
        ]
    }


def write_map(tmp_path, data):
    path = tmp_path / "map002.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestBuildEvents:
    def test_null_and_idless_events_are_skipped(self, map_data):
        """Test that null slots and events without an id are dropped."""
        events = build_events_from_dict(map_data)
        assert list(events) == [1]

    def test_comment_codes(self, map_data):
        """Test that only codes 108 and 408 become comment lines."""
        page = build_events_from_dict(map_data)[1].active_page()
        assert [line.is_comment for line in page] == [True, True, True, True, False, True, False]
        assert page[0].text == "Type: NPC"

    def test_non_comment_command_ends_details(self, map_data):
        """Test that a non-comment command stops Details continuation."""
        page = build_events_from_dict(map_data)[1].active_page()
        records = parse_npc_blocks(page)
        assert records[0].description == "Watches the gate."

    def test_page_index_selects_page(self, map_data):
        """Test that pageIndex picks the active page."""
        map_data["events"][1]["pageIndex"] = 1
        page = build_events_from_dict(map_data)[1].active_page()
        assert parse_npc_blocks(page)[0].name == "Bram (off duty)"

    def test_out_of_range_page_index(self, map_data):
        """Test that an out of range pageIndex gives no active page."""
        map_data["events"][1]["pageIndex"] = 5
        assert build_events_from_dict(map_data)[1].active_page() is None


class TestLoadMap:
    def test_load_from_file(self, tmp_path, map_data):
        """Test loading a map file and reading the current event page."""
        source = load_map(write_map(tmp_path, map_data))
        source.current_event_id = 1
        assert parse_npc_blocks(source.current_page())[0].id == "5"
        assert len(list(source.all_pages())) == 1

    def test_set_page_index(self, tmp_path, map_data):
        """Test switching the active page of a known and an unknown event."""
        source = load_map(write_map(tmp_path, map_data))
        assert source.set_page_index(1, 1) is True
        assert source.set_page_index(42, 0) is False
        source.current_event_id = 1
        assert parse_npc_blocks(source.current_page())[0].name == "Bram (off duty)"

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises MapLoadError."""
        with pytest.raises(MapLoadError):
            load_map(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        """Test that malformed JSON raises MapLoadError."""
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(MapLoadError):
            load_map(path)

    def test_no_current_event(self, tmp_path, map_data):
        """Test that no page is returned before an event runs."""
        assert load_map(write_map(tmp_path, map_data)).current_page() is None

    def test_null_events_gives_empty_map(self, tmp_path):
        """Test that "events": null loads as a map without events."""
        source = load_map(write_map(tmp_path, {"events": None}))
        assert source.events == {}
        assert list(source.all_pages()) == []

    def test_events_not_a_list(self, tmp_path):
        """Test that a non-list events value raises MapLoadError."""
        with pytest.raises(MapLoadError):
            load_map(write_map(tmp_path, {"events": 5}))

    def test_null_pages(self, tmp_path):
        """Test that "pages": null loads an event without pages."""
        source = load_map(write_map(tmp_path, {"events": [{"id": 1, "name": "Empty", "pages": None}]}))
        assert source.events[1].pages == []
        assert source.events[1].active_page() is None

    def test_null_page_index_defaults_to_first_page(self, tmp_path, map_data):
        """Test that "pageIndex": null selects the first page."""
        map_data["events"][1]["pageIndex"] = None
        source = load_map(write_map(tmp_path, map_data))
        assert source.events[1].page_index == 0
        assert parse_npc_blocks(source.events[1].active_page())[0].name == "Bram"

    def test_non_numeric_id_is_skipped(self, tmp_path, map_data, caplog):
        """Test that an event with a non-numeric id is skipped with a warning."""
        map_data["events"].append({"id": "x", "name": "Bad", "pages": []})
        with caplog.at_level(logging.WARNING):
            source = load_map(write_map(tmp_path, map_data))
        assert list(source.events) == [1]
        assert "invalid id" in caplog.text

    def test_malformed_parameters(self, tmp_path):
        """Test that comment commands with bad parameters read as empty text."""
        page = {"list": [
            {"code": 108, "parameters": None},
            {"code": 408, "parameters": 7},
            {"code": 408},
        ]}
        source = load_map(write_map(tmp_path, {"events": [{"id": 1, "pages": [page]}]}))
        lines = source.events[1].active_page()
        assert [(line.text, line.is_comment) for line in lines] == [("", True)] * 3


class TestBundledMap:
    def test_bootstrap_session(self, monkeypatch):
        """Test that bootstrap builds the session from config."""
        monkeypatch.delenv("PL_FACE_BASE_URL", raising=False)
        monkeypatch.setenv("PL_MENU_TITLE", "Contacts")
        source, session = load_map_and_session(MAP_FILE)
        assert source.current_event_id == 1
        assert session.menu_title == "Contacts"
        assert session.registry.preloader is None

    def test_innkeeper_page(self, monkeypatch):
        """Test adding the innkeeper from the bundled map."""
        monkeypatch.delenv("PL_FACE_BASE_URL", raising=False)
        source, session = load_map_and_session(MAP_FILE)
        run_plugin_command(session, source, "AddPersonalToList")
        (john,) = session.personals()
        assert john.name == "John, the Innkeeper"
        assert john.face_sheet_name == "Actor1"
        assert john.icon_ids == (84, 176)
        assert "ledger" in john.description

    def test_harbor_master_details_span_comment_commands(self, monkeypatch):
        """Test that details continue across 108 and 408 commands."""
        monkeypatch.delenv("PL_FACE_BASE_URL", raising=False)
        source, session = load_map_and_session(MAP_FILE)
        run_plugin_command(session, source, "AddPersonalToList 2 99")
        (mira,) = session.personals()
        assert mira.description.count("\n") == 2
