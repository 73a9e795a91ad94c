"""
Tests for the override store: YAML load/save and normalization.
"""

from __future__ import annotations

from pathlib import Path

import yaml

from boot_switch.models import Override
from boot_switch.store import OverrideStore, normalize_document


class TestLoad:
    """Loading always yields a usable mapping."""

    def test_missing_file(self, store_path: Path):
        assert OverrideStore(store_path).load() == {}

    def test_corrupt_yaml(self, store_path: Path):
        store_path.parent.mkdir(parents=True)
        store_path.write_text("entries: a: b\n", encoding="utf-8")
        assert OverrideStore(store_path).load() == {}

    def test_not_a_mapping(self, store_path: Path):
        store_path.parent.mkdir(parents=True)
        store_path.write_text("- one\n- two\n", encoding="utf-8")
        assert OverrideStore(store_path).load() == {}

    def test_empty_file(self, store_path: Path):
        store_path.parent.mkdir(parents=True)
        store_path.write_text("", encoding="utf-8")
        assert OverrideStore(store_path).load() == {}

    def test_entries_layout(self, store_path: Path):
        store_path.parent.mkdir(parents=True)
        store_path.write_text(
            "entries:\n"
            "  '0001':\n"
            "    label: Windows\n"
            "    hidden: true\n"
            "  '{11111111-2222-3333-4444-555555555555}':\n"
            "    label: PXE\n",
            encoding="utf-8",
        )
        overrides = OverrideStore(store_path).load()
        assert overrides["0001"] == Override(label="Windows", hidden=True)
        assert overrides["{11111111-2222-3333-4444-555555555555}"] == Override(label="PXE")

    def test_legacy_flat_json(self, store_path: Path):
        """The older flat JSON document is still readable."""
        store_path.parent.mkdir(parents=True)
        store_path.write_text('{"0002": {"label": "Ubuntu"}, "0003": {"hidden": true}}', encoding="utf-8")
        overrides = OverrideStore(store_path).load()
        assert overrides == {"0002": Override(label="Ubuntu"), "0003": Override(hidden=True)}


class TestNormalize:
    def test_unknown_fields_dropped(self):
        doc = {
            "theme": "dark",
            "entries": {
                "0001": {"label": "Win", "hidden": False, "color": "red"},
                "0002": "not a mapping",
                "0003": {"label": 42, "hidden": "yes"},
            },
        }
        assert normalize_document(doc) == {
            "0001": Override(label="Win", hidden=False),
            "0003": Override(),
        }

    def test_entries_not_a_mapping(self):
        assert normalize_document({"entries": ["0001"]}) == {}


class TestSave:
    def test_creates_parent_and_roundtrips(self, store_path: Path):
        store = OverrideStore(store_path)
        store.save({"0001": Override(label="Windows", hidden=True), "0002": Override(hidden=False)})
        assert store_path.is_file()
        assert store.load() == {"0001": Override(label="Windows", hidden=True), "0002": Override(hidden=False)}

    def test_document_is_normalized(self, store_path: Path):
        store = OverrideStore(store_path)
        store.save({"0001": Override(label="Windows")})
        data = yaml.safe_load(store_path.read_text(encoding="utf-8"))
        assert data == {"entries": {"0001": {"label": "Windows"}}}

    def test_numeric_looking_ids_stay_strings(self, store_path: Path):
        store = OverrideStore(store_path)
        store.save({"0010": Override(hidden=True)})
        assert list(store.load()) == ["0010"]

    def test_no_temp_files_left(self, store_path: Path):
        store = OverrideStore(store_path)
        store.save({"0001": Override(label="A")})
        store.save({"0001": Override(label="B")})
        assert [p.name for p in store_path.parent.iterdir()] == ["config.yaml"]


class TestMutations:
    def test_set_label_keeps_hidden(self, store_path: Path):
        store = OverrideStore(store_path)
        store.set_hidden("0001", True)
        store.set_label("0001", "Windows")
        assert store.load()["0001"] == Override(label="Windows", hidden=True)

    def test_stale_overrides_retained(self, store_path: Path):
        store = OverrideStore(store_path)
        store.set_label("00FF", "Removed disk")
        store.set_hidden("0001", True)
        assert set(store.load()) == {"00FF", "0001"}

    def test_corrupt_file_replaced_on_write(self, store_path: Path):
        store_path.parent.mkdir(parents=True)
        store_path.write_text("entries: a: b\n", encoding="utf-8")
        store = OverrideStore(store_path)
        store.set_label("0001", "Windows")
        assert store.load() == {"0001": Override(label="Windows")}
