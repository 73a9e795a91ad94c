"""
Tests for merging parsed entries with overrides.
"""

from __future__ import annotations

from boot_switch.models import BootEntry, Override, ParseResult
from boot_switch.platforms.linux import LinuxBootManager, parse_efibootmgr
from boot_switch.platforms.windows import WindowsBootManager, parse_bcd_firmware
from boot_switch.reconcile import reconcile, resolve_label


def _linux() -> LinuxBootManager:
    return LinuxBootManager(runner=lambda cmd: None)


class TestReconcile:
    def test_derived_labels_and_captions(self, efibootmgr_output: str):
        view = reconcile(parse_efibootmgr(efibootmgr_output), {}, _linux())
        labels = {e.id: (e.display_label, e.caption) for e in view.visible}
        assert labels["0001"] == ("Windows Boot Manager", "BootNum: 0001")
        assert labels["0002"] == ("Ubuntu HD1", "BootNum: 0002 · Currently booted")
        assert labels["0003"] == ("Uefi Os HD2", "BootNum: 0003")
        assert view.hidden == []
        assert view.current == "0002"

    def test_partition_preserves_order(self, efibootmgr_output: str):
        overrides = {"0001": Override(hidden=True), "0000": Override(hidden=True)}
        view = reconcile(parse_efibootmgr(efibootmgr_output), overrides, _linux())
        assert [e.id for e in view.visible] == ["0002", "0003"]
        assert [e.id for e in view.hidden] == ["0001", "0000"]
        assert all(e.is_hidden for e in view.hidden)

    def test_every_entry_lands_once(self, efibootmgr_output: str):
        parsed = parse_efibootmgr(efibootmgr_output)
        view = reconcile(parsed, {"0003": Override(hidden=True)}, _linux())
        assert sorted(e.id for e in view.all()) == sorted(e.id for e in parsed.entries)

    def test_override_label_wins(self, efibootmgr_output: str):
        overrides = {"0002": Override(label="Daily driver")}
        view = reconcile(parse_efibootmgr(efibootmgr_output), overrides, _linux())
        assert view.visible[0].display_label == "Daily driver"

    def test_hidden_false_is_visible(self, efibootmgr_output: str):
        view = reconcile(parse_efibootmgr(efibootmgr_output), {"0001": Override(hidden=False)}, _linux())
        assert "0001" in [e.id for e in view.visible]

    def test_stale_override_ignored(self, efibootmgr_output: str):
        overrides = {"00FF": Override(label="Gone", hidden=True)}
        view = reconcile(parse_efibootmgr(efibootmgr_output), overrides, _linux())
        assert len(view.visible) == 4
        assert overrides == {"00FF": Override(label="Gone", hidden=True)}

    def test_windows_firmware_application(self, bcdedit_output: str):
        view = reconcile(parse_bcd_firmware(bcdedit_output), {}, WindowsBootManager(runner=lambda cmd: None))
        first, second = view.visible
        assert first.display_label == "Firmware Application"
        assert first.caption == "{11111111-2222-3333-4444-555555555555}"
        assert second.display_label == "UEFI: PXE IPv4 Intel(R) Ethernet"
        assert second.is_next

    def test_empty_parse(self):
        view = reconcile(ParseResult(), {"0001": Override(label="x")}, _linux())
        assert view.visible == [] and view.hidden == []


class TestResolveLabel:
    def test_blank_override_falls_back(self):
        entry = BootEntry(id="0001", description="Windows Boot Manager")
        derive = _linux().derive_label
        assert resolve_label(entry, Override(label="   "), derive) == "Windows Boot Manager"
        assert resolve_label(entry, Override(label=""), derive) == "Windows Boot Manager"
        assert resolve_label(entry, None, derive) == "Windows Boot Manager"

    def test_override_used_verbatim(self):
        entry = BootEntry(id="0001", description="Windows Boot Manager")
        assert resolve_label(entry, Override(label="win 11"), _linux().derive_label) == "win 11"
