"""
Shared fixtures: canned tool output and a fake command runner.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from boot_switch.platforms.common import CommandResult
from boot_switch.platforms.linux import LinuxBootManager
from boot_switch.platforms.windows import WindowsBootManager
from boot_switch.service import BootSwitchService
from boot_switch.store import OverrideStore


EFIBOOTMGR_OUTPUT = (
    "BootCurrent: 0002\n"
    "Timeout: 1 seconds\n"
    "BootOrder: 0002,0001,0003\n"
    "Boot0000* EFI PXE 0 for IPv4 (00-11-22-33-44-55) \tPciRoot(0x0)/Pci(0x1c,0x0)\n"
    "Boot0001* Windows Boot Manager  (on HD1)\n"
    "Boot0002* ubuntu\tHD(1,GPT,1234abcd,0x800,0x100000)/File(\\EFI\\ubuntu\\shimx64.efi)\n"
    "Boot0003* UEFI OS\tHD(2,GPT,5678ef00,0x800,0x100000)/File(\\EFI\\BOOT\\BOOTX64.EFI)\n"
)

WIN_APP_GUID = "{11111111-2222-3333-4444-555555555555}"
WIN_PXE_GUID = "{aaaaaaaa-bbbb-cccc-dddd-eeeeeeeeeeee}"

BCDEDIT_OUTPUT = f"""\
Firmware Boot Manager
---------------------
identifier              {{fwbootmgr}}
displayorder            {{bootmgr}}
                        {WIN_APP_GUID}
bootsequence            {WIN_PXE_GUID}
timeout                 2

Windows Boot Manager
--------------------
identifier              {{bootmgr}}
device                  partition=\\Device\\HarddiskVolume1
description             Windows Boot Manager

Firmware Application (101fffff)
-------------------------------
identifier              {WIN_APP_GUID}

Firmware Application (101fffff)
-------------------------------
identifier              {WIN_PXE_GUID}
description             UEFI: PXE IPv4 Intel(R) Ethernet

Firmware Application (101fffff)
-------------------------------
identifier              {{bootmgr-not-a-guid}}
description             Broken entry

Firmware Application (101fffff)
-------------------------------
description             No identifier here
"""


class FakeRunner:
    """Stands in for run_command; records every command line."""

    def __init__(self, responses: dict[str, CommandResult] | None = None) -> None:
        self.responses = dict(responses or {})
        self.calls: list[str] = []

    def __call__(self, cmd: str) -> CommandResult:
        self.calls.append(cmd)
        return self.responses.get(cmd, CommandResult())


@pytest.fixture()
def store_path(tmp_path: Path) -> Path:
    return tmp_path / "boot-switch" / "config.yaml"


@pytest.fixture()
def linux_runner() -> FakeRunner:
    return FakeRunner({"efibootmgr -v": CommandResult(stdout=EFIBOOTMGR_OUTPUT)})


@pytest.fixture()
def windows_runner() -> FakeRunner:
    return FakeRunner({"bcdedit /enum firmware": CommandResult(stdout=BCDEDIT_OUTPUT)})


@pytest.fixture()
def linux_service(linux_runner: FakeRunner, store_path: Path) -> BootSwitchService:
    return BootSwitchService(LinuxBootManager(runner=linux_runner), OverrideStore(store_path))


@pytest.fixture()
def windows_service(windows_runner: FakeRunner, store_path: Path) -> BootSwitchService:
    return BootSwitchService(WindowsBootManager(runner=windows_runner), OverrideStore(store_path))


@pytest.fixture()
def efibootmgr_output() -> str:
    return EFIBOOTMGR_OUTPUT


@pytest.fixture()
def bcdedit_output() -> str:
    return BCDEDIT_OUTPUT


@pytest.fixture()
def make_runner():
    return FakeRunner
