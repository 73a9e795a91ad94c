from __future__ import annotations
import re
from enum import Enum
from typing import List, Optional

from .common import CommandResult, Runner, run_command
from boot_switch.labels import firmware_label
from boot_switch.models import BootEntry, ParseResult


GUID_RE = re.compile(r'\{[0-9A-Fa-f-]+\}')

FIRMWARE_APP_HEADER = 'Firmware Application'
FIRMWARE_MANAGER_HEADER = 'Firmware Boot Manager'

_IDENTIFIER_RE = re.compile(r'^identifier\s+(.+)$', re.IGNORECASE)
_DESCRIPTION_RE = re.compile(r'^description\s+(.+)$', re.IGNORECASE)
_BOOTSEQUENCE_RE = re.compile(r'^bootsequence\s+(\S+)', re.IGNORECASE)


def is_guid(value: str) -> bool:
    return GUID_RE.fullmatch(value or '') is not None


class _Block(Enum):
    OUTSIDE = 'outside'
    FIRMWARE_APP = 'firmware-app'
    FIRMWARE_MANAGER = 'firmware-manager'


class _BcdFirmwareParser:
    """Line-driven state machine over ``bcdedit /enum firmware`` output.

    Blocks are separated by blank lines or by the next header. Only
    ``Firmware Application`` blocks produce entries; the ``Firmware Boot
    Manager`` block is read for its pending ``bootsequence``.
    """

    def __init__(self) -> None:
        self.entries: List[BootEntry] = []
        self.next_id: Optional[str] = None
        self.state = _Block.OUTSIDE
        self.header = ''
        self.lines: List[str] = []

    def feed(self, line: str) -> None:
        if not line:
            self.flush()
            return
        # Either header closes the open block, blank line or not
        if line.startswith(FIRMWARE_APP_HEADER):
            self._open(_Block.FIRMWARE_APP, line)
            return
        if line.startswith(FIRMWARE_MANAGER_HEADER):
            self._open(_Block.FIRMWARE_MANAGER, line)
            return
        if self.state != _Block.OUTSIDE:
            self.lines.append(line)

    def flush(self) -> None:
        if self.state == _Block.FIRMWARE_APP:
            self._emit_entry()
        elif self.state == _Block.FIRMWARE_MANAGER:
            self._read_bootsequence()
        self.state = _Block.OUTSIDE
        self.header = ''
        self.lines = []

    def _open(self, state: _Block, header: str) -> None:
        self.flush()
        self.state = state
        self.header = header

    def _emit_entry(self) -> None:
        entry_id = None
        description = None
        for line in self.lines:
            m = _IDENTIFIER_RE.match(line)
            if m:
                if entry_id is None:
                    entry_id = m.group(1).strip()
                continue
            m = _DESCRIPTION_RE.match(line)
            if m and description is None:
                description = m.group(1).strip()
        if entry_id and is_guid(entry_id):
            self.entries.append(BootEntry(id=entry_id, description=description or '', header=self.header))

    def _read_bootsequence(self) -> None:
        for line in self.lines:
            m = _BOOTSEQUENCE_RE.match(line)
            if m and is_guid(m.group(1)):
                self.next_id = m.group(1)
                return


def parse_bcd_firmware(text: str) -> ParseResult:
    parser = _BcdFirmwareParser()
    for raw in (text or '').split('\n'):
        parser.feed(raw.rstrip('\r').strip())
    parser.flush()

    for e in parser.entries:
        e.is_next = parser.next_id is not None and e.id.lower() == parser.next_id.lower()
    return ParseResult(entries=parser.entries, next=parser.next_id)


class WindowsBootManager:
    name = 'bcdedit'
    list_command = 'bcdedit /enum firmware'

    def __init__(self, runner: Runner = run_command) -> None:
        self.runner = runner

    def enumerate(self) -> CommandResult:
        return self.runner(self.list_command)

    def parse(self, text: str) -> ParseResult:
        return parse_bcd_firmware(text)

    def normalize_id(self, raw: object) -> str:
        return str(raw or '').strip()

    def is_valid_id(self, entry_id: str) -> bool:
        return is_guid(entry_id)

    def derive_label(self, entry: BootEntry) -> str:
        return firmware_label(entry.description, entry.header)

    def caption(self, entry: BootEntry) -> str:
        return entry.id

    def fallback_label(self, entry_id: str) -> str:
        return entry_id

    def boot_command(self, entry_id: str) -> str:
        # cmd.exe runs this, so the braces need no quoting
        return f'bcdedit /set {{fwbootmgr}} bootsequence {entry_id} && shutdown /r /t 0'
