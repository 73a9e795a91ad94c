from __future__ import annotations
import re
from typing import List, Optional

from .common import CommandResult, Runner, run_command
from boot_switch.labels import bootnum_label
from boot_switch.models import BootEntry, ParseResult


BOOTNUM_RE = re.compile(r'[0-9A-Fa-f]{4}')

_ENTRY_RE = re.compile(r'^Boot([0-9A-Fa-f]{4})\*?\s+(.+?)(\s{2,}|$)')


def _field_value(line: str) -> str:
    return line.split(':', 1)[1].strip()


def parse_efibootmgr(text: str) -> ParseResult:
    """Parse ``efibootmgr -v`` output into entries in display order.

    Entries listed in ``BootOrder`` come first, in that order; the rest follow
    by ascending boot number.
    """
    current: Optional[str] = None
    nxt: Optional[str] = None
    order: List[str] = []
    entries: List[BootEntry] = []

    for line in (l.strip() for l in (text or '').split('\n')):
        if line.startswith('BootCurrent:'):
            current = _field_value(line).upper() or None
            continue
        if line.startswith('BootNext:'):
            nxt = _field_value(line).upper() or None
            continue
        if line.startswith('BootOrder:'):
            order = [x.strip().upper() for x in _field_value(line).split(',') if x.strip()]
            continue
        m = _ENTRY_RE.match(line)
        if m:
            entries.append(BootEntry(id=m.group(1).upper(), description=m.group(2).strip()))

    if order:
        position = {num: i for i, num in reversed(list(enumerate(order)))}
        entries.sort(key=lambda e: (0, position[e.id], '') if e.id in position else (1, 0, e.id))
    else:
        entries.sort(key=lambda e: e.id)

    for e in entries:
        e.is_current = e.id == current
        e.is_next = e.id == nxt
    return ParseResult(entries=entries, current=current, next=nxt, order=order)


class LinuxBootManager:
    name = 'efibootmgr'
    list_command = 'efibootmgr -v'

    def __init__(self, runner: Runner = run_command) -> None:
        self.runner = runner

    def enumerate(self) -> CommandResult:
        return self.runner(self.list_command)

    def parse(self, text: str) -> ParseResult:
        return parse_efibootmgr(text)

    def normalize_id(self, raw: object) -> str:
        return str(raw or '').strip().upper()

    def is_valid_id(self, entry_id: str) -> bool:
        return BOOTNUM_RE.fullmatch(entry_id or '') is not None

    def derive_label(self, entry: BootEntry) -> str:
        return bootnum_label(entry.description, entry.id)

    def caption(self, entry: BootEntry) -> str:
        if entry.is_current:
            return f'BootNum: {entry.id} · Currently booted'
        return f'BootNum: {entry.id}'

    def fallback_label(self, entry_id: str) -> str:
        return f'BootNum {entry_id}'

    def boot_command(self, entry_id: str) -> str:
        return f'efibootmgr -n {entry_id} && reboot'
