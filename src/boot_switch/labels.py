"""Fallback display labels for entries the user has not renamed."""

from __future__ import annotations
import re

GENERIC_FIRMWARE_LABEL = 'Firmware Entry'
GENERIC_DISK_LABEL = 'Disk'
MAX_LABEL_LEN = 40

_HD_MARKER = 'HD('
_HD_INDEX_RE = re.compile(r'HD\((\d+),', re.IGNORECASE)


def title_case(text: str) -> str:
    return ' '.join(w[:1].upper() + w[1:].lower() for w in str(text).split())


def firmware_label(description: str, header: str = '') -> str:
    """Label for a bcdedit firmware entry.

    The description wins when present; otherwise the block header with its
    parenthesised suffix removed, e.g. ``Firmware Application (101fffff)``
    becomes ``Firmware Application``.
    """
    if description and description.strip():
        return description.strip()
    if header and header.strip():
        base = header.split('(')[0].strip()
        return title_case(base or GENERIC_FIRMWARE_LABEL)
    return GENERIC_FIRMWARE_LABEL


def bootnum_label(raw_label: str, bootnum: str) -> str:
    """Label for an efibootmgr ``BootXXXX`` entry.

    ``UEFI OS HD(2,GPT,...)`` becomes ``Uefi Os HD2``; long labels without a
    disk marker are cut to ``MAX_LABEL_LEN`` characters.
    """
    if not raw_label or not raw_label.strip():
        return f'Boot {bootnum}'
    label = raw_label.strip()

    m = _HD_INDEX_RE.search(label)
    disk_idx = m.group(1) if m else None

    base = label.split(_HD_MARKER)[0].strip()
    if not base and label.lower().startswith(_HD_MARKER.lower()):
        base = GENERIC_DISK_LABEL
    if base:
        base = title_case(base)
    if base and disk_idx:
        return f'{base} HD{disk_idx}'

    if not base:
        base = label
    if len(base) > MAX_LABEL_LEN:
        base = base[:MAX_LABEL_LEN - 3] + '...'
    return title_case(base)
