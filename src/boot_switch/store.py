"""
Override store: user renames and hide flags, persisted as one YAML document.

Layout::

    entries:
      '0001':
        label: Windows
        hidden: false

The whole document is rewritten on every save (write to a temp file, then
replace). A missing or unreadable document loads as an empty mapping.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict

import yaml

from boot_switch.models import Override

logger = logging.getLogger(__name__)

Overrides = Dict[str, Override]


def _normalize_override(value: Any) -> Override | None:
    if not isinstance(value, dict):
        return None
    label = value.get('label')
    hidden = value.get('hidden')
    return Override(
        label=label if isinstance(label, str) else None,
        hidden=hidden if isinstance(hidden, bool) else None,
    )


def normalize_document(data: Any) -> Overrides:
    """Turn a loaded YAML document into ``{id: Override}``.

    Accepts the ``{entries: {...}}`` layout and the older flat ``{id: {...}}``
    one. Anything unrecognised is dropped.
    """
    if not isinstance(data, dict):
        return {}
    raw_entries = data['entries'] if 'entries' in data else data
    if not isinstance(raw_entries, dict):
        return {}

    overrides: Overrides = {}
    for key, value in raw_entries.items():
        override = _normalize_override(value)
        if override is not None:
            overrides[str(key)] = override
    return overrides


def dump_document(overrides: Overrides) -> str:
    doc = {'entries': {str(k): v.to_dict() for k, v in overrides.items()}}
    return yaml.safe_dump(doc, default_flow_style=False, sort_keys=False, allow_unicode=True)


class OverrideStore:
    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> Overrides:
        if not self.path.is_file():
            logger.info('No override file at %s, starting empty', self.path)
            return {}
        try:
            data = yaml.safe_load(self.path.read_text(encoding='utf-8'))
        except yaml.YAMLError as e:
            logger.warning('Corrupt override file %s: %s, ignoring it', self.path, e)
            return {}
        except (OSError, UnicodeDecodeError) as e:
            logger.warning('Cannot read override file %s: %s, ignoring it', self.path, e)
            return {}
        return normalize_document(data)

    def save(self, overrides: Overrides) -> None:
        content = dump_document(overrides)
        self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix='.overrides_', suffix='.tmp')
        tmp = Path(tmp_name)
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as fh:
                fh.write(content)
            tmp.replace(self.path)
        except OSError:
            tmp.unlink(missing_ok=True)
            logger.error('Failed to save overrides to %s', self.path)
            raise
        logger.debug('Saved %d override(s) to %s', len(overrides), self.path)

    def set_label(self, entry_id: str, label: str) -> Override:
        overrides = self.load()
        override = overrides.setdefault(entry_id, Override())
        override.label = label
        self.save(overrides)
        return override

    def set_hidden(self, entry_id: str, hidden: bool) -> Override:
        overrides = self.load()
        override = overrides.setdefault(entry_id, Override())
        override.hidden = hidden
        self.save(overrides)
        return override
