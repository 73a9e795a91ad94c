"""Merge parsed entries with user overrides into the list shown to the user."""

from __future__ import annotations
from typing import Callable, Mapping, Optional

from boot_switch.models import BootEntry, BootView, Override, ParseResult, ViewEntry


def resolve_label(entry: BootEntry, override: Optional[Override], derive: Callable[[BootEntry], str]) -> str:
    if override is not None and override.label and override.label.strip():
        return override.label
    return derive(entry)


def reconcile(parsed: ParseResult, overrides: Mapping[str, Override], manager) -> BootView:
    """Split entries into visible and hidden lists, keeping parser order.

    ``manager`` supplies ``derive_label`` and ``caption`` for the platform.
    Overrides for ids that are no longer enumerated are ignored, not removed.
    """
    view = BootView(current=parsed.current)
    for entry in parsed.entries:
        override = overrides.get(entry.id)
        hidden = bool(override is not None and override.hidden)
        record = ViewEntry(
            id=entry.id,
            description=entry.description,
            display_label=resolve_label(entry, override, manager.derive_label),
            is_hidden=hidden,
            header=entry.header,
            caption=manager.caption(entry),
            is_current=entry.is_current,
            is_next=entry.is_next,
        )
        (view.hidden if hidden else view.visible).append(record)
    return view
