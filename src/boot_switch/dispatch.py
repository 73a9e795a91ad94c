"""Schedule a one-time boot into an entry and restart the machine."""

from __future__ import annotations
import logging

from boot_switch.errors import InvalidEntryId
from boot_switch.models import BootOutcome, BootState
from boot_switch.store import OverrideStore

logger = logging.getLogger(__name__)


class Dispatcher:
    """Runs the platform "set next boot + reboot" command.

    A rejected id raises ``InvalidEntryId`` before any command is built.
    A failing command is reported as a FAILED outcome and never retried.
    """

    def __init__(self, manager, store: OverrideStore) -> None:
        self.manager = manager
        self.store = store

    def target_label(self, entry_id: str) -> str:
        override = self.store.load().get(entry_id)
        if override is not None and override.label and override.label.strip():
            return override.label
        return self.manager.fallback_label(entry_id)

    def boot(self, raw_id: object) -> BootOutcome:
        entry_id = self.manager.normalize_id(raw_id)
        logger.debug('boot %r: %s', entry_id, BootState.VALIDATING.value)
        if not self.manager.is_valid_id(entry_id):
            logger.info('boot %r: %s', entry_id, BootState.REJECTED.value)
            raise InvalidEntryId(entry_id)

        label = self.target_label(entry_id)
        cmd = self.manager.boot_command(entry_id)
        logger.info('boot %s (%s): %s', entry_id, label, BootState.DISPATCHED.value)
        result = self.manager.runner(cmd)
        if not result.ok:
            outcome = BootOutcome.failure(label, result.diagnostic(), command=cmd)
        else:
            outcome = BootOutcome.success(label, command=cmd)
        logger.info('boot %s: %s', entry_id, outcome.state.value)
        return outcome
