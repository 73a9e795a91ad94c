"""Entry point for every front-end: list, rename, hide and boot."""

from __future__ import annotations
import logging

from boot_switch.config import Settings
from boot_switch.dispatch import Dispatcher
from boot_switch.errors import InvalidEntryId, ToolExecutionError, ValidationError
from boot_switch.models import BootOutcome, BootView, Override
from boot_switch.platforms.common import Runner, run_command
from boot_switch.platforms.linux import LinuxBootManager
from boot_switch.platforms.windows import WindowsBootManager
from boot_switch.reconcile import reconcile
from boot_switch.store import OverrideStore

logger = logging.getLogger(__name__)


def get_manager(platform_name: str, runner: Runner = run_command):
    if platform_name.lower() == 'windows':
        return WindowsBootManager(runner=runner)
    return LinuxBootManager(runner=runner)


class BootSwitchService:
    def __init__(self, manager, store: OverrideStore) -> None:
        self.manager = manager
        self.store = store
        self.dispatcher = Dispatcher(manager, store)

    def view(self) -> BootView:
        """Re-enumerate the firmware entries and apply the saved overrides.

        Raises ToolExecutionError when the enumeration command fails.
        """
        result = self.manager.enumerate()
        if not result.ok:
            raise ToolExecutionError(self.manager.list_command, result.diagnostic())
        parsed = self.manager.parse(result.stdout)
        return reconcile(parsed, self.store.load(), self.manager)

    def checked_id(self, raw_id: object) -> str:
        entry_id = self.manager.normalize_id(raw_id)
        if not self.manager.is_valid_id(entry_id):
            raise InvalidEntryId(entry_id)
        return entry_id

    def rename(self, raw_id: object, label: object) -> Override:
        entry_id = self.checked_id(raw_id)
        new_label = str(label or '').strip()
        logger.info('rename %s -> %r', entry_id, new_label)
        if not new_label:
            raise ValidationError('Label must not be empty')
        return self.store.set_label(entry_id, new_label)

    def set_hidden(self, raw_id: object, hidden: bool) -> Override:
        entry_id = self.checked_id(raw_id)
        logger.info('set hidden %s -> %s', entry_id, hidden)
        return self.store.set_hidden(entry_id, bool(hidden))

    def target_label(self, raw_id: object) -> str:
        """Label that ``boot(raw_id)`` would report. Raises InvalidEntryId."""
        return self.dispatcher.target_label(self.checked_id(raw_id))

    def boot(self, raw_id: object) -> BootOutcome:
        return self.dispatcher.boot(raw_id)


def build_service(settings: Settings, runner: Runner = run_command) -> BootSwitchService:
    manager = get_manager(settings.platform, runner=runner)
    return BootSwitchService(manager, OverrideStore(settings.config_path))
