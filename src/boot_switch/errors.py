"""Error taxonomy shared by the service, CLI, GUI and web front-ends."""

from __future__ import annotations


class BootSwitchError(Exception):
    """Base class for boot switch errors."""


class ValidationError(BootSwitchError):
    """A user-supplied identifier or label failed its format checks."""


class InvalidEntryId(ValidationError):
    def __init__(self, entry_id: str) -> None:
        super().__init__(f'Invalid boot entry id: {entry_id!r}')
        self.entry_id = entry_id


class ToolExecutionError(BootSwitchError):
    """The platform enumeration command could not be run successfully."""

    def __init__(self, command: str, diagnostic: str) -> None:
        super().__init__(f'{command} failed: {diagnostic}')
        self.command = command
        self.diagnostic = diagnostic
