from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


@dataclass
class BootEntry:
    id: str  # Linux: '0000' style; Windows: '{GUID}'
    description: str = ''  # raw label as printed by the tool
    header: str = ''  # block header (Windows only)
    is_current: bool = False
    is_next: bool = False


@dataclass
class ParseResult:
    entries: List[BootEntry] = field(default_factory=list)
    current: Optional[str] = None
    next: Optional[str] = None
    order: List[str] = field(default_factory=list)


@dataclass
class Override:
    label: Optional[str] = None
    hidden: Optional[bool] = None

    def to_dict(self) -> Dict[str, object]:
        data: Dict[str, object] = {}
        if self.label is not None:
            data['label'] = self.label
        if self.hidden is not None:
            data['hidden'] = self.hidden
        return data


@dataclass
class ViewEntry:
    id: str
    description: str
    display_label: str
    is_hidden: bool = False
    header: str = ''
    caption: str = ''
    is_current: bool = False
    is_next: bool = False


@dataclass
class BootView:
    visible: List[ViewEntry] = field(default_factory=list)
    hidden: List[ViewEntry] = field(default_factory=list)
    current: Optional[str] = None

    def all(self) -> List[ViewEntry]:
        return [*self.visible, *self.hidden]


class BootState(str, Enum):
    IDLE = 'idle'
    VALIDATING = 'validating'
    REJECTED = 'rejected'
    DISPATCHED = 'dispatched'
    SUCCEEDED = 'succeeded'
    FAILED = 'failed'


@dataclass
class BootOutcome:
    state: BootState
    target_label: str
    diagnostic: str = ''
    command: str = ''

    @property
    def ok(self) -> bool:
        return self.state == BootState.SUCCEEDED

    @classmethod
    def success(cls, target_label: str, command: str = '') -> 'BootOutcome':
        return cls(BootState.SUCCEEDED, target_label, command=command)

    @classmethod
    def failure(cls, target_label: str, diagnostic: str, command: str = '') -> 'BootOutcome':
        return cls(BootState.FAILED, target_label, diagnostic, command=command)
