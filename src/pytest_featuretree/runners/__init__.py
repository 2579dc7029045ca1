"""Test runner adapters driven by the tree walker."""

from .base import HOOK_KINDS, GroupBody, HookBody, HookKind, Runner, TestBody
from .recording import Declaration, GroupDeclaration, RecordingRunner, TestDeclaration

__all__ = (
    'HOOK_KINDS',
    'Declaration',
    'GroupBody',
    'GroupDeclaration',
    'HookBody',
    'HookKind',
    'RecordingRunner',
    'Runner',
    'TestBody',
    'TestDeclaration',
)
