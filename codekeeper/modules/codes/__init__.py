"""
Codes Module - Black Box Interface

Purpose: Hold the current access code for each session with a native TTL
Interface: CodeStore.set(), CodeStore.get(), CodeStore.delete(), generate_code()
Hidden: Redis key layout, expiry mechanics, error translation

Absence of a key IS expiration. Callers never re-check expiry themselves.
"""

from .generator import CODE_MAX, CODE_MIN, generate_code
from .store import CodeStore

__all__ = ["CodeStore", "generate_code", "CODE_MIN", "CODE_MAX"]
