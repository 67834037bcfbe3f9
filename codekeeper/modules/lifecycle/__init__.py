"""
Lifecycle Module - Black Box Interface

Purpose: Keep session records and their expiring codes consistent
Interface: start(), rotate(), validate(), stop(), list_active(), shutdown()
Hidden: Scan order, best-effort cleanup, partial-failure handling

The registry and the code store are never updated transactionally.
A session without a live code is a normal state.
"""

from .lifecycle import SessionLifecycle, StartedSession, ValidatedSession

__all__ = ["SessionLifecycle", "StartedSession", "ValidatedSession"]
