"""
Session Module - Black Box Interface

Purpose: Track event sessions for the lifetime of the process
Interface: create(), exists(), get(), remove(), list_all()
Hidden: Session storage, locking, id allocation

Pure bookkeeping. Sessions are never expired here; only their codes lapse.
"""

from .registry import Session, SessionRegistry

__all__ = ["Session", "SessionRegistry"]
