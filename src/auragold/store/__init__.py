"""Persistence port for application state.

Core transforms never touch storage; callers load an AppState, apply pure
operations, and save the result through a StateStore.
"""

from .base import AppState, MemoryStore, StateStore  # re-export

__all__ = ["AppState", "MemoryStore", "StateStore"]
