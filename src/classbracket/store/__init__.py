"""Roster/match stores."""

from pathlib import Path
from typing import Optional, Union

from classbracket.store.base import TournamentStore
from classbracket.store.json_store import JsonFileStore
from classbracket.store.memory import InMemoryStore


def open_store(path: Optional[Union[str, Path]] = None) -> TournamentStore:
    """Open a JSON file store, or an in-memory one when no path is given."""
    if path:
        return JsonFileStore(path)
    return InMemoryStore()


__all__ = ["TournamentStore", "InMemoryStore", "JsonFileStore", "open_store"]
