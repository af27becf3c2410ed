"""Storage for Trading Tracker."""

from tradetracker.db.store import DuplicateEntryError, EntryNotFoundError, JournalStore

__all__ = ["DuplicateEntryError", "EntryNotFoundError", "JournalStore"]
