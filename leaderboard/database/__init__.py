from .journal import FileJournal, Journal, MemoryJournal, create_journal
from .store import RankedStore

__all__ = ['FileJournal', 'Journal', 'MemoryJournal', 'RankedStore', 'create_journal']
