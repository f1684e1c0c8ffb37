from kvshortener.dao.memory.link_memory_dao import LinkMemoryDAO
from kvshortener.dao.memory.history_memory_dao import HistoryMemoryDAO


__all__ = [
    'LinkMemoryDAO',
    'HistoryMemoryDAO',
]
