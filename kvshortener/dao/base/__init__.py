from kvshortener.dao.base.link_base_dao import LinkBaseDAO
from kvshortener.dao.base.history_base_dao import HistoryBaseDAO


__all__ = [
    'LinkBaseDAO',
    'HistoryBaseDAO',
]
