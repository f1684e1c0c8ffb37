# Event / error codes logged and returned by the list_history handler
LIST_HISTORY_SUCCESS = 'LIST_HISTORY_SUCCESS'
STORAGE_UNAVAILABLE = 'STORAGE_UNAVAILABLE'
CONFIGURATION_ERROR = 'CONFIGURATION_ERROR'
