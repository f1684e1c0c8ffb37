# Event / error codes logged and returned by the shorten_url handler
SHORTEN_SUCCESS = 'SHORTEN_SUCCESS'
INVALID_JSON_BODY = 'INVALID_JSON_BODY'
MISSING_TARGET_URL = 'MISSING_TARGET_URL'
INVALID_TARGET_URL = 'INVALID_TARGET_URL'
KEY_SPACE_EXHAUSTED = 'KEY_SPACE_EXHAUSTED'
STORAGE_UNAVAILABLE = 'STORAGE_UNAVAILABLE'
CONFIGURATION_ERROR = 'CONFIGURATION_ERROR'
