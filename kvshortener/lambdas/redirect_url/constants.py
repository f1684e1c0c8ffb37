# Event / error codes logged and returned by the redirect_url handler
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
MISSING_SHORTCODE = 'MISSING_SHORTCODE'
SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
STORAGE_UNAVAILABLE = 'STORAGE_UNAVAILABLE'
CONFIGURATION_ERROR = 'CONFIGURATION_ERROR'
