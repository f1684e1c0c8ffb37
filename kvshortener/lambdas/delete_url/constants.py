# Event / error codes logged and returned by the delete_url handler
DELETE_SUCCESS = 'DELETE_SUCCESS'
DELETE_FAILED = 'DELETE_FAILED'
MISSING_SHORTCODE = 'MISSING_SHORTCODE'
STORAGE_UNAVAILABLE = 'STORAGE_UNAVAILABLE'
CONFIGURATION_ERROR = 'CONFIGURATION_ERROR'
