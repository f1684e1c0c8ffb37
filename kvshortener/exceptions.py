class KVShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:kvshortener_error'


class KeySpaceExhaustedError(KVShortenerError):
    """Raised when every short code candidate collided with an existing link."""

    error_code = 'app:key_space_exhausted_error'


class ConfigurationError(KVShortenerError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
