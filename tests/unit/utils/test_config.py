"""Unit tests for configuration utilities in config.py

Test coverage includes:

1. Environment variable resolution
   - Ensures app_env(), app_name(), app_prefix() correctly read environment variables.

2. Configuration loading behavior
   - Ensures load_config() returns the Lambda's section for the active backend.
   - Ensures load_config() raises ClientError when AppConfig calls fail.
   - Ensures missing environment variables and sections raise ConfigurationError subclasses.

3. Local AppConfig agent
   - Ensures the agent URL is validated.
   - Ensures the agent is only used when running locally.
"""

import os
import json
from io import BytesIO
from unittest.mock import MagicMock

import pytest
import botocore

from kvshortener.utils import config
from kvshortener.exceptions import BadConfigurationError, MissingEnvironmentVariableError


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture(autouse=True)
def _env(monkeypatch):
    """Set up environment variables for testing."""
    monkeypatch.setenv('APPCONFIG_APP_ID', 'app123')
    monkeypatch.setenv('APPCONFIG_ENV_ID', 'env123')
    monkeypatch.setenv('APPCONFIG_PROFILE_ID', 'prof123')
    monkeypatch.setenv('APP_NAME', 'test-app')
    monkeypatch.setenv('APP_ENV', 'test')
    monkeypatch.delenv('APPCONFIG_AGENT_URL', raising=False)
    monkeypatch.delenv('AWS_SAM_LOCAL', raising=False)


@pytest.fixture
def appconfig_payload():
    """Provide a default AppConfig payload used by multiple tests."""
    # fmt: off
    return {
        'build': 42,
        'active_backend': 'redis',
        'configs': {
            'test_lambda': {
                'redis': {
                    'host': 'monkey',
                    'port': 6380,
                    'db': 3
                },
                'memory': {}
            }
        },
    }
    # fmt: on


@pytest.fixture
def mock_appconfig(monkeypatch, appconfig_payload):
    """Mock the AppConfig Data client returned by boto3."""
    client = MagicMock()
    client.start_configuration_session.return_value = {'InitialConfigurationToken': 'monkey_token'}
    client.get_latest_configuration.return_value = {'Configuration': BytesIO(json.dumps(appconfig_payload).encode('utf-8'))}
    monkeypatch.setattr(config.boto3, 'client', lambda service: client)
    return client


# -------------------------------
# 1. Environment variable resolution
# -------------------------------


def test_app_env(monkeypatch):
    """Ensure app_env() returns the lowercased environment value from APP_ENV"""
    monkeypatch.setitem(os.environ, 'APP_ENV', 'Prod')
    assert config.app_env() == 'prod'


def test_app_env_defaults_to_local(monkeypatch):
    monkeypatch.delitem(os.environ, 'APP_ENV', raising=False)
    assert config.app_env() == 'local'


def test_app_name(monkeypatch):
    """Ensure app_name() returns the correct environment value from APP_NAME"""
    monkeypatch.setitem(os.environ, 'APP_NAME', 'test-app')
    assert config.app_name() == 'test-app'


def test_app_name_not_set(monkeypatch):
    """Ensure app_name() returns None when APP_NAME is not set"""
    monkeypatch.delitem(os.environ, 'APP_NAME', raising=False)
    assert config.app_name() is None


def test_app_prefix():
    """Ensure app_prefix() combines APP_NAME and APP_ENV"""
    assert config.app_prefix() == 'test-app:test'


def test_app_prefix_without_app_name(monkeypatch):
    monkeypatch.delitem(os.environ, 'APP_NAME', raising=False)
    assert config.app_prefix() is None


# -------------------------------
# 2. Configuration loading behavior
# -------------------------------


def test_load_config(mock_appconfig):
    """Ensure load_config() returns only the active backend's section."""
    result = config.load_config('test_lambda')

    assert result == {'redis': {'host': 'monkey', 'port': 6380, 'db': 3}}
    mock_appconfig.start_configuration_session.assert_called_once_with(
        ApplicationIdentifier='app123',
        EnvironmentIdentifier='env123',
        ConfigurationProfileIdentifier='prof123',
    )
    mock_appconfig.get_latest_configuration.assert_called_once_with(ConfigurationToken='monkey_token')


def test_load_config_for_unknown_lambda(mock_appconfig):
    with pytest.raises(BadConfigurationError, match="no 'other_lambda' section"):
        config.load_config('other_lambda')


def test_load_config_with_missing_environment(monkeypatch, mock_appconfig):
    monkeypatch.delenv('APPCONFIG_PROFILE_ID')

    with pytest.raises(MissingEnvironmentVariableError, match="'APPCONFIG_PROFILE_ID'"):
        config.load_config('test_lambda')

    mock_appconfig.start_configuration_session.assert_not_called()


def test_missing_appconfig_raises_error(monkeypatch):
    """Ensure load_config() propagates ClientError when AppConfig returns an error."""
    mock_appconfig = MagicMock()
    mock_appconfig.start_configuration_session.side_effect = botocore.exceptions.ClientError(
        {'Error': {'Code': 'ResourceNotFoundException'}}, 'StartConfigurationSession'
    )
    monkeypatch.setattr(config.boto3, 'client', lambda service: mock_appconfig)

    with pytest.raises(botocore.exceptions.ClientError):
        config.load_config('test_lambda')


@pytest.mark.parametrize(
    'document',
    [
        {},
        {'active_backend': 'redis'},
        {'active_backend': 'redis', 'configs': {'test_lambda': {}}},
        {'active_backend': 'redis', 'configs': None},
    ],
)
def test_select_lambda_config_with_incomplete_document(document):
    with pytest.raises(BadConfigurationError):
        config._select_lambda_config(document, 'test_lambda')


# -------------------------------
# 3. Local AppConfig agent
# -------------------------------


@pytest.mark.parametrize(
    'url',
    [
        'http://localhost:2772',
        'http://appconfig-agent:2772',
        'http://host.docker.internal',
    ],
)
def test_validate_appconfig_agent_url(url):
    assert config._validate_appconfig_agent_url(url) == url


def test_validate_empty_appconfig_agent_url():
    assert config._validate_appconfig_agent_url(None) == ''


@pytest.mark.parametrize(
    'url',
    [
        'file:///etc/passwd',
        'http://169.254.169.254:2772',
        'http://localhost:8080',
    ],
)
def test_validate_unsafe_appconfig_agent_url(url):
    with pytest.raises(BadConfigurationError):
        config._validate_appconfig_agent_url(url)


def test_load_config_from_local_agent(monkeypatch, mock_appconfig, appconfig_payload):
    """Ensure the local agent is queried instead of AWS when running locally."""
    monkeypatch.setenv('APP_ENV', 'local')
    monkeypatch.setenv('APPCONFIG_AGENT_URL', 'http://appconfig-agent:2772')

    response = MagicMock()
    response.__enter__.return_value = BytesIO(json.dumps(appconfig_payload).encode('utf-8'))
    urlopen = MagicMock(return_value=response)
    monkeypatch.setattr(config.urllib.request, 'urlopen', urlopen)

    result = config.load_config('test_lambda')

    assert result == {'redis': {'host': 'monkey', 'port': 6380, 'db': 3}}
    urlopen.assert_called_once_with(
        'http://appconfig-agent:2772/applications/test-app/environments/local/configurations/backend-config',
        timeout=5,
    )
    mock_appconfig.start_configuration_session.assert_not_called()


def test_local_agent_ignored_outside_local_runs(monkeypatch, mock_appconfig):
    monkeypatch.setenv('APPCONFIG_AGENT_URL', 'http://appconfig-agent:2772')
    urlopen = MagicMock()
    monkeypatch.setattr(config.urllib.request, 'urlopen', urlopen)

    config.load_config('test_lambda')

    urlopen.assert_not_called()
    mock_appconfig.start_configuration_session.assert_called_once()
