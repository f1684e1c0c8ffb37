import json
from datetime import datetime, UTC
from typing import cast
from unittest.mock import MagicMock

import pytest
from pytest import MonkeyPatch

from kvshortener.types import LambdaEvent, LambdaContext, LambdaConfiguration
from kvshortener.lambdas.delete_url import app
from kvshortener.models import HistoryRecordModel
from kvshortener.dao.base import LinkBaseDAO, HistoryBaseDAO
from kvshortener.dao.exceptions import HistoryConflictError, StorageUnavailableError
from kvshortener.dao.memory import LinkMemoryDAO, HistoryMemoryDAO
from kvshortener.exceptions import MissingEnvironmentVariableError


def make_event(path_parameters: dict | None) -> LambdaEvent:
    return cast(LambdaEvent, {
        'resource': '/v1/links/{shortcode}',
        'httpMethod': 'DELETE',
        'path': '/v1/links/abc123',
        'pathParameters': path_parameters,
        'requestContext': {'domainName': 'sho.rt', 'stage': 'test'},
    })


class TestDeleteUrlHandler:

    @pytest.fixture
    def context(self) -> LambdaContext:
        return cast(LambdaContext, {'function_name': 'delete_url'})

    @pytest.fixture
    def config(self) -> LambdaConfiguration:
        return cast(LambdaConfiguration, {'memory': {}})

    @pytest.fixture(autouse=True)
    def setup(self, monkeypatch: MonkeyPatch, context: LambdaContext, config: LambdaConfiguration) -> None:
        monkeypatch.setenv('APP_ENV', 'test')
        monkeypatch.delenv('AWS_SAM_LOCAL', raising=False)

        self.links = LinkMemoryDAO({'abc123': 'https://example.com/a'})
        self.history = HistoryMemoryDAO()
        self.history.append(HistoryRecordModel('abc123', 'https://example.com/a', datetime(2025, 10, 15, 12, 0, tzinfo=UTC)))

        # Patch Lambda dependencies
        monkeypatch.setattr(app, 'load_config', lambda *a, **kw: config)
        monkeypatch.setattr(app, 'create_daos', lambda *a, **kw: (self.links, self.history))

        self.context = context

    def test_lambda_handler(self) -> None:
        response = app.lambda_handler(make_event({'shortcode': 'abc123'}), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 200
        assert body == {'deleted': True, 'history_stale': False}
        assert self.links.get('abc123') is None
        assert self.history.list() == []

    def test_lambda_handler_is_idempotent(self) -> None:
        first = app.lambda_handler(make_event({'shortcode': 'abc123'}), self.context)
        second = app.lambda_handler(make_event({'shortcode': 'abc123'}), self.context)

        assert first['statusCode'] == second['statusCode'] == 200
        assert json.loads(second['body']) == {'deleted': True, 'history_stale': False}

    @pytest.mark.parametrize('path_parameters', [None, {}])
    def test_lambda_handler_with_invalid_path_parameters(self, path_parameters: dict | None) -> None:
        response = app.lambda_handler(make_event(path_parameters), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 400
        assert body['errorCode'] == 'MISSING_SHORTCODE'
        assert self.links.count() == 1

    def test_lambda_handler_with_failing_link_store(self, monkeypatch: MonkeyPatch) -> None:
        links = MagicMock(spec=LinkBaseDAO)
        links.delete.side_effect = StorageUnavailableError('down')
        monkeypatch.setattr(app, 'create_daos', lambda *a, **kw: (links, self.history))

        response = app.lambda_handler(make_event({'shortcode': 'abc123'}), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 500
        assert body == {'message': 'Internal Server Error', 'errorCode': 'DELETE_FAILED', 'error': 'dao:storage_unavailable_error'}
        assert [record.code for record in self.history.list()] == ['abc123']

    def test_lambda_handler_with_failing_history(self, monkeypatch: MonkeyPatch) -> None:
        history = MagicMock(spec=HistoryBaseDAO)
        history.remove.side_effect = HistoryConflictError('busy')
        monkeypatch.setattr(app, 'create_daos', lambda *a, **kw: (self.links, history))

        response = app.lambda_handler(make_event({'shortcode': 'abc123'}), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 200
        assert body == {'deleted': True, 'history_stale': True}
        assert self.links.get('abc123') is None

    def test_lambda_handler_with_unreachable_storage(self, monkeypatch: MonkeyPatch) -> None:
        monkeypatch.setattr(app, 'create_daos', MagicMock(side_effect=StorageUnavailableError('down')))

        response = app.lambda_handler(make_event({'shortcode': 'abc123'}), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 500
        assert body == {'message': 'Internal Server Error', 'errorCode': 'STORAGE_UNAVAILABLE'}

    def test_lambda_handler_with_invalid_configuration(self, monkeypatch: MonkeyPatch) -> None:
        monkeypatch.setattr(app, 'load_config', MagicMock(side_effect=MissingEnvironmentVariableError('APPCONFIG_APP_ID')))

        response = app.lambda_handler(make_event({'shortcode': 'abc123'}), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 500
        assert body['errorCode'] == 'CONFIGURATION_ERROR'
