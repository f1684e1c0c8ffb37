"""API Gateway (Lambda proxy) response builders shared by all handlers

Error responses only carry a generic message and an `errorCode` tag; internal
diagnostic detail stays in the logs.
"""

import json
from typing import Any

from kvshortener.constants import NOT_FOUND_REFRESH_SECONDS


CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'Content-Type',
    'Access-Control-Allow-Methods': 'OPTIONS,POST,GET,DELETE',
}


def response_200(body: dict[str, Any]) -> dict:
    return {
        'statusCode': 200,
        'headers': {'Content-Type': 'application/json', **CORS_HEADERS},
        'body': json.dumps(body),
    }


def response_302(*, location: str) -> dict:
    return {
        'statusCode': 302,
        'headers': {'Location': location, **CORS_HEADERS},
        'body': json.dumps({}),  # no body needed for redirects
    }


def response_400(message: str | None = None, error_code: str | None = None) -> dict:
    base = 'Bad Request'
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return {
        'statusCode': 400,
        'body': json.dumps(body),
    }


def response_404(*, message: str | None = None, error_code: str | None = None, fallback_url: str = '/') -> dict:
    """Link-not-found response with a timed fallback redirect to `fallback_url`"""
    body = {'message': message or 'Not Found', 'fallbackUrl': fallback_url}
    if error_code:
        body['errorCode'] = error_code
    return {
        'statusCode': 404,
        'headers': {
            'Content-Type': 'application/json',
            'Refresh': f'{NOT_FOUND_REFRESH_SECONDS}; url={fallback_url}',
            **CORS_HEADERS,
        },
        'body': json.dumps(body),
    }


def response_500(error_code: str | None = None, error: str | None = None) -> dict:
    body = {'message': 'Internal Server Error'}
    if error_code:
        body['errorCode'] = error_code
    if error:
        body['error'] = error
    return {
        'statusCode': 500,
        'body': json.dumps(body),
    }
