import json
import logging

from kvshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from kvshortener.exceptions import ConfigurationError, KeySpaceExhaustedError
from kvshortener.dao.exceptions import StorageUnavailableError
from kvshortener.dao.factory import create_daos
from kvshortener.services import LinkService
from kvshortener.utils import load_config, get_short_url, app_prefix, is_absolute_url
from kvshortener.utils.helpers import guarantee_500_response
from kvshortener.lambdas.responses import response_200, response_400, response_500
from kvshortener.lambdas.shorten_url.constants import (
    SHORTEN_SUCCESS,
    INVALID_JSON_BODY,
    MISSING_TARGET_URL,
    INVALID_TARGET_URL,
    KEY_SPACE_EXHAUSTED,
    STORAGE_UNAVAILABLE,
    CONFIGURATION_ERROR,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to shorten URLs

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Extract original URL from request body
    - Step 2: Validate it is an absolute http(s) URL
    - Step 3: Generate a unique shortcode and store the mapping (+ history record)
    - Step 4: Respond to user with 200 success

    HTTP responses:
        200: Successful URL shortening
            message: success message
            target_url: original url (provided in request)
            short_url: newly generated short url
            shortcode: newly generated shortcode
        400: Bad client request
            message: invalid JSON, missing or malformed target_url
        500: Internal server error
            errorCode: KEY_SPACE_EXHAUSTED, STORAGE_UNAVAILABLE or CONFIGURATION_ERROR

    Example:
        >>> event = {'body': '{"target_url": "https://example.com"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        200
        >>> json.loads(response['body'])['shortcode']
        'k3x9a0'
    """
    # 0- Get application's config
    try:
        app_config = load_config('shorten_url')
    except ConfigurationError:
        logger.exception('Failed to load AppConfig for shorten URL function. Responding with 500.', extra={'event': CONFIGURATION_ERROR})
        return response_500(error_code=CONFIGURATION_ERROR)

    # 1- Extract original URL from request body
    try:
        request_body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON_BODY)

    target_url = request_body.get('target_url') if isinstance(request_body, dict) else None
    if not target_url:
        logger.info("Missing 'target_url' in body. Responding with 400.", extra={'event': MISSING_TARGET_URL})
        return response_400(message="missing 'target_url' in JSON body", error_code=MISSING_TARGET_URL)

    # 2- Validate URL before it reaches the core
    if not is_absolute_url(target_url):
        logger.info('Malformed target URL. Responding with 400.', extra={'event': INVALID_TARGET_URL})
        return response_400(message='invalid URL format', error_code=INVALID_TARGET_URL)

    # 3- Generate shortcode and store link (+ history record)
    try:
        links, history = create_daos(app_config, prefix=app_prefix())
        shortcode = LinkService(links, history).create(target_url)
    except KeySpaceExhaustedError:
        logger.exception('Could not find a free shortcode. Responding with 500.', extra={'event': KEY_SPACE_EXHAUSTED})
        return response_500(error_code=KEY_SPACE_EXHAUSTED)
    except StorageUnavailableError:
        logger.exception('Link store unavailable. Responding with 500.', extra={'event': STORAGE_UNAVAILABLE})
        return response_500(error_code=STORAGE_UNAVAILABLE)
    except ConfigurationError:
        logger.exception('Bad backend configuration. Responding with 500.', extra={'event': CONFIGURATION_ERROR})
        return response_500(error_code=CONFIGURATION_ERROR)

    # 4- Return successful response to user
    short_url = get_short_url(shortcode, event)
    logger.info('Shortened URL. Responding with 200.', extra={'shortcode': shortcode, 'event': SHORTEN_SUCCESS})
    return response_200(
        {
            'message': f'Successfully shortened {target_url} to {short_url}',
            'target_url': target_url,
            'short_url': short_url,
            'shortcode': shortcode,
        }
    )
