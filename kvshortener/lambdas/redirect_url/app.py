import logging

from kvshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from kvshortener.exceptions import ConfigurationError
from kvshortener.dao.exceptions import StorageUnavailableError
from kvshortener.dao.factory import create_daos
from kvshortener.services import RedirectResolver
from kvshortener.utils import load_config, get_short_url, app_prefix
from kvshortener.utils.helpers import guarantee_500_response
from kvshortener.lambdas.responses import response_302, response_400, response_404, response_500
from kvshortener.lambdas.redirect_url.constants import (
    MISSING_SHORTCODE,
    SHORT_URL_NOT_FOUND,
    REDIRECT_SUCCESS,
    STORAGE_UNAVAILABLE,
    CONFIGURATION_ERROR,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to redirect URLs

    This Lambda handler follows this procedure to redirect URLs:
    - Step 1: Extract shortcode from request path
    - Step 2: Resolve the shortcode against the link store (history is never consulted)
    - Step 3: Redirect client to target URL, or answer "not found"

    HTTP responses:
        302: Successful redirect
            headers:
                Location: target URL destination
        400: Bad client request
            message: missing shortcode in path parameters
        404: Link not found
            headers:
                Refresh: timed fallback redirect to the home page
        500: Internal server error
            errorCode: STORAGE_UNAVAILABLE or CONFIGURATION_ERROR

    Example:
        >>> event = {'pathParameters': {'shortcode': 'k3x9a0'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://example.com/my-page'
    """
    # 0- Get application's config
    try:
        app_config = load_config('redirect_url')
    except ConfigurationError:
        logger.exception('Failed to load AppConfig for redirect URL function. Responding with 500.', extra={'event': CONFIGURATION_ERROR})
        return response_500(error_code=CONFIGURATION_ERROR)

    # 1- Extract shortcode from request's path
    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if shortcode is None:
        logger.info('Missing "shortcode" in path. Responding with 400.', extra={'event': MISSING_SHORTCODE})
        return response_400(message="missing 'shortcode' in path", error_code=MISSING_SHORTCODE)
    logger.debug('Client requested short URL %s.', get_short_url(shortcode, event))

    # 2- Resolve shortcode
    try:
        links, _ = create_daos(app_config, prefix=app_prefix())
        target_url = RedirectResolver(links).resolve(shortcode)
    except StorageUnavailableError:
        logger.exception('Link store unavailable. Responding with 500.', extra={'shortcode': shortcode, 'event': STORAGE_UNAVAILABLE})
        return response_500(error_code=STORAGE_UNAVAILABLE)
    except ConfigurationError:
        logger.exception('Bad backend configuration. Responding with 500.', extra={'event': CONFIGURATION_ERROR})
        return response_500(error_code=CONFIGURATION_ERROR)

    # 3- Redirect client to target URL, or fall back to the home page
    if target_url is None:
        logger.info(
            'Short URL record not found in database. Responding with 404.',
            extra={'shortcode': shortcode, 'event': SHORT_URL_NOT_FOUND},
        )
        return response_404(message=f"short url {get_short_url(shortcode, event)} doesn't exist", error_code=SHORT_URL_NOT_FOUND)

    logger.info(
        'Redirecting client to target URL. Responding with 302.',
        extra={'shortcode': shortcode, 'event': REDIRECT_SUCCESS},
    )
    return response_302(location=target_url)
