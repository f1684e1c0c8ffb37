import logging

from kvshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from kvshortener.exceptions import ConfigurationError
from kvshortener.dao.exceptions import StorageUnavailableError
from kvshortener.dao.factory import create_daos
from kvshortener.services import LinkService
from kvshortener.utils import load_config, app_prefix
from kvshortener.utils.helpers import guarantee_500_response
from kvshortener.lambdas.responses import response_200, response_400, response_500
from kvshortener.lambdas.delete_url.constants import (
    DELETE_SUCCESS,
    DELETE_FAILED,
    MISSING_SHORTCODE,
    STORAGE_UNAVAILABLE,
    CONFIGURATION_ERROR,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to delete short links

    This Lambda handler follows this procedure to delete links:
    - Step 1: Extract shortcode from request path
    - Step 2: Delete from the link store, then from the history log
    - Step 3: Report outcome

    Deleting a code that does not exist succeeds.

    HTTP responses:
        200: Link no longer resolves
            deleted: always true
            history_stale: true if a history record may have been left behind
        400: Bad client request
            message: missing shortcode in path parameters
        500: Internal server error
            errorCode: DELETE_FAILED, STORAGE_UNAVAILABLE or CONFIGURATION_ERROR
            error: error tag reported by the failing store (DELETE_FAILED only)
    """
    # 0- Get application's config
    try:
        app_config = load_config('delete_url')
    except ConfigurationError:
        logger.exception('Failed to load AppConfig for delete URL function. Responding with 500.', extra={'event': CONFIGURATION_ERROR})
        return response_500(error_code=CONFIGURATION_ERROR)

    # 1- Extract shortcode from request's path
    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if shortcode is None:
        logger.info('Missing "shortcode" in path. Responding with 400.', extra={'event': MISSING_SHORTCODE})
        return response_400(message="missing 'shortcode' in path", error_code=MISSING_SHORTCODE)

    # 2- Delete link, then history record
    try:
        links, history = create_daos(app_config, prefix=app_prefix())
        result = LinkService(links, history).delete(shortcode)
    except StorageUnavailableError:
        logger.exception('Storage unavailable. Responding with 500.', extra={'shortcode': shortcode, 'event': STORAGE_UNAVAILABLE})
        return response_500(error_code=STORAGE_UNAVAILABLE)
    except ConfigurationError:
        logger.exception('Bad backend configuration. Responding with 500.', extra={'event': CONFIGURATION_ERROR})
        return response_500(error_code=CONFIGURATION_ERROR)

    # 3- Report outcome
    if not result.success:
        logger.error(
            'Link could not be deleted. Responding with 500.',
            extra={'shortcode': shortcode, 'error': result.error_code, 'event': DELETE_FAILED},
        )
        return response_500(error_code=DELETE_FAILED, error=result.error_code)

    logger.info(
        'Deleted link. Responding with 200.',
        extra={'shortcode': shortcode, 'historyStale': result.history_stale, 'event': DELETE_SUCCESS},
    )
    return response_200({'deleted': True, 'history_stale': result.history_stale})
