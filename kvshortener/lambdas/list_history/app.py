import logging

from kvshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from kvshortener.exceptions import ConfigurationError
from kvshortener.models import format_timestamp
from kvshortener.dao.exceptions import StorageUnavailableError
from kvshortener.dao.factory import create_daos
from kvshortener.services import LinkService
from kvshortener.utils import load_config, get_short_url, app_prefix
from kvshortener.utils.helpers import guarantee_500_response
from kvshortener.lambdas.responses import response_200, response_500
from kvshortener.lambdas.list_history.constants import (
    LIST_HISTORY_SUCCESS,
    STORAGE_UNAVAILABLE,
    CONFIGURATION_ERROR,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to list recently created links

    HTTP responses:
        200: History listing, newest first
            count: number of history records returned
            stored_links: number of links currently in the link store
            links: list of {shortcode, target_url, short_url, created_at}
        500: Internal server error
            errorCode: STORAGE_UNAVAILABLE or CONFIGURATION_ERROR

    NOTE: history is an audit trail. A listed link may have been deleted since.
    """
    # 0- Get application's config
    try:
        app_config = load_config('list_history')
    except ConfigurationError:
        logger.exception('Failed to load AppConfig for list history function. Responding with 500.', extra={'event': CONFIGURATION_ERROR})
        return response_500(error_code=CONFIGURATION_ERROR)

    # 1- Read history log and link count
    try:
        links, history = create_daos(app_config, prefix=app_prefix())
        service = LinkService(links, history)
        records = service.history()
        stored_links = service.count()
    except StorageUnavailableError:
        logger.exception('Storage unavailable. Responding with 500.', extra={'event': STORAGE_UNAVAILABLE})
        return response_500(error_code=STORAGE_UNAVAILABLE)
    except ConfigurationError:
        logger.exception('Bad backend configuration. Responding with 500.', extra={'event': CONFIGURATION_ERROR})
        return response_500(error_code=CONFIGURATION_ERROR)

    # 2- Return listing
    logger.info('Listed history. Responding with 200.', extra={'count': len(records), 'event': LIST_HISTORY_SUCCESS})
    return response_200(
        {
            'count': len(records),
            'stored_links': stored_links,
            'links': [
                {
                    'shortcode': record.code,
                    'target_url': record.url,
                    'short_url': get_short_url(record.code, event),
                    'created_at': format_timestamp(record.created_at),
                }
                for record in records
            ],
        }
    )
