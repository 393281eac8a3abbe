import logging

from pydantic import ValidationError

from shortlinks.types import LambdaEvent, LambdaContext, LambdaResponse
from shortlinks.schemas import validate_linkid
from shortlinks.context import AppContext, dispatch
from shortlinks.dao.exceptions import DataStoreError, LinkNotFoundError
from shortlinks.utils import Session, guarantee_500_response
from shortlinks.utils.responses import response_301, response_404, response_422, response_503
from shortlinks.lambdas.redirect_url.constants import (
    INVALID_LINKID,
    LINK_NOT_FOUND,
    DATA_STORE_UNAVAILABLE,
    REDIRECT_SUCCESS,
)


logger = logging.getLogger(__name__)

LAMBDA_NAME = 'redirect_url'


def handle(event: LambdaEvent, app_context: AppContext, session: Session) -> LambdaResponse:
    """Redirect a GET /{linkid} request to the link's target URL

    No authorization is required. Every successful redirect counts one access.

    HTTP responses:
        301: Successful redirect
            headers:
                Location: target URL destination
                X-Accessed: access count including this request
        404: Link doesn't exist (never created or expired)
        422: Malformed link id
        503: Data store unreachable

    Example:
        >>> event = {'pathParameters': {'linkid': 'Gh71TCN'}}
        >>> response = handle(event, app_context, session)
        >>> response['statusCode']
        301
        >>> response['headers']['Location']
        'https://example.com/my-page'
    """
    linkid = (event.get('pathParameters') or {}).get('linkid')
    try:
        validate_linkid(linkid)
    except ValidationError:
        logger.info('Malformed link id in path. Responding with 422.', extra={'event': INVALID_LINKID})
        return response_422(message='invalid link id', error_code=INVALID_LINKID)

    try:
        accessed, url = app_context.links.resolve(linkid)
    except LinkNotFoundError:
        logger.info('Link not found. Responding with 404.', extra={'linkid': linkid, 'event': LINK_NOT_FOUND})
        return response_404(error_code=LINK_NOT_FOUND)
    except DataStoreError:
        logger.exception('Data store is unreachable. Responding with 503.', extra={'linkid': linkid, 'event': DATA_STORE_UNAVAILABLE})
        return response_503(error_code=DATA_STORE_UNAVAILABLE)

    logger.info(
        'Redirecting client to target URL. Responding with 301.',
        extra={'linkid': linkid, 'accessed': accessed, 'event': REDIRECT_SUCCESS},
    )
    return response_301(location=url, accessed=accessed)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    return dispatch(LAMBDA_NAME, handle, event)
