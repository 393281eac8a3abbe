import logging

from pydantic import ValidationError

from shortlinks.types import LambdaEvent, LambdaContext, LambdaResponse
from shortlinks.schemas import validate_linkid
from shortlinks.context import AppContext, dispatch
from shortlinks.dao.exceptions import DataStoreError, LinkNotFoundError
from shortlinks.utils import Session, guarantee_500_response
from shortlinks.utils.responses import response_200, response_401, response_404, response_422, response_503
from shortlinks.lambdas.delete_url.constants import (
    INVALID_LINKID,
    LINK_NOT_FOUND,
    INVALID_TOKEN,
    DATA_STORE_UNAVAILABLE,
    LINK_DELETED,
)


logger = logging.getLogger(__name__)

LAMBDA_NAME = 'delete_url'


def handle(event: LambdaEvent, app_context: AppContext, session: Session) -> LambdaResponse:
    """Delete a link on DELETE /{linkid}

    HTTP responses:
        200: {"removed": 0 | 1}
        401: Session token doesn't own the link
        404: Link doesn't exist
        422: Malformed link id
        503: Data store unreachable

    Example:
        >>> event = {'pathParameters': {'linkid': 'Gh71TCN'}, 'headers': {'Authorization': 'Token ...'}}
        >>> json.loads(handle(event, app_context, session)['body'])
        {'removed': 1}
    """
    linkid = (event.get('pathParameters') or {}).get('linkid')
    try:
        validate_linkid(linkid)
    except ValidationError:
        logger.info('Malformed link id in path. Responding with 422.', extra={'event': INVALID_LINKID})
        return response_422(message='invalid link id', error_code=INVALID_LINKID)

    try:
        if not session.owns(app_context.links.owner_token(linkid)):
            logger.info('Session token does not own the link. Responding with 401.', extra={'linkid': linkid, 'event': INVALID_TOKEN})
            return response_401(message='invalid link delete token', error_code=INVALID_TOKEN)

        removed = app_context.links.delete(linkid)
    except LinkNotFoundError:
        logger.info('Link not found. Responding with 404.', extra={'linkid': linkid, 'event': LINK_NOT_FOUND})
        return response_404(error_code=LINK_NOT_FOUND)
    except DataStoreError:
        logger.exception('Data store is unreachable. Responding with 503.', extra={'linkid': linkid, 'event': DATA_STORE_UNAVAILABLE})
        return response_503(error_code=DATA_STORE_UNAVAILABLE)

    logger.info('Deleted link. Responding with 200.', extra={'linkid': linkid, 'removed': removed, 'event': LINK_DELETED})
    return response_200({'removed': removed})


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    return dispatch(LAMBDA_NAME, handle, event)
