import logging

from pydantic import ValidationError

from shortlinks.types import LambdaEvent, LambdaContext, LambdaResponse
from shortlinks.schemas import UpdateLinkRequest, validate_linkid, describe_validation_error
from shortlinks.context import AppContext, dispatch
from shortlinks.dao.exceptions import DataStoreError, LinkNotFoundError
from shortlinks.utils import Session, json_body, guarantee_500_response
from shortlinks.utils.responses import response_200, response_400, response_401, response_404, response_422, response_503
from shortlinks.lambdas.update_url.constants import (
    INVALID_LINKID,
    INVALID_JSON_BODY,
    INVALID_INPUT,
    LINK_NOT_FOUND,
    INVALID_TOKEN,
    DATA_STORE_UNAVAILABLE,
    LINK_UPDATED,
)


logger = logging.getLogger(__name__)

LAMBDA_NAME = 'update_url'


def handle(event: LambdaEvent, app_context: AppContext, session: Session) -> LambdaResponse:
    """Update the target URL and/or expiry of a link on PATCH /{linkid}

    This handler follows this procedure:
    - Step 1: Validate link id and request body (no mutation happens on invalid input)
    - Step 2: Check the session token against the link's owner token
    - Step 3: Apply the new URL and/or expiry atomically (one store call)

    HTTP responses:
        200: {"status": "success"}
        400: Body isn't a JSON object
        401: Session token doesn't own the link
        404: Link doesn't exist
        422: Malformed link id, url or expire
        503: Data store unreachable
    """
    # 1- Validate everything before touching the data store
    linkid = (event.get('pathParameters') or {}).get('linkid')
    try:
        validate_linkid(linkid)
    except ValidationError:
        logger.info('Malformed link id in path. Responding with 422.', extra={'event': INVALID_LINKID})
        return response_422(message='invalid link id', error_code=INVALID_LINKID)

    try:
        body = json_body(event)
    except ValueError:
        logger.info('Request body is not a JSON object. Responding with 400.', extra={'linkid': linkid, 'event': INVALID_JSON_BODY})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON_BODY)

    try:
        request = UpdateLinkRequest.model_validate(body)
    except ValidationError as e:
        logger.info('Invalid update request. Responding with 422.', extra={'linkid': linkid, 'event': INVALID_INPUT})
        return response_422(message=describe_validation_error(e), error_code=INVALID_INPUT)

    try:
        # 2- Authorize
        if not session.owns(app_context.links.owner_token(linkid)):
            logger.info('Session token does not own the link. Responding with 401.', extra={'linkid': linkid, 'event': INVALID_TOKEN})
            return response_401(message='invalid link token', error_code=INVALID_TOKEN)

        # 3- Apply changes in a single store call
        if request.url is not None:
            app_context.links.update_url(linkid, request.url, expire=request.expire)
        elif request.expire is not None:
            app_context.links.expire(linkid, request.expire)
    except LinkNotFoundError:
        logger.info('Link not found. Responding with 404.', extra={'linkid': linkid, 'event': LINK_NOT_FOUND})
        return response_404(error_code=LINK_NOT_FOUND)
    except DataStoreError:
        logger.exception('Data store is unreachable. Responding with 503.', extra={'linkid': linkid, 'event': DATA_STORE_UNAVAILABLE})
        return response_503(error_code=DATA_STORE_UNAVAILABLE)

    logger.info(
        'Updated link. Responding with 200.',
        extra={'linkid': linkid, 'urlChanged': request.url is not None, 'expire': request.expire, 'event': LINK_UPDATED},
    )
    return response_200({'status': 'success'})


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    return dispatch(LAMBDA_NAME, handle, event)
