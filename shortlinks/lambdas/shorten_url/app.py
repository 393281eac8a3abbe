import logging

from pydantic import ValidationError

from shortlinks.types import LambdaEvent, LambdaContext, LambdaResponse
from shortlinks.models import LinkModel
from shortlinks.schemas import CreateLinkRequest, describe_validation_error
from shortlinks.context import AppContext, dispatch
from shortlinks.dao.exceptions import DataStoreError, DataStoreWriteError
from shortlinks.exceptions import AllocationExhaustedError
from shortlinks.utils import Session, allocate_linkid, json_body, guarantee_500_response
from shortlinks.utils.responses import response_201, response_400, response_422, response_500, response_503
from shortlinks.lambdas.shorten_url.constants import (
    INVALID_JSON_BODY,
    INVALID_INPUT,
    ALLOCATION_EXHAUSTED,
    LINK_WRITE_FAILED,
    DATA_STORE_UNAVAILABLE,
    LINK_CREATED,
)


logger = logging.getLogger(__name__)

LAMBDA_NAME = 'shorten_url'


def handle(event: LambdaEvent, app_context: AppContext, session: Session) -> LambdaResponse:
    """Shorten the URL carried by a POST / request

    This handler follows this procedure to shorten URLs:
    - Step 1: Parse and validate the request body
    - Step 2: Allocate a free link id
    - Step 3: Store the link record, owned by the session token, with its expiry (one atomic write)
    - Step 4: Respond to user with 201 created

    HTTP responses:
        201: Link created
            url: original url (provided in request)
            shortLink: newly generated short link
            linkid: newly generated link id
            token: owner token, required to update or delete the link
        400: Body isn't a JSON object
        422: Invalid url, baseUrl or expire
        500: No free link id found, or the data store rejected the write
        503: Data store unreachable

    Args:
        event (LambdaEvent):
            API Gateway event payload in Lambda Proxy format.
        app_context (AppContext):
            Data store access and advertised origin.
        session (Session):
            Session of the client; its token becomes the link's owner token.

    Example:
        >>> event = {'body': '{"url": "https://example.com/a"}'}
        >>> response = handle(event, app_context, session)
        >>> response['statusCode']
        201
        >>> json.loads(response['body'])['linkid']
        'Gh71TCN'
    """
    # 1- Parse and validate the request body
    try:
        body = json_body(event)
    except ValueError:
        logger.info('Request body is not a JSON object. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON_BODY)

    try:
        request = CreateLinkRequest.model_validate(body)
    except ValidationError as e:
        logger.info('Invalid link request. Responding with 422.', extra={'event': INVALID_INPUT})
        return response_422(message=describe_validation_error(e), error_code=INVALID_INPUT)

    base_url = request.base_url or app_context.public_base_url(event)

    # 2- Allocate a free link id
    try:
        linkid = allocate_linkid(app_context.links)
    except AllocationExhaustedError:
        logger.error('Failed to allocate a link id. Responding with 500.', extra={'event': ALLOCATION_EXHAUSTED})
        return response_500(message='no free link id', error_code=ALLOCATION_EXHAUSTED)
    except DataStoreError:
        logger.exception('Data store is unreachable. Responding with 503.', extra={'event': DATA_STORE_UNAVAILABLE})
        return response_503(error_code=DATA_STORE_UNAVAILABLE)

    # 3- Store the link record together with its expiry
    link = LinkModel(linkid=linkid, url=request.url, base_url=base_url, token=session.token)
    try:
        app_context.links.insert(link, expire=request.expire)
    except DataStoreWriteError:
        logger.exception('Failed to store link. Responding with 500.', extra={'linkid': linkid, 'event': LINK_WRITE_FAILED})
        return response_500(message=f'failed to store link {linkid}', error_code=LINK_WRITE_FAILED)
    except DataStoreError:
        logger.exception('Data store is unreachable. Responding with 503.', extra={'linkid': linkid, 'event': DATA_STORE_UNAVAILABLE})
        return response_503(error_code=DATA_STORE_UNAVAILABLE)

    # 4- Respond with the new short link
    logger.info('Created short link %s for link %s', linkid, request.url, extra={'linkid': linkid, 'event': LINK_CREATED})
    return response_201(
        {
            'url': link.url,
            'shortLink': link.short_link,
            'linkid': linkid,
            'token': link.token,
        }
    )


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    return dispatch(LAMBDA_NAME, handle, event)
