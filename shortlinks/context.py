"""Request-independent dependencies shared by the Lambda handlers.

Handlers receive an AppContext (data store access, advertised origin) and the
client's Session explicitly instead of reading process-global state:

    >>> app_context = build_context('redirect_url')
    >>> session = resolve_session(event)
    >>> response = handle(event, app_context, session)

`dispatch()` wires both up for a Lambda entry point.
"""

import logging
from dataclasses import dataclass
from collections.abc import Callable

from shortlinks.types import LambdaEvent, LambdaResponse
from shortlinks.dao.base import LinkBaseDAO
from shortlinks.dao.redis import LinkRedisDAO
from shortlinks.dao.exceptions import DataStoreError
from shortlinks.exceptions import ConfigurationError
from shortlinks.utils import load_config, app_prefix, base_url, resolve_session, Session
from shortlinks.utils.responses import response_500, response_503, with_session


logger = logging.getLogger(__name__)

CONFIGURATION_ERROR = 'CONFIGURATION_ERROR'
DATA_STORE_UNAVAILABLE = 'DATA_STORE_UNAVAILABLE'


@dataclass(frozen=True)
class AppContext:
    """Dependencies injected into every handler.

    Attributes:
        links (LinkBaseDAO):
            Data access object for link records.
        base_url (str | None):
            Configured public origin for short links. When None, the origin
            is derived from the incoming request.
    """

    links: LinkBaseDAO
    base_url: str | None = None

    def public_base_url(self, event: LambdaEvent) -> str:
        return self.base_url or base_url(event)


type Handler = Callable[[LambdaEvent, AppContext, Session], LambdaResponse]


def build_context(lambda_name: str) -> AppContext:
    """Build the AppContext for a Lambda from its configuration.

    Raises:
        ConfigurationError:
            If the configuration can't be loaded or is invalid.
        DataStoreError:
            If Redis is unreachable.
    """
    app_config = load_config(lambda_name)
    redis_config = {f'redis_{k}': v for k, v in app_config['redis'].items()}
    return AppContext(
        links=LinkRedisDAO(**redis_config, prefix=app_prefix()),
        base_url=app_config.get('base_url'),
    )


def dispatch(lambda_name: str, handle: Handler, event: LambdaEvent) -> LambdaResponse:
    """Resolve the session and context for an event, then run the handler on them.

    The session cookie is attached to every response which needs it.
    """
    session = resolve_session(event)

    try:
        app_context = build_context(lambda_name)
    except ConfigurationError:
        logger.exception('Failed to load configuration. Responding with 500.', extra={'lambdaName': lambda_name, 'event': CONFIGURATION_ERROR})
        return with_session(response_500(error_code=CONFIGURATION_ERROR), session)
    except DataStoreError:
        logger.exception('Data store is unreachable. Responding with 503.', extra={'lambdaName': lambda_name, 'event': DATA_STORE_UNAVAILABLE})
        return with_session(response_503(error_code=DATA_STORE_UNAVAILABLE), session)

    return with_session(handle(event, app_context, session), session)
