"""Utility functions for application configuration management.

Lambda functions resolve their configuration from one of three sources,
tried in this order:

1. The process environment, when `REDIS_URL` is set (plain local runs, tests).
2. A local AppConfig agent, when running under SAM with `APPCONFIG_AGENT_URL` set.
3. **AWS AppConfig**. Each environment (`APP_ENV`) has a dedicated AppConfig
   *Environment* within the shared AppConfig *Application* identified by
   `APP_NAME`.

The AppConfig JSON follows this structure:

    {
        "active_backend": "redis",
        "base_url": "https://sho.rt",
        "configs": {
            "shorten_url": {
                "redis": { ... }
            },
            "redirect_url": {
                "redis": { ... }
            }
        }
    }

Every source yields the same shape:

    {
        "redis": { ... },        # kwargs for the Redis DAO, without the 'redis_' prefix
        "base_url": str | None,  # advertised origin for short links
    }

Typical usage inside a Lambda handler:
    >>> from shortlinks.utils.config import load_config
    >>> config = load_config('shorten_url')
    >>> config['redis']['host']
    'redis-15501.host.docker.internal'
"""

import os
import json
import functools
import urllib.parse
import urllib.request
import logging
from collections.abc import Callable

import boto3

from shortlinks.types import LambdaConfiguration
from shortlinks.constants import ENV
from shortlinks.exceptions import BadConfigurationError
from shortlinks.utils.helpers import require_environment
from shortlinks.utils.runtime import running_locally


logger = logging.getLogger(__name__)


def app_env() -> str:
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return application prefix for DAOs as <app name>:<app env>, None if APP_NAME is not set."""
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def _extract(document: dict, lambda_name: str) -> LambdaConfiguration:
    backend = document['active_backend']
    if backend != 'redis':
        raise BadConfigurationError(f"Unsupported backend '{backend}' (only 'redis' is supported).")
    return {
        'redis': document['configs'][lambda_name][backend],
        'base_url': document.get('base_url'),
    }


def _load_from_environment(func: Callable) -> Callable:
    """Decorator: build the configuration from REDIS_URL (and BASE_URL) when set."""

    @functools.wraps(func)
    def wrapper(lambda_name: str) -> LambdaConfiguration:
        redis_url = os.getenv(ENV.Redis.URL)
        if not redis_url:
            return func(lambda_name)

        logger.debug('Loaded configuration from environment.', extra={'lambdaName': lambda_name})
        return {
            'redis': {'url': redis_url},
            'base_url': os.getenv(ENV.App.BASE_URL) or None,
        }

    return wrapper


def _sam_load_local_appconfig(func: Callable) -> Callable:  # pragma: no cover
    """Decorator: load AppConfig from a local AppConfig Agent when running under SAM.

    Behavior:
        - If the application is running locally and `APPCONFIG_AGENT_URL` is set
          to a safe local URL, fetch the app configuration JSON from the local
          AppConfig agent.
        - Else, call the wrapped function (which pulls from AWS AppConfig via boto3).

    Environment variables used:
        APPCONFIG_AGENT_URL     : Base URL of the local AppConfig Agent (e.g., http://appconfig-agent:2772).
        APPCONFIG_PROFILE_NAME  : Optional profile name (default: "backend-config").
    """

    def __validate_appconfig_url(url: str | None) -> str:
        if not url:
            return ''
        components = urllib.parse.urlparse(url)
        if components.scheme not in {'http', 'https'}:
            raise BadConfigurationError(f'Bad scheme {url}')
        if components.hostname not in {'localhost', '127.0.0.1', 'host.docker.internal', 'appconfig-agent'}:
            raise BadConfigurationError(f'Bad host {url}')
        if components.port not in {2772, None}:
            raise BadConfigurationError(f'Bad port {url}')
        return url

    @functools.wraps(func)
    def wrapper(lambda_name: str) -> LambdaConfiguration:
        agent_url = __validate_appconfig_url(os.getenv(ENV.AppConfig.AGENT_URL))
        if not running_locally() or not agent_url:
            return func(lambda_name)

        profile_name = os.getenv(ENV.AppConfig.PROFILE_NAME, 'backend-config')
        url = f'{agent_url}/applications/{app_name()}/environments/{app_env()}/configurations/{profile_name}'

        logger.debug('Trying to load AppConfig from local agent.', extra={'agentUrl': url, 'lambdaName': lambda_name})
        with urllib.request.urlopen(url, timeout=5) as r:  # noqa: S310
            document = json.load(r)

        logger.debug('Loaded AppConfig from local agent.', extra={'lambdaName': lambda_name, 'build': document.get('build')})
        return _extract(document, lambda_name)

    return wrapper


@_load_from_environment
@_sam_load_local_appconfig
@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def load_config(lambda_name: str) -> LambdaConfiguration:
    """Load configuration for a given Lambda from AWS AppConfig.

    Fetches the AppConfig JSON once and returns the section relevant
    to the requested Lambda function (e.g., 'shorten_url', 'redirect_url').

    Raises:
        MissingEnvironmentVariableError:
            If the AppConfig identifiers are not set.
        BadConfigurationError:
            If the document selects an unsupported backend.
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name})

    appconfig = boto3.client('appconfigdata')

    # Start an AppConfig data session
    session_token = appconfig.start_configuration_session(
        ApplicationIdentifier=os.environ[ENV.AppConfig.APP_ID],
        EnvironmentIdentifier=os.environ[ENV.AppConfig.ENV_ID],
        ConfigurationProfileIdentifier=os.environ[ENV.AppConfig.PROFILE_ID],
    )['InitialConfigurationToken']

    response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
    content = response['Configuration'].read()
    document = json.loads(content.decode('utf-8'))

    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name, 'build': document.get('build')})
    return _extract(document, lambda_name)
