from shortlinks.utils.config import app_env, app_name, app_prefix, load_config
from shortlinks.utils.helpers import base_url, get_header, json_body, require_environment, guarantee_500_response
from shortlinks.utils.shortener import generate_linkid, generate_token, allocate_linkid
from shortlinks.utils.session import Session, resolve_session
from shortlinks.utils.logging import initialize_logging


__all__ = [
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'base_url',
    'get_header',
    'json_body',
    'require_environment',
    'guarantee_500_response',
    'generate_linkid',
    'generate_token',
    'allocate_linkid',
    'Session',
    'resolve_session',
    'initialize_logging',
]
