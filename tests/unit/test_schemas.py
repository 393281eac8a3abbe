"""Unit tests for request schemas in schemas.py.

Test coverage includes:

1. Create requests
   - Ensures absolute URLs are accepted and stored verbatim.
   - Ensures malformed URLs, base URLs and expiries are rejected.

2. Update requests
   - Ensures every field is optional but validated when present.

3. Link id validation
   - Ensures only 7-character URL-safe identifiers are accepted.
"""

import pytest
from pydantic import ValidationError

from shortlinks.schemas import CreateLinkRequest, UpdateLinkRequest, validate_linkid, describe_validation_error


# -------------------------------
# 1. Create requests
# -------------------------------


@pytest.mark.parametrize(
    'url',
    [
        'https://example.com/a',
        'https://example.com',
        'http://localhost:3000/path?q=1#frag',
        'https://microsoft.com/byaka-buka',
        'ftp://files.example.com/pub/file.txt',
    ],
)
def test_create_request_keeps_url_verbatim(url):
    request = CreateLinkRequest.model_validate({'url': url})

    assert request.url == url
    assert request.base_url is None
    assert request.expire is None


def test_create_request_with_all_fields():
    request = CreateLinkRequest.model_validate({'url': 'https://example.com/a', 'baseUrl': 'https://sho.rt', 'expire': 60})

    assert request.base_url == 'https://sho.rt'
    assert request.expire == 60


@pytest.mark.parametrize(
    'body',
    [
        {},
        {'url': None},
        {'url': ''},
        {'url': 'example.com/a'},
        {'url': '/relative/path'},
        {'url': 'not a url'},
        {'url': 42},
        {'url': 'https://example.com', 'baseUrl': 'sho.rt'},
        {'url': 'https://example.com', 'expire': 0},
        {'url': 'https://example.com', 'expire': -5},
        {'url': 'https://example.com', 'expire': 'soon'},
    ],
)
def test_create_request_rejects_invalid_input(body):
    with pytest.raises(ValidationError):
        CreateLinkRequest.model_validate(body)


# -------------------------------
# 2. Update requests
# -------------------------------


def test_update_request_is_partial():
    assert UpdateLinkRequest.model_validate({}).url is None
    assert UpdateLinkRequest.model_validate({'expire': 1}).expire == 1
    assert UpdateLinkRequest.model_validate({'url': 'https://github.com/walletpass'}).url == 'https://github.com/walletpass'


@pytest.mark.parametrize('body', [{'url': 'nope'}, {'expire': 0}, {'url': 'https://example.com', 'expire': 'never'}])
def test_update_request_rejects_invalid_input(body):
    with pytest.raises(ValidationError):
        UpdateLinkRequest.model_validate(body)


def test_describe_validation_error():
    with pytest.raises(ValidationError) as exc_info:
        CreateLinkRequest.model_validate({'url': 'nope', 'expire': 0})

    description = describe_validation_error(exc_info.value)
    assert 'url:' in description
    assert 'expire:' in description


# -------------------------------
# 3. Link id validation
# -------------------------------


@pytest.mark.parametrize('linkid', ['abc1234', 'A_b-C9z', '1234567', '-------'])
def test_valid_linkid(linkid):
    assert validate_linkid(linkid) == linkid


@pytest.mark.parametrize('linkid', [None, '', 'abc123', 'abc12345', 'abc 123', 'abc/123', 'abc.123', 'äbc1234'])
def test_invalid_linkid(linkid):
    with pytest.raises(ValidationError):
        validate_linkid(linkid)
