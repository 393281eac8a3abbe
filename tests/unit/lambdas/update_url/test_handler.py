import json
from datetime import timedelta
from unittest.mock import MagicMock

import pytest
from pytest import MonkeyPatch
from freezegun import freeze_time

from shortlinks import context
from shortlinks.lambdas.update_url import app
from shortlinks.lambdas.redirect_url import app as redirect_app
from shortlinks.dao.exceptions import DataStoreError
from shortlinks.utils import Session


OTHER_TOKEN = 'ZZZZZZZZZZZZZZZZZZZZZZZZZZZZZZ'


class TestUpdateUrlHandler:

    def test_handle_url(self, make_event, app_context, session, stored_link, links) -> None:
        response = app.handle(make_event('PATCH', linkid='abc1234', body={'url': 'https://github.com/walletpass'}), app_context, session)

        assert response['statusCode'] == 200
        assert json.loads(response['body']) == {'status': 'success'}
        assert links.records['abc1234']['url'] == 'https://github.com/walletpass'
        assert 'abc1234' not in links.deadlines

    def test_handle_preserves_other_fields(self, make_event, app_context, session, stored_link, links) -> None:
        links.resolve('abc1234')
        before = dict(links.records['abc1234'])

        app.handle(make_event('PATCH', linkid='abc1234', body={'url': 'https://example.com/b'}), app_context, session)

        after = links.records['abc1234']
        assert after['url'] == 'https://example.com/b'
        assert {k: v for k, v in after.items() if k != 'url'} == {k: v for k, v in before.items() if k != 'url'}

    def test_handle_expire(self, make_event, app_context, session, stored_link, links) -> None:
        with freeze_time('2026-10-18 12:00:00') as frozen:
            response = app.handle(make_event('PATCH', linkid='abc1234', body={'expire': 1}), app_context, session)
            assert response['statusCode'] == 200
            assert links.records['abc1234']['url'] == 'https://example.com/a'

            frozen.tick(timedelta(seconds=2))
            redirect = redirect_app.handle(make_event('GET', linkid='abc1234'), app_context, session)

        assert redirect['statusCode'] == 404

    def test_handle_url_and_expire(self, make_event, app_context, session, stored_link, links) -> None:
        body = {'url': 'https://example.com/b', 'expire': 3600}

        response = app.handle(make_event('PATCH', linkid='abc1234', body=body), app_context, session)

        assert response['statusCode'] == 200
        assert links.records['abc1234']['url'] == 'https://example.com/b'
        assert 'abc1234' in links.deadlines

    def test_handle_url_and_expire_in_single_call(self, monkeypatch: MonkeyPatch, make_event, app_context, session, stored_link, links) -> None:
        """URL and expiry are applied together; no separate expire call follows the URL update."""
        monkeypatch.setattr(links, 'expire', MagicMock(side_effect=DataStoreError("Can't connect to Redis at localhost:6379/0.")))

        response = app.handle(make_event('PATCH', linkid='abc1234', body={'url': 'https://example.com/b', 'expire': 60}), app_context, session)

        assert response['statusCode'] == 200
        assert links.records['abc1234']['url'] == 'https://example.com/b'
        assert 'abc1234' in links.deadlines
        links.expire.assert_not_called()

    def test_handle_url_and_expire_with_failed_write(self, monkeypatch: MonkeyPatch, make_event, app_context, session, stored_link, links) -> None:
        """A failed combined update changes neither the URL nor the expiry."""
        monkeypatch.setattr(links, 'update_url', MagicMock(side_effect=DataStoreError("Can't connect to Redis at localhost:6379/0.")))

        response = app.handle(make_event('PATCH', linkid='abc1234', body={'url': 'https://example.com/b', 'expire': 60}), app_context, session)

        assert response['statusCode'] == 503
        links.update_url.assert_called_once_with('abc1234', 'https://example.com/b', expire=60)
        assert links.records['abc1234']['url'] == 'https://example.com/a'
        assert 'abc1234' not in links.deadlines

    @pytest.mark.parametrize('raw_body', [None, '{}'])
    def test_handle_without_changes(self, make_event, app_context, session, stored_link, links, raw_body) -> None:
        response = app.handle(make_event('PATCH', linkid='abc1234', body=raw_body), app_context, session)

        assert response['statusCode'] == 200
        assert links.records['abc1234']['url'] == 'https://example.com/a'

    def test_handle_with_mismatched_token(self, make_event, app_context, stored_link, links) -> None:
        event = make_event('PATCH', linkid='abc1234', body={'url': 'https://evil.example.com'})

        response = app.handle(event, app_context, Session(token=OTHER_TOKEN, persist=True))
        body = json.loads(response['body'])

        assert response['statusCode'] == 401
        assert body['errorCode'] == 'INVALID_TOKEN'
        assert links.records['abc1234']['url'] == 'https://example.com/a'

    def test_handle_with_unknown_link(self, make_event, app_context, session) -> None:
        response = app.handle(make_event('PATCH', linkid='nope123', body={'url': 'https://example.com/b'}), app_context, session)
        body = json.loads(response['body'])

        assert response['statusCode'] == 404
        assert body['errorCode'] == 'LINK_NOT_FOUND'

    @pytest.mark.parametrize(
        'request_body',
        [
            {'url': 'not a url'},
            {'expire': 0},
            {'url': 'https://example.com/b', 'expire': 'tomorrow'},
        ],
    )
    def test_handle_with_invalid_input(self, make_event, app_context, session, stored_link, links, request_body) -> None:
        """Nothing is changed when any field is invalid."""
        response = app.handle(make_event('PATCH', linkid='abc1234', body=request_body), app_context, session)
        body = json.loads(response['body'])

        assert response['statusCode'] == 422
        assert body['errorCode'] == 'INVALID_INPUT'
        assert links.records['abc1234']['url'] == 'https://example.com/a'
        assert 'abc1234' not in links.deadlines

    def test_handle_with_invalid_json(self, make_event, app_context, session, stored_link) -> None:
        response = app.handle(make_event('PATCH', linkid='abc1234', body='{"url"'), app_context, session)

        assert response['statusCode'] == 400
        assert json.loads(response['body'])['errorCode'] == 'INVALID_JSON_BODY'

    def test_handle_with_malformed_linkid(self, make_event, app_context, session) -> None:
        response = app.handle(make_event('PATCH', linkid='abc', body={'expire': 1}), app_context, session)

        assert response['statusCode'] == 422
        assert json.loads(response['body'])['errorCode'] == 'INVALID_LINKID'

    def test_handle_with_unreachable_data_store(self, monkeypatch: MonkeyPatch, make_event, app_context, session, stored_link, links) -> None:
        monkeypatch.setattr(links, 'update_url', MagicMock(side_effect=DataStoreError("Can't connect to Redis at localhost:6379/0.")))

        response = app.handle(make_event('PATCH', linkid='abc1234', body={'url': 'https://example.com/b'}), app_context, session)

        assert response['statusCode'] == 503
        assert json.loads(response['body'])['errorCode'] == 'DATA_STORE_UNAVAILABLE'

    def test_lambda_handler_with_authorization_header(self, monkeypatch: MonkeyPatch, make_event, app_context, stored_link, links) -> None:
        """The owner token may be presented as 'Authorization: token <value>'."""
        monkeypatch.setattr(context, 'build_context', lambda name: app_context)
        event = make_event(
            'PATCH',
            linkid='abc1234',
            body={'url': 'https://example.com/b'},
            headers={'Authorization': f'Token {stored_link.token}'},
        )

        response = app.lambda_handler(event, None)

        assert response['statusCode'] == 200
        assert links.records['abc1234']['url'] == 'https://example.com/b'
        assert response['headers']['Set-Cookie'].startswith(f'shortlinks_session={stored_link.token};')
