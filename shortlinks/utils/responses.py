"""API Gateway (Lambda proxy) response builders

Error responses share one body layout:

    {"message": "<human readable message>", "errorCode": "<EVENT CODE>"}
"""

import json
from typing import Any

from shortlinks.types import LambdaResponse
from shortlinks.utils.session import Session


JSON_HEADERS = {'Content-Type': 'application/json'}


def json_response(status_code: int, body: dict[str, Any], headers: dict[str, str] | None = None) -> LambdaResponse:
    return {
        'statusCode': status_code,
        'headers': {**JSON_HEADERS, **(headers or {})},
        'body': json.dumps(body),
    }


def _error(status_code: int, base: str, message: str | None, error_code: str | None) -> LambdaResponse:
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return json_response(status_code, body)


def response_200(body: dict[str, Any]) -> LambdaResponse:
    return json_response(200, body)


def response_201(body: dict[str, Any]) -> LambdaResponse:
    return json_response(201, body)


def response_301(*, location: str, accessed: int) -> LambdaResponse:
    return {
        'statusCode': 301,
        'headers': {
            'Location': location,
            'X-Accessed': str(accessed),
        },
        'body': '',
    }


def response_400(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _error(400, 'Bad Request', message, error_code)


def response_401(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _error(401, 'Unauthorized', message, error_code)


def response_404(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _error(404, 'Not Found', message, error_code)


def response_422(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _error(422, 'Unprocessable Entity', message, error_code)


def response_500(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _error(500, 'Internal Server Error', message, error_code)


def response_503(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _error(503, 'Service Unavailable', message, error_code)


def with_session(response: LambdaResponse, session: Session) -> LambdaResponse:
    """Attach the session cookie to a response if the client doesn't hold it yet."""
    if session.persist:
        response['headers'] = {**response.get('headers', {}), 'Set-Cookie': session.cookie()}
    return response
