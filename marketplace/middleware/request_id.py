"""
Request ID middleware for request tracing and logging
"""
import logging
import re
import uuid

from flask import has_request_context, request

REQUEST_ID_HEADER = 'X-Request-ID'
REQUEST_ID_ENVIRON_KEY = 'marketplace.request_id'

# Client-supplied ids are echoed into logs and headers, so keep them short and plain
_VALID_REQUEST_ID = re.compile(r'^[A-Za-z0-9._-]{1,64}$')


def resolve_request_id(environ):
    """Reuse a well-formed inbound X-Request-ID, otherwise mint a UUID4"""
    inbound = environ.get('HTTP_X_REQUEST_ID', '')
    if _VALID_REQUEST_ID.match(inbound):
        return inbound
    return str(uuid.uuid4())


class RequestIdMiddleware:
    """
    WSGI middleware that tags every marketplace request with an id

    The id is stored in the WSGI environ for RequestIdFilter and echoed back
    as the X-Request-ID response header.
    """

    def __init__(self, wsgi_app):
        self.wsgi_app = wsgi_app

    def __call__(self, environ, start_response):
        request_id = resolve_request_id(environ)
        environ[REQUEST_ID_ENVIRON_KEY] = request_id

        def start_response_with_id(status, headers, exc_info=None):
            headers = [(name, value) for name, value in headers if name.lower() != 'x-request-id']
            headers.append((REQUEST_ID_HEADER, request_id))
            return start_response(status, headers, exc_info)

        return self.wsgi_app(environ, start_response_with_id)


class RequestIdFilter(logging.Filter):
    """Stamp the current request ID (or '-') onto every log record"""

    def filter(self, record):
        if has_request_context():
            record.request_id = request.environ.get(REQUEST_ID_ENVIRON_KEY, '-')
        else:
            record.request_id = '-'
        return True
