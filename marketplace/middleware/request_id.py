"""
Request ID middleware for request tracing and logging
"""
import logging
import uuid

from flask import has_request_context, request


class RequestIdMiddleware:
    """
    WSGI middleware to add unique request ID to each request
    The id is echoed back in the X-Request-ID response header
    """

    def __init__(self, app):
        self.app = app

    def __call__(self, environ, start_response):
        request_id = environ.get("HTTP_X_REQUEST_ID") or str(uuid.uuid4())
        environ["request_id"] = request_id

        def custom_start_response(status, headers, exc_info=None):
            headers.append(("X-Request-ID", request_id))
            return start_response(status, headers, exc_info)

        return self.app(environ, custom_start_response)


def current_request_id():
    if has_request_context():
        return request.environ.get("request_id", "-")
    return "-"


class RequestIdFilter(logging.Filter):
    """Expose the current request id to log formats as %(request_id)s."""

    def filter(self, record):
        record.request_id = current_request_id()
        return True
