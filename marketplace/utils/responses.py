"""
JSON envelope helpers: {success, message, data, errors, pagination}
"""
from flask import jsonify


def success_response(data=None, message=None, status=200, pagination=None, **extra):
    body = {"success": True}
    if message is not None:
        body["message"] = message
    if data is not None:
        body["data"] = data
    if pagination is not None:
        body["pagination"] = pagination
    body.update(extra)
    return jsonify(body), status


def error_response(message, status=400, errors=None):
    body = {"success": False, "message": message}
    if errors:
        body["errors"] = errors
    return jsonify(body), status


def validation_error_response(errors, message="Validation failed"):
    return error_response(message, 400, errors=errors)
