"""
Request body validation backed by pydantic schemas
"""
from functools import wraps

from flask import request
from pydantic import ValidationError

from marketplace.utils.responses import validation_error_response


def format_validation_errors(exc):
    """Flatten a pydantic ValidationError into [{field, message, value}]."""
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "__root__"]
        message = err.get("msg", "Invalid value")
        # pydantic prefixes custom validator messages with "Value error, "
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        errors.append({
            "field": ".".join(loc),
            "message": message,
            "value": None if err.get("type") == "missing" else err.get("input"),
        })
    return errors


def validate_json(schema):
    """Decorator validating the JSON body against `schema`.

    The parsed model is passed to the view as the `payload` kwarg.
    """
    def decorator(f):
        @wraps(f)
        def decorated(*args, **kwargs):
            data = request.get_json(silent=True)
            if not isinstance(data, dict):
                data = {}
            try:
                kwargs["payload"] = schema.model_validate(data)
            except ValidationError as exc:
                return validation_error_response(format_validation_errors(exc))
            return f(*args, **kwargs)

        return decorated
    return decorator
