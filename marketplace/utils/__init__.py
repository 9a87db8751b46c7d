from .responses import error_response, success_response, validation_error_response
from .pagination import get_pagination_args, paginate_query, pagination_meta

__all__ = [
    "error_response",
    "success_response",
    "validation_error_response",
    "get_pagination_args",
    "paginate_query",
    "pagination_meta",
]
