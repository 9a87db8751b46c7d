"""
Pagination helpers shared by the list endpoints
"""
import math

from flask import current_app, request


def _int_arg(name, default):
    try:
        return int(request.args.get(name, default))
    except (TypeError, ValueError):
        return default


def get_pagination_args(default_limit=None):
    """
    Read `page` and `limit` from the query string.

    Args:
        default_limit (int): Overrides ITEMS_PER_PAGE for this endpoint

    Returns:
        tuple: (page, limit) with page >= 1 and 1 <= limit <= MAX_ITEMS_PER_PAGE
    """
    if default_limit is None:
        default_limit = current_app.config.get("ITEMS_PER_PAGE", 10)
    max_limit = current_app.config.get("MAX_ITEMS_PER_PAGE", 100)

    page = max(1, _int_arg("page", 1))
    limit = min(max_limit, max(1, _int_arg("limit", default_limit)))
    return page, limit


def pagination_meta(page, limit, total):
    pages = math.ceil(total / limit) if total else 0
    return {"page": page, "limit": limit, "total": total, "pages": pages}


def paginate_query(query, page, limit):
    """
    Apply offset/limit to a SQLAlchemy query.

    Returns:
        tuple: (items, pagination meta dict)
    """
    total = query.order_by(None).count()
    items = query.offset((page - 1) * limit).limit(limit).all()
    return items, pagination_meta(page, limit, total)
