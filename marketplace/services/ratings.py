"""
Denormalized service rating maintenance.

`Service.average_rating` and `Service.total_reviews` are recomputed from
the approved reviews with an aggregate query, inside the transaction that
wrote the review, while the service row is locked.
"""
import logging

from sqlalchemy import func, select

from marketplace.extensions import db
from marketplace.models import Review, Service

logger = logging.getLogger(__name__)


def lock_service(service_id):
    """SELECT ... FOR UPDATE on the service row (a no-op on SQLite)."""
    return db.session.execute(
        select(Service).where(Service.id == service_id).with_for_update()
    ).scalar_one_or_none()


def refresh_service_rating(service_id):
    """
    Recompute the rating aggregate for one service.

    Must run before the surrounding commit so the review write and the
    aggregate land together. Returns the updated Service, or None if it
    no longer exists.
    """
    service = lock_service(service_id)
    if service is None:
        return None

    db.session.flush()
    average, count = db.session.execute(
        select(func.avg(Review.rating), func.count(Review.id)).where(
            Review.service_id == service_id,
            Review.is_approved.is_(True),
        )
    ).one()

    service.average_rating = float(average) if count else 0.0
    service.total_reviews = int(count)
    logger.debug(
        "Service %s rating -> %.3f over %d reviews",
        service_id, service.average_rating, service.total_reviews,
    )
    return service
