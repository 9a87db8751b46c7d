"""
Background scheduler

Runs periodic maintenance:
- Delete notifications whose expiry has passed (hourly)

Only starts when ENABLE_SCHEDULER is true so that a single instance runs it.
"""
import logging

from apscheduler.schedulers.background import BackgroundScheduler

from marketplace.extensions import db
from marketplace.models import Notification, utcnow

logger = logging.getLogger(__name__)


def purge_expired_notifications(app):
    """Delete expired notifications. Returns the number removed."""
    with app.app_context():
        try:
            removed = (
                Notification.query.filter(
                    Notification.expires_at.isnot(None),
                    Notification.expires_at <= utcnow(),
                )
                .delete(synchronize_session=False)
            )
            db.session.commit()
        except Exception:
            db.session.rollback()
            logger.exception("Failed to purge expired notifications")
            return 0

        if removed:
            logger.info("Scheduler: purged %d expired notifications", removed)
        return removed


def init_scheduler(app):
    """Initialize and start the background scheduler.

    Returns the running scheduler, or None when disabled.
    """
    if not app.config.get("ENABLE_SCHEDULER"):
        logger.info("Scheduler disabled (set ENABLE_SCHEDULER=true to enable)")
        return None

    scheduler = BackgroundScheduler(daemon=True)
    scheduler.add_job(
        purge_expired_notifications,
        "interval",
        hours=1,
        args=[app],
        id="purge_expired_notifications",
        name="Purge expired notifications",
        replace_existing=True,
    )
    scheduler.start()
    logger.info("Background scheduler started")
    return scheduler
