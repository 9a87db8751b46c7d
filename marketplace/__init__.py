import logging
import os

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from marketplace.extensions import db, limiter
from marketplace.middleware.request_id import RequestIdFilter, RequestIdMiddleware

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(request_id)s] %(name)s: %(message)s"


def configure_logging(app):
    """Attach a request-id aware handler to the root logger (once)."""
    root = logging.getLogger()
    root.setLevel(app.config.get("LOG_LEVEL", "INFO"))
    if not any(getattr(h, "_marketplace", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.addFilter(RequestIdFilter())
        handler._marketplace = True
        root.addHandler(handler)


def init_sentry(app):
    """Error monitoring, only active when SENTRY_DSN is set."""
    dsn = app.config.get("SENTRY_DSN")
    if not dsn:
        if not app.debug and not app.testing:
            logger.warning("SENTRY_DSN is not set -- error monitoring is disabled.")
        return
    import sentry_sdk
    from sentry_sdk.integrations.flask import FlaskIntegration

    sentry_sdk.init(
        dsn=dsn,
        integrations=[FlaskIntegration()],
        traces_sample_rate=0.1,
    )


def register_error_handlers(app):
    def _error(message, status):
        return jsonify({"success": False, "message": message}), status

    @app.errorhandler(404)
    def not_found(e):
        return _error("Route not found", 404)

    @app.errorhandler(405)
    def method_not_allowed(e):
        return _error("Method not allowed", 405)

    @app.errorhandler(413)
    def too_large(e):
        return _error("Request body too large", 413)

    @app.errorhandler(429)
    def ratelimit_handler(e):
        return _error("Too many requests. Please try again later.", 429)

    @app.errorhandler(HTTPException)
    def http_error(e):
        return _error(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def unhandled(e):
        db.session.rollback()
        logger.exception("Unhandled error")
        return _error("Internal server error", 500)


def create_app(config_name=None):
    """Flask application factory"""
    app = Flask(__name__)

    if config_name is None:
        config_name = os.getenv("FLASK_ENV", "development")

    from marketplace.config import config
    app.config.from_object(config[config_name])

    configure_logging(app)
    init_sentry(app)

    # Initialize extensions
    db.init_app(app)
    limiter.init_app(app)
    CORS(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
        supports_credentials=True,
    )
    app.wsgi_app = RequestIdMiddleware(app.wsgi_app)

    # Importing models registers their tables on db.metadata
    from marketplace import models  # noqa: F401
    from marketplace.routes import ALL_BLUEPRINTS

    for blueprint in ALL_BLUEPRINTS:
        app.register_blueprint(blueprint)

    register_error_handlers(app)

    @app.after_request
    def set_security_headers(response):
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Content-Security-Policy"] = "default-src 'none'"
        if not app.debug and not app.testing:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response

    @app.route("/health")
    def health():
        return {"status": "healthy", "service": "visipakalpojumi-api"}, 200

    from marketplace.cli import register_commands
    register_commands(app)

    if not app.testing:
        from marketplace.scheduler import init_scheduler
        app.extensions["scheduler"] = init_scheduler(app)

    return app
