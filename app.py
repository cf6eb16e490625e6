# app.py
import atexit

from flask import Flask
from flask_cors import CORS

from config.config import Config
from db.database import Database
from db.submission_store import SubmissionStore
from routes.submissions import bp as submissions_bp
from utils.email_service import init_mail
from utils.logging_config import setup_logging
from utils.notification_dispatcher import NotificationDispatcher


def create_app(overrides=None):
    app = Flask(__name__)

    # Load config values from Config
    app.config["NODE_ENV"] = Config.NODE_ENV
    app.config["DATABASE_URL"] = Config.DATABASE_URL
    app.config["ADMIN_EMAIL"] = Config.ADMIN_EMAIL
    app.config["FROM_EMAIL"] = Config.FROM_EMAIL
    app.config["NOTIFY_TIMEZONE"] = Config.NOTIFY_TIMEZONE
    app.config["LOG_LEVEL"] = Config.LOG_LEVEL
    app.config["ALLOWED_ORIGINS"] = Config.ALLOWED_ORIGINS

    # SMTP settings, mapped onto Flask-Mail keys by init_mail()
    app.config["SMTP_HOST"] = Config.SMTP_HOST
    app.config["SMTP_PORT"] = Config.SMTP_PORT
    app.config["SMTP_USER"] = Config.SMTP_USER
    app.config["SMTP_PASS"] = Config.SMTP_PASS
    app.config["SMTP_SECURE"] = Config.SMTP_SECURE

    if overrides:
        app.config.update(overrides)

    if not app.testing:
        setup_logging(app.config["LOG_LEVEL"])

    if not app.config.get("DATABASE_URL"):
        raise RuntimeError("DATABASE_URL is not configured; the service cannot start without storage")

    # CORS
    CORS(app, origins=app.config["ALLOWED_ORIGINS"])

    # Storage pool: one per process, torn down at exit
    database = Database(app.config["DATABASE_URL"], node_env=app.config["NODE_ENV"])
    try:
        database.auto_migrate()
    except Exception:
        # Fallback to init_db if auto_migrate fails for some reason
        app.logger.exception("auto_migrate failed, falling back to init_db()")
        database.init_db()
    atexit.register(database.dispose)

    # init mail
    init_mail(app)

    store = SubmissionStore(database)
    dispatcher = NotificationDispatcher.from_config(app.config, store)
    if not dispatcher.enabled:
        app.logger.warning("ADMIN_EMAIL or SMTP credentials missing; admin notifications are disabled")

    app.extensions["database"] = database
    app.extensions["submission_store"] = store
    app.extensions["notification_dispatcher"] = dispatcher

    @app.teardown_appcontext
    def remove_session(exc=None):
        database.SessionLocal.remove()

    # register blueprints
    app.register_blueprint(submissions_bp)

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(host=Config.APP_HOST, port=Config.APP_PORT, debug=Config.NODE_ENV != "production")
