# utils/email_service.py
import logging

from flask import current_app
from flask_mail import Mail, Message

from utils.errors import NotificationError

logger = logging.getLogger(__name__)

mail = Mail()


def init_mail(app):
    # Flask-Mail reads the MAIL_* keys; map the SMTP_* settings onto them
    app.config.setdefault("MAIL_SERVER", app.config.get("SMTP_HOST"))
    app.config.setdefault("MAIL_PORT", app.config.get("SMTP_PORT"))
    app.config.setdefault("MAIL_USERNAME", app.config.get("SMTP_USER"))
    app.config.setdefault("MAIL_PASSWORD", app.config.get("SMTP_PASS"))
    app.config.setdefault("MAIL_USE_SSL", bool(app.config.get("SMTP_SECURE")))
    app.config.setdefault("MAIL_USE_TLS", not app.config.get("SMTP_SECURE"))
    app.config.setdefault("MAIL_DEFAULT_SENDER", app.config.get("FROM_EMAIL") or app.config.get("SMTP_USER"))
    mail.init_app(app)


def send_email(subject: str, recipients: list, html_body: str, text_body: str = None, sender: str = None):
    """
    Send synchronously within the current app context.
    Raises NotificationError when the transport fails.
    """
    msg = Message(
        subject=subject,
        recipients=recipients,
        sender=sender or current_app.config.get("MAIL_DEFAULT_SENDER"),
    )
    if text_body:
        msg.body = text_body
    msg.html = html_body

    logger.debug(
        "Preparing email send: sender=%s mail_username=%s recipients=%s subject=%s",
        msg.sender,
        current_app.config.get("MAIL_USERNAME"),
        recipients,
        subject,
    )

    try:
        mail.send(msg)
    except Exception as e:
        raise NotificationError(f"Failed to send email to {recipients}: {e}") from e
    logger.info("Email sent to %s (subject=%s)", recipients, subject)
