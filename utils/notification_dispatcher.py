# utils/notification_dispatcher.py
import html
import logging
from datetime import timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from utils.email_service import send_email
from utils.errors import NotificationError, StorageError

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%d/%m/%Y, %I:%M:%S %p"
FALLBACK_TIMEZONE = "UTC"


def resolve_timezone(tz_name: str) -> str:
    """Return tz_name if the zone database knows it, otherwise UTC."""
    try:
        ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown NOTIFY_TIMEZONE %r, using %s", tz_name, FALLBACK_TIMEZONE)
        return FALLBACK_TIMEZONE
    return tz_name


def format_received_at(created_at, tz_name: str) -> str:
    if created_at.tzinfo is None:
        # SQLite hands back naive datetimes; they are stored as UTC
        created_at = created_at.replace(tzinfo=timezone.utc)
    return created_at.astimezone(ZoneInfo(tz_name)).strftime(TIMESTAMP_FORMAT)


def build_admin_notification(submission, tz_name: str):
    """Returns (subject, text_body, html_body) for the administrator email."""
    esc = lambda s: html.escape(s) if s is not None else "-"

    city = submission.city or "Not provided"
    course = submission.interested_course or "Not selected"
    received = format_received_at(submission.created_at, tz_name)

    subject = f"New Enquiry #{submission.id} - {submission.full_name}"

    text_body = (
        "Hello Team,\n\n"
        "A new enquiry has been submitted through the website.\n\n"
        f"Submission ID: {submission.id}\n"
        f"Name: {submission.full_name}\n"
        f"Phone: {submission.contact_number}\n"
        f"City: {city}\n"
        f"Interested Course: {course}\n"
    )
    if submission.message:
        text_body += f"Message: {submission.message}\n"
    text_body += f"\nReceived: {received}\n"

    message_row = ""
    if submission.message:
        message_row = f"<tr><td><strong>Message:</strong></td><td>{esc(submission.message)}</td></tr>"

    html_body = f"""
    <html><body>
      <p>Hello Team,</p>
      <p>A new enquiry has been submitted through the website.</p>
      <table cellpadding="4" cellspacing="0" border="0">
        <tr><td><strong>Submission ID:</strong></td><td>{submission.id}</td></tr>
        <tr><td><strong>Name:</strong></td><td>{esc(submission.full_name)}</td></tr>
        <tr><td><strong>Phone:</strong></td><td><a href="tel:{esc(submission.contact_number)}">{esc(submission.contact_number)}</a></td></tr>
        <tr><td><strong>City:</strong></td><td>{esc(city)}</td></tr>
        <tr><td><strong>Interested Course:</strong></td><td>{esc(course)}</td></tr>
        {message_row}
      </table>
      <p>Received: {esc(received)}</p>
    </body></html>
    """
    return subject, text_body, html_body


class NotificationDispatcher:
    """
    Best-effort administrator notification.

    Only active when an admin address and SMTP credentials are configured.
    dispatch() never raises: failures are logged and reported as False.
    """

    def __init__(self, store, admin_email=None, smtp_user=None, smtp_pass=None,
                 tz_name="Asia/Kolkata", send=send_email):
        self.store = store
        self.admin_email = admin_email
        self.enabled = bool(admin_email and smtp_user and smtp_pass)
        self.tz_name = resolve_timezone(tz_name)
        self._send = send

    @classmethod
    def from_config(cls, config, store):
        return cls(
            store,
            admin_email=config.get("ADMIN_EMAIL"),
            smtp_user=config.get("SMTP_USER"),
            smtp_pass=config.get("SMTP_PASS"),
            tz_name=config.get("NOTIFY_TIMEZONE") or "Asia/Kolkata",
        )

    def dispatch(self, submission) -> bool:
        if not self.enabled:
            logger.debug("Mail not configured, skipping notification for submission %s", submission.id)
            return False

        try:
            subject, text_body, html_body = build_admin_notification(submission, self.tz_name)
            self._send(subject, [self.admin_email], html_body, text_body)
        except NotificationError:
            logger.exception("Failed to notify admin about submission %s", submission.id)
            return False
        except Exception:
            logger.exception("Could not prepare notification for submission %s", submission.id)
            return False

        try:
            self.store.mark_email_sent(submission.id)
        except StorageError:
            # Mail is out but the flag is not; the row keeps email_sent=False
            logger.error("Notification for submission %s was sent but email_sent could not be recorded", submission.id)
            return False
        return True
