# db/submission_store.py
import logging
from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError

from models.submission import Submission
from utils.errors import StorageError

logger = logging.getLogger(__name__)

MAX_RECENT = 100


class SubmissionStore:
    """Persistence for form submissions. Every SQLAlchemy failure becomes a StorageError."""

    def __init__(self, database):
        self.database = database

    def insert(self, record: dict) -> int:
        """
        Persist a validated record with email_sent=False.
        Returns the new id; either the row is committed or nothing is written.
        """
        try:
            with self.database.session() as session:
                submission = Submission(
                    full_name=record["full_name"],
                    contact_number=record["contact_number"],
                    city=record.get("city"),
                    interested_course=record.get("interested_course"),
                    message=record.get("message"),
                    email_sent=False,
                )
                session.add(submission)
                session.flush()
                submission_id = submission.id
        except SQLAlchemyError as e:
            logger.exception("Failed to insert submission")
            raise StorageError() from e
        logger.info("Stored submission %s", submission_id)
        return submission_id

    def mark_email_sent(self, submission_id: int) -> bool:
        # Only ever flips to true, so repeating it is harmless
        try:
            with self.database.session() as session:
                result = session.execute(
                    update(Submission)
                    .where(Submission.id == submission_id)
                    .values(email_sent=True)
                )
                found = result.rowcount > 0
        except SQLAlchemyError as e:
            logger.exception("Failed to mark submission %s as emailed", submission_id)
            raise StorageError() from e
        if not found:
            logger.warning("mark_email_sent: no submission with id %s", submission_id)
        return found

    def get(self, submission_id: int) -> Optional[Submission]:
        try:
            with self.database.session() as session:
                return session.get(Submission, submission_id)
        except SQLAlchemyError as e:
            logger.exception("Failed to load submission %s", submission_id)
            raise StorageError() from e

    def list_recent(self, limit: int = MAX_RECENT) -> List[Submission]:
        """Newest first, at most MAX_RECENT rows."""
        limit = min(limit, MAX_RECENT)
        if limit < 1:
            return []
        try:
            with self.database.session() as session:
                return (
                    session.query(Submission)
                    .order_by(Submission.created_at.desc(), Submission.id.desc())
                    .limit(limit)
                    .all()
                )
        except SQLAlchemyError as e:
            logger.exception("Failed to list submissions")
            raise StorageError() from e
