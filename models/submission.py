# models/submission.py
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text, false
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow():
    return datetime.now(timezone.utc)


class Submission(Base):
    __tablename__ = "form_submissions"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(Text, nullable=False)
    contact_number = Column(String(20), nullable=False, index=True)

    # optional lead details, NULL when not provided
    city = Column(Text, nullable=True)
    interested_course = Column(Text, nullable=True)
    message = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    email_sent = Column(Boolean, nullable=False, default=False, server_default=false())

    def to_dict(self):
        return {
            "id": self.id,
            "full_name": self.full_name,
            "contact_number": self.contact_number,
            "city": self.city,
            "interested_course": self.interested_course,
            "message": self.message,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "email_sent": bool(self.email_sent),
        }

    def __repr__(self):
        return f"<Submission id={self.id} email_sent={self.email_sent}>"
