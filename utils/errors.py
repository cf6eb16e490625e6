# utils/errors.py
"""
Error taxonomy for the submission pipeline.

SubmissionError subclasses carry the HTTP status they map to and a message
that is safe to show to the visitor. NotificationError is logged only.
Internal detail (driver errors, SMTP replies) stays in the logs via the
exception chain.
"""
from typing import Optional


class SubmissionError(Exception):
    status_code = 400
    message = "Invalid submission"

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidRequest(SubmissionError):
    message = "Invalid request body"


class MissingField(SubmissionError):
    def __init__(self, field: str, label: str):
        self.field = field
        super().__init__(f"{label} is required")


class InvalidPhone(SubmissionError):
    message = "Please enter a valid 10-digit contact number"


class StorageError(SubmissionError):
    status_code = 500
    message = "Something went wrong while saving your details. Please try again later."


class NotificationError(Exception):
    """Mail dispatch failed. Logged only, never returned to a client."""
