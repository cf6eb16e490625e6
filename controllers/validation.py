# controllers/validation.py
import re
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from utils.errors import InvalidPhone, InvalidRequest, MissingField

PHONE_RE = re.compile(r"^[0-9]{10}$")

# Checked in this order; the first missing one is reported
REQUIRED_FIELDS = (
    ("fullName", "Full name"),
    ("contactNumber", "Contact number"),
)

OPTIONAL_FIELDS = ("city", "interestedCourse", "message")


def normalize_phone(value: str) -> str:
    """Strip everything but digits and keep the last 10 (drops +91 / leading 0)."""
    return re.sub(r"\D", "", value)[-10:]


# ---- Pydantic models ----
class SubmissionSchema(BaseModel):
    fullName: str = Field(..., min_length=1)
    contactNumber: str
    city: Optional[str] = None
    interestedCourse: Optional[str] = None
    message: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def blank_to_none(cls, values):
        cleaned = {}
        for key, value in values.items():
            if value is None:
                continue
            value = str(value).strip()
            # optional fields are stored as NULL, never ""
            cleaned[key] = value if value else None
        return cleaned

    @field_validator("contactNumber")
    @classmethod
    def check_phone(cls, value):
        digits = normalize_phone(value)
        if not PHONE_RE.match(digits):
            raise ValueError("must contain 10 digits")
        return digits


def validate_submission(payload) -> dict:
    """
    Validate a parsed request body.
    Returns the record keyed by column name, or raises a SubmissionError subclass.
    """
    if not isinstance(payload, dict):
        raise InvalidRequest()

    for field, label in REQUIRED_FIELDS:
        value = payload.get(field)
        if value is None or not str(value).strip():
            raise MissingField(field, label)

    known = {k: payload.get(k) for k, _ in REQUIRED_FIELDS}
    known.update({k: payload.get(k) for k in OPTIONAL_FIELDS})

    try:
        validated = SubmissionSchema(**known)
    except ValidationError as ve:
        # required fields are checked above; only the phone format can fail here
        raise InvalidPhone() from ve

    return {
        "full_name": validated.fullName,
        "contact_number": validated.contactNumber,
        "city": validated.city,
        "interested_course": validated.interestedCourse,
        "message": validated.message,
    }
