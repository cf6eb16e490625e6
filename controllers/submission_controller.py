# controllers/submission_controller.py
import logging

from controllers.validation import validate_submission
from utils.errors import StorageError

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Thank you! Your enquiry has been submitted successfully. We will contact you soon."


# ---- Main controller ----
def process_submission(payload, store, dispatcher):
    """
    Validates payload, stores the submission, then notifies the admin.
    Returns the response body for a successful submission.
    Raises a SubmissionError subclass on invalid input or storage failure;
    notification problems never surface here.
    """
    record = validate_submission(payload)

    submission_id = store.insert(record)

    # Second, independent write: only reached once the insert is committed
    email_sent = False
    if dispatcher.enabled:
        try:
            submission = store.get(submission_id)
        except StorageError:
            logger.error("Submission %s stored but could not be reloaded for notification", submission_id)
        else:
            email_sent = dispatcher.dispatch(submission)

    return {
        "success": True,
        "message": SUCCESS_MESSAGE,
        "submissionId": submission_id,
        "emailSent": email_sent,
    }
