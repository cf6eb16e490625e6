# routes/submissions.py
from datetime import datetime, timezone

from flask import Blueprint, request, jsonify, current_app

from controllers.submission_controller import process_submission
from db.submission_store import MAX_RECENT
from utils.errors import InvalidRequest, StorageError, SubmissionError

bp = Blueprint("submissions", __name__, url_prefix="/api")


def _store():
    return current_app.extensions["submission_store"]


def _dispatcher():
    return current_app.extensions["notification_dispatcher"]


def _failure(error: SubmissionError):
    return jsonify({"success": False, "message": error.message}), error.status_code


@bp.route("/submit-form", methods=["POST"])
def submit_form():
    payload = request.get_json(silent=True)
    if payload is None:
        return _failure(InvalidRequest())

    try:
        result = process_submission(payload, _store(), _dispatcher())
    except StorageError as e:
        current_app.logger.error("Submission could not be stored: %r", e.__cause__)
        return _failure(e)
    except SubmissionError as e:
        current_app.logger.info("Rejected submission: %s", e.message)
        return _failure(e)

    return jsonify(result), 200


@bp.route("/submissions", methods=["GET"])
def list_submissions():
    limit = request.args.get("limit", default=MAX_RECENT, type=int)
    try:
        submissions = _store().list_recent(limit)
    except StorageError as e:
        return _failure(e)

    return jsonify({
        "success": True,
        "submissions": [s.to_dict() for s in submissions],
    })


@bp.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()})


@bp.route("/health/db", methods=["GET"])
def health_db():
    """Returns 200 if the pool can run SELECT 1, otherwise 503."""
    try:
        current_app.extensions["database"].ping()
        return jsonify({"db": "ok"})
    except Exception:
        current_app.logger.exception("DB health check failed")
        return jsonify({"db": "error"}), 503
