"""Shared fixtures: a Flask app on a throwaway SQLite database"""

import logging

import pytest

from app import create_app

logging.basicConfig(level=logging.INFO)

MAIL_SETTINGS = {
    "ADMIN_EMAIL": "admin@example.com",
    "SMTP_USER": "mailer@example.com",
    "SMTP_PASS": "secret",
    "FROM_EMAIL": "mailer@example.com",
}


def _make_app(tmp_path, **extra):
    overrides = {
        "TESTING": True,
        "DATABASE_URL": f"sqlite:///{tmp_path / 'submissions.db'}",
        # environment may carry real SMTP settings; tests decide explicitly
        "ADMIN_EMAIL": None,
        "SMTP_USER": None,
        "SMTP_PASS": None,
    }
    overrides.update(extra)
    app = create_app(overrides)
    yield app
    app.extensions["database"].dispose()


@pytest.fixture
def app(tmp_path):
    """App with mail not configured"""
    yield from _make_app(tmp_path)


@pytest.fixture
def mail_app(tmp_path):
    """App with admin address and SMTP credentials; sending is suppressed by TESTING"""
    yield from _make_app(tmp_path, **MAIL_SETTINGS)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def mail_client(mail_app):
    return mail_app.test_client()


@pytest.fixture
def store(app):
    return app.extensions["submission_store"]


@pytest.fixture
def valid_payload():
    return {
        "fullName": "Asha Rao",
        "contactNumber": "+91 98765 43210",
        "city": "Pune",
        "interestedCourse": "MBA",
    }
