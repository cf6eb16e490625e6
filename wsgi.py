# wsgi.py
"""
WSGI entry point.
Loads the Flask app from app.py using the create_app() factory,
e.g. `gunicorn wsgi:application`.
"""

from app import create_app

# WSGI callable that servers expect
application = create_app()

app = application

if __name__ == "__main__":
    # Local development server
    app.run(host="127.0.0.1", port=5000, debug=True)
