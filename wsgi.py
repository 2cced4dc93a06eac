"""WSGI entrypoint for Gunicorn.

Usage:
  gunicorn -w 1 -b 0.0.0.0:3000 wsgi:app

Run a single worker: every worker starts its own draw scheduler.
"""

from weeklydraw import create_app

app = create_app()
