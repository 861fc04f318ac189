"""WSGI entry point (``gunicorn -c gunicorn.conf.py``)."""

from spycats import create_app

app = create_app()
