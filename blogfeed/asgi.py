"""
ASGI entry point.

Run with ``uvicorn blogfeed.asgi:app``; services are built from the
environment (STORE_BACKEND, DATA_FILE, DATABASE_URL...) at import time.
"""

from blogfeed.app import create_app

app = create_app()
