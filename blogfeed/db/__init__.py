"""SQL storage for the blob backend: engine/session helpers and the Blob table."""

from .create_tables import create_all
from .models import Blob
from .session import Base, get_engine, get_session

__all__ = ["Base", "Blob", "create_all", "get_engine", "get_session"]
