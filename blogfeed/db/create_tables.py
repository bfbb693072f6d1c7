"""Create the blob table on the configured DATABASE_URL (safe to run twice)."""
from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError

from .models import Blob
from .session import Base, get_engine


def create_all() -> None:
    Base.metadata.create_all(bind=get_engine(), tables=[Blob.__table__], checkfirst=True)


if __name__ == "__main__":
    try:
        create_all()
        print("[db] Blob table ready.")
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create blob table: {exc}") from exc
