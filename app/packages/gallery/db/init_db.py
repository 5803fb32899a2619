"""Database bootstrapping utilities."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.packages.gallery.core.config import get_settings
from app.packages.gallery.core.security import get_password_hash
from app.packages.gallery.crud.users import user_crud
from app.packages.gallery.db import session as db_session
from app.packages.gallery.models import Base

logger = logging.getLogger("app.db")


def init_db() -> None:
    """Create all database tables if they do not exist and seed the administrator.

    Any failure is logged and re-raised so that application startup aborts.
    """
    logger.info("Applying database schema...")
    session = db_session.SessionLocal()
    try:
        Base.metadata.create_all(bind=db_session.engine)
        _seed_admin(session)
        session.commit()
    except Exception:
        session.rollback()
        logger.exception("An error occurred while initializing the database")
        raise
    finally:
        session.close()


def _seed_admin(db: Session) -> None:
    """Ensure the default administrator account exists."""
    settings = get_settings()
    if user_crud.get_by_username(db, settings.default_admin_username) is not None:
        return
    user_crud.create_user(
        db,
        username=settings.default_admin_username,
        hashed_password=get_password_hash(settings.default_admin_password),
        email=settings.default_admin_email,
        auto_commit=False,
    )
    logger.info("Seeded default administrator '%s'", settings.default_admin_username)
