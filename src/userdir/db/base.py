"""
userdir.db.base

SQLAlchemy declarative base shared by every directory model.
"""

from __future__ import annotations

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
