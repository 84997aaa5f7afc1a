"""
userdir.db

Credential store adapter (SQLAlchemy async).

Responsibilities:
- Provide ORM models, engine/session setup, and repositories for customers,
  admins, addresses and one-time passcodes.
"""

# Package marker.
