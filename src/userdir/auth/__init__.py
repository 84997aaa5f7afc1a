"""
userdir.auth

Authentication/authorization package.

Responsibilities:
- Password hashing, token issuing and OTP lifecycle.
- FastAPI role-gate dependencies.
"""

# Package marker.
