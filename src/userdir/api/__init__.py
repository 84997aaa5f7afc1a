"""
userdir.api

API package for the user-directory service.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring, wire schemas and the response envelope.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer stays thin: request parsing + role gate + delegation to services.
