"""
userdir.notifications

Outbound notification clients.

Responsibilities:
- Provide the email boundary used to deliver password-reset codes.
"""

# Package marker.
