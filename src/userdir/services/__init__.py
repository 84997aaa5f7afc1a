"""
userdir.services

Service-layer package.

Responsibilities:
- Own transaction boundaries and persistence decisions.
- Convert every failure into the `userdir.errors` taxonomy.
"""

# Package marker.
