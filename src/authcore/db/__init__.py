"""
authcore.db

Persistence package for the durable refresh-token backend.

Responsibilities:
- SQLAlchemy base/model definitions.
- Async engine + session factory helpers.
- Repository implementing the refresh-token store contract.
"""

# Package marker.
