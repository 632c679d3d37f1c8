"""mono_db: statement store library (SQLAlchemy/Alembic).

Public exports
--------------
- ``Base`` and ``metadata`` for Alembic autogenerate/targeting
- ORM models in ``mono_db.models.statement`` (re-exported for convenience)
- Engine/session helpers in ``mono_db.client``
"""

from __future__ import annotations

from .models.statement import NATURAL_KEY_COLUMNS, Base, MonoRecord

# Re-export SQLAlchemy metadata for Alembic's env.py
metadata = Base.metadata

__all__ = [
    "Base",
    "metadata",
    "MonoRecord",
    "NATURAL_KEY_COLUMNS",
]
