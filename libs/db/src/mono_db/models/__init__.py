"""SQLAlchemy models registry for the statement store.

Currently includes the ``mono`` table written by ``mono_import``.
"""

from .statement import NATURAL_KEY_COLUMNS, Base, MonoRecord

__all__ = [
    "Base",
    "MonoRecord",
    "NATURAL_KEY_COLUMNS",
]
