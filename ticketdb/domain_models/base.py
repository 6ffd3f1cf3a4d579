# ==============================================================================
# BASE MODEL - SQLAlchemy Foundation
# ==============================================================================
# Base declarative class for the read-side ORM mappings
# ==============================================================================

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import DeclarativeBase


class SQLBase(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Tables are created with hand-written per-backend DDL, so the metadata
    collected here is never passed to ``create_all``; the mappings exist
    to load rows into typed objects.

    Example:
        >>> class Ticket(SQLBase):
        ...     __tablename__ = "ticket"
        ...     id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    """

    def to_dict(self) -> dict[str, Any]:
        """
        Convert model instance to dictionary.

        Returns:
            Dictionary with all column values
        """
        return {
            column.name: getattr(self, column.name)
            for column in self.__table__.columns
        }

    def __repr__(self) -> str:
        """Generate readable representation."""
        fields = ", ".join(
            f"{name}={value!r}" for name, value in self.to_dict().items()
        )
        return f"{self.__class__.__name__}({fields})"
