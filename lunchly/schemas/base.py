from typing import Any

from pydantic import BaseModel, ValidationError

from lunchly.errors import StoreError


class RowModel(BaseModel):
    """Base for entities that are read back from store rows."""

    @classmethod
    def from_row(cls, row: Any):
        """Map one store row (a databases Record or any mapping) onto the entity."""
        try:
            values = dict(getattr(row, "_mapping", row))
            entity = cls.model_validate(values)
        except (ValidationError, TypeError, ValueError, KeyError) as e:
            raise StoreError(f"Malformed {cls.__name__.lower()} row: {e}") from e
        if getattr(entity, "id", None) is None:
            raise StoreError(f"{cls.__name__} row has no id")
        return entity
