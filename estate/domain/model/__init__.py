"""Domain model entities."""

from estate.domain.model.identity import Identity

__all__ = [
    "Identity",
]
