"""Grove operations."""

from .grove import Grove
from .convert import to_grove
from .initialize import new_grove, name_of

__all__ = ["Grove", "to_grove", "new_grove", "name_of"]
