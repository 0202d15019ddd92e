"""Diamond-square heightfield generation package."""

from .config import DEFAULT_SIZE, DEFAULT_WRAP_SIZE, GeneratorConfig
from .diamond_square import InvalidSizeError, diamond_square_no_wrap, diamond_square_wrap

__all__ = [
    "DEFAULT_SIZE",
    "DEFAULT_WRAP_SIZE",
    "GeneratorConfig",
    "InvalidSizeError",
    "diamond_square_no_wrap",
    "diamond_square_wrap",
]
