"""Configuration models for heightfield generation."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

import numpy as np

from heightfield.diamond_square import validate_no_wrap_size, validate_wrap_size


DEFAULT_SIZE = 513
DEFAULT_WRAP_SIZE = 512
DEFAULT_SEED_HEIGHT = 128.0
DEFAULT_VARIANCE = 64.0
DEFAULT_ROUGHNESS = 0.5
STORAGE_DTYPES = ("float32", "float64", "uint8")


@dataclass(frozen=True)
class GeneratorConfig:
    """Primary generation configuration."""

    size: int = DEFAULT_SIZE
    wrap: bool = False
    seed_height: float = DEFAULT_SEED_HEIGHT
    base_variance: float = DEFAULT_VARIANCE
    roughness: float = DEFAULT_ROUGHNESS
    dtype: str = "float32"

    @property
    def edge(self) -> int:
        return self.size if self.wrap else self.size - 1

    def validate(self) -> None:
        if self.wrap:
            validate_wrap_size(self.size)
        else:
            validate_no_wrap_size(self.size)
        if self.base_variance < 0:
            raise ValueError("base_variance must be non-negative")
        if not 0.0 < self.roughness <= 1.0:
            raise ValueError("roughness must be in (0, 1]")
        try:
            storage = np.dtype(self.dtype).name
        except TypeError:
            raise ValueError(f"unknown dtype {self.dtype!r}") from None
        if storage not in STORAGE_DTYPES:
            raise ValueError(f"dtype must be one of {', '.join(STORAGE_DTYPES)}, got {storage}")

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
