"""Output serialization for generated heightfields."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, TextIO

import numpy as np
from PIL import Image


def write_pgm_plain(target: str | Path | TextIO, raster_u8: np.ndarray) -> None:
    """Write a plain (P2) greyscale image, one sample per line, row-major."""

    if raster_u8.ndim != 2:
        raise ValueError("raster must be 2D")

    height, width = raster_u8.shape
    if isinstance(target, (str, Path)):
        with Path(target).open("w", encoding="ascii", newline="\n") as stream:
            _write_pgm_stream(stream, raster_u8, width, height)
    else:
        _write_pgm_stream(target, raster_u8, width, height)


def _write_pgm_stream(stream: TextIO, raster_u8: np.ndarray, width: int, height: int) -> None:
    stream.write(f"P2 {width} {height} 255\n")
    for sample in raster_u8.astype(np.uint8).ravel():
        stream.write(f"{int(sample)}\n")


def read_pgm_plain(path: str | Path) -> np.ndarray:
    """Read back a plain greyscale image written by ``write_pgm_plain``."""

    tokens = Path(path).read_text(encoding="ascii").split()
    if not tokens or tokens[0] != "P2":
        raise ValueError(f"not a plain PGM file: {path}")
    width, height, max_value = (int(token) for token in tokens[1:4])
    if max_value != 255:
        raise ValueError(f"unsupported max value {max_value}")
    values = [int(token) for token in tokens[4:]]
    if len(values) != width * height:
        raise ValueError(f"expected {width * height} samples, found {len(values)}")
    for value in values:
        if not 0 <= value <= max_value:
            raise ValueError(f"sample {value} out of range")
    return np.array(values, dtype=np.uint8).reshape(height, width)


def write_height_npy(path: str | Path, height: np.ndarray) -> None:
    np.save(Path(path), height.astype(np.float32), allow_pickle=False)


def write_png_u8(path: str | Path, raster_u8: np.ndarray) -> None:
    image = Image.fromarray(raster_u8.astype(np.uint8))
    image.save(Path(path))


def write_json(path: str | Path, payload: dict[str, Any]) -> None:
    text = json.dumps(payload, indent=2, sort_keys=True)
    Path(path).write_text(text + "\n", encoding="utf-8")
