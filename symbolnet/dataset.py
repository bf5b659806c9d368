"""Training samples on disk: drawn grids and their class labels.

Grids are stored as length-prefixed UTF-16 strings of space separated
digits, labels as big-endian 32-bit integers, each appended to its own
file in the same order.
"""

from __future__ import annotations

import io
import logging
import struct
import string
from collections.abc import Callable
from pathlib import Path
from typing import BinaryIO, TypeVar

from .features import create_features

logger = logging.getLogger(__name__)

GRID_SIZE = 8
N_CLASSES = 3

_NULL_LENGTH = 0xFFFFFFFF
_UINT32 = struct.Struct(">I")
_INT32 = struct.Struct(">i")

T = TypeVar("T")


class DataFormatError(ValueError):
    """Raised when stored or parsed sample data is malformed."""


def parse_grid(text: str) -> list[list[float]]:
    """Turn a string of 64 digits into an 8x8 grid; other characters are ignored."""
    digits = [float(ch) for ch in text if ch in string.digits]
    expected = GRID_SIZE * GRID_SIZE
    if len(digits) != expected:
        raise DataFormatError(f"expected {expected} digits, found {len(digits)}")
    return [digits[start:start + GRID_SIZE] for start in range(0, expected, GRID_SIZE)]


def one_hot_label(label: int) -> list[float]:
    """Encode a class index as a one-hot vector over the three classes.

    A label outside the classes gives a vector of zeros.
    """
    return [1.0 if index == label else 0.0 for index in range(N_CLASSES)]


def _read_header(stream: BinaryIO, size: int) -> bytes:
    header = stream.read(size)
    if not header:
        raise EOFError("end of stream")
    if len(header) < size:
        raise DataFormatError("truncated record header")
    return header


def write_qstring(stream: BinaryIO, text: str | None) -> None:
    """Write a string as a byte-length prefix and UTF-16BE data; None is a null string."""
    if text is None:
        stream.write(_UINT32.pack(_NULL_LENGTH))
        return
    encoded = text.encode("utf-16-be")
    stream.write(_UINT32.pack(len(encoded)))
    stream.write(encoded)


def read_qstring(stream: BinaryIO) -> str:
    """Read one string written by :func:`write_qstring`; a null string reads as ''."""
    (length,) = _UINT32.unpack(_read_header(stream, _UINT32.size))
    if length == _NULL_LENGTH:
        return ""
    if length % 2:
        raise DataFormatError(f"odd UTF-16 byte length {length}")
    payload = stream.read(length)
    if len(payload) < length:
        raise DataFormatError("truncated string data")
    return payload.decode("utf-16-be")


def write_int32(stream: BinaryIO, value: int) -> None:
    """Write a signed 32-bit big-endian integer."""
    try:
        stream.write(_INT32.pack(value))
    except struct.error as exc:
        raise ValueError(f"{value} does not fit in 32 bits") from exc


def read_int32(stream: BinaryIO) -> int:
    """Read a signed 32-bit big-endian integer."""
    (value,) = _INT32.unpack(_read_header(stream, _INT32.size))
    return value


def append_sample(data_path: str | Path, labels_path: str | Path, data: str, label: int) -> None:
    """Append one grid string and its label to the two sample files."""
    with open(data_path, "ab") as data_file:
        write_qstring(data_file, data)
    with open(labels_path, "ab") as labels_file:
        write_int32(labels_file, label)
    logger.debug("stored sample %r with label %d", data, label)


def _read_all(path: str | Path, reader: Callable[[BinaryIO], T]) -> list[T]:
    try:
        payload = Path(path).read_bytes()
    except FileNotFoundError:
        return []
    stream = io.BytesIO(payload)
    records = []
    while stream.tell() < len(payload):
        records.append(reader(stream))
    return records


def load_samples(
    data_path: str | Path, labels_path: str | Path
) -> tuple[list[list[float]], list[list[float]]]:
    """Load the stored samples as feature vectors and one-hot labels.

    Missing files count as empty.
    """
    texts = _read_all(data_path, read_qstring)
    labels = _read_all(labels_path, read_int32)
    if len(texts) != len(labels):
        raise DataFormatError(
            f"{len(texts)} grids but {len(labels)} labels in the sample files"
        )
    X = [create_features(parse_grid(text)) for text in texts]
    Y = [one_hot_label(label) for label in labels]
    for features, label in zip(X, labels):
        logger.debug("label %d, features %s", label, features)
    return X, Y