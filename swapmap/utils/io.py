"""File IO utilities."""

from __future__ import annotations

import os

import chardet


def detect_encoding(path: os.PathLike[str] | str) -> str:
    """Detect the encoding of a text file."""

    with open(path, "rb") as handle:
        raw = handle.read()
    detection = chardet.detect(raw)
    return detection.get("encoding") or "utf-8"
