"""Load listings exported by the item store."""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Iterable, Sequence

from ..core import GeoItem
from ..core.exceptions import ListingError
from ..utils import detect_encoding

logger = logging.getLogger(__name__)


class ListingLoader:
    """Read :class:`GeoItem` records from JSON or CSV exports."""

    REQUIRED_COLUMNS: Sequence[str] = ("id", "name", "latitude", "longitude")

    def __init__(self, *, encoding: str | None = None):
        self.encoding = encoding or "utf-8-sig"

    def load(self, path: Path | str) -> list[GeoItem]:
        path = Path(path)
        if not path.exists():
            raise ListingError(f"Listing export not found: {path}")

        encoding = self.encoding
        if encoding == "auto":
            encoding = detect_encoding(path)

        with path.open("r", encoding=encoding, errors="replace") as handle:
            if path.suffix.lower() == ".csv":
                records = self._read_csv(handle, path)
            else:
                records = self._read_json(handle, path)

        items = [GeoItem.from_record(record) for record in records]
        unplaced = sum(1 for item in items if item.coordinate is None)
        if unplaced:
            logger.info("%d of %d listings in %s have no usable coordinates", unplaced, len(items), path)
        return items

    def _read_json(self, handle, path: Path) -> Iterable[dict]:
        try:
            payload = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ListingError("Listing export is not valid JSON", details={"path": str(path)}) from exc
        if not isinstance(payload, list):
            raise ListingError("Listing export must be a JSON array", details={"path": str(path)})
        return [record for record in payload if isinstance(record, dict)]

    def _read_csv(self, handle, path: Path) -> Iterable[dict]:
        reader = csv.DictReader(handle)
        headers = reader.fieldnames or []
        missing = [column for column in self.REQUIRED_COLUMNS if column not in headers]
        if missing:
            raise ListingError(
                "Listing export is missing required columns",
                details={"path": str(path), "missing": missing},
            )
        return [row for row in reader if any(row.values())]
