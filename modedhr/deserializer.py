"""Reading records from CSV and JSON files."""

from __future__ import annotations

import csv
import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union


@dataclass
class FileDeserializer:
    """Loads the contents of an existing CSV or JSON file."""

    path: Union[str, "os.PathLike[str]"]

    def __post_init__(self) -> None:
        if not Path(self.path).exists():
            raise FileNotFoundError(f"file does not exist: {self.path}")

    def deserialize(self) -> Any:
        """Load the file, choosing the format by its extension."""
        extension = Path(self.path).suffix.lower()
        if extension == ".csv":
            return self.deserialize_csv()
        if extension == ".json":
            return self.deserialize_json()
        raise ValueError(f"unsupported file format: {extension}")

    def deserialize_csv(self) -> list[dict[str, str]]:
        """Return the CSV rows as dictionaries keyed by the header line."""
        with open(self.path, newline="", encoding="utf-8") as handle:
            try:
                rows = list(csv.reader(handle))
            except csv.Error as exc:
                raise ValueError(f"failed to unmarshal CSV file: {self.path}: {exc}") from exc
        if not rows:
            raise ValueError(f"failed to unmarshal CSV file: {self.path}: empty csv file given")
        header, *body = rows
        for line, row in enumerate(body, start=2):
            if len(row) != len(header):
                raise ValueError(
                    f"failed to unmarshal CSV file: {self.path}: "
                    f"wrong number of fields on line {line}"
                )
        return [dict(zip(header, row)) for row in body]

    def deserialize_json(self) -> Any:
        """Return the first JSON value in the file."""
        with open(self.path, encoding="utf-8") as handle:
            text = handle.read()
        try:
            value, _ = json.JSONDecoder().raw_decode(text.lstrip())
        except json.JSONDecodeError as exc:
            raise ValueError(f"failed to unmarshal JSON file: {self.path}: {exc}") from exc
        return value