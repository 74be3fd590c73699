"""
JSON Blob Store.

Reads and writes the JSON array files used as input and output of the bulk
user operations. Every failure is raised; nothing is swallowed.
"""

import json
from pathlib import Path
from typing import Any

from davinci_cli.core.exceptions import ParseError, StorageError, ValidationError
from davinci_cli.core.logging import get_logger, log_with_source

logger = get_logger(__name__)


class BlobStore:
    """
    Reads and writes JSON array files.

    Usage:
        store = BlobStore()
        users = store.read_array(Path("users/importUsers.json"))
        store.write_array(Path("users/exportUsers.json"), users)
    """

    def __init__(self, indent: int = 2) -> None:
        self.indent = indent

    def read_array(self, path: Path) -> list[Any]:
        """
        Read a file that must hold a JSON array.

        Raises:
            StorageError: If the file cannot be read
            ParseError: If the content is not valid JSON
            ValidationError: If the JSON is not an array
        """
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise StorageError(f"File not found: {path}") from e
        except OSError as e:
            raise StorageError(f"Cannot read {path}: {e}") from e
        except UnicodeDecodeError as e:
            raise ParseError(f"Invalid JSON in {path}: {e}") from e

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ParseError(f"Invalid JSON in {path}: {e}") from e

        if not isinstance(data, list):
            raise ValidationError(
                f"{path} must contain a JSON array",
                details={"path": str(path), "type": type(data).__name__},
            )

        log_with_source(logger, "storage", "debug", "Blob read", path=str(path), count=len(data))
        return data

    def write_array(self, path: Path, data: list[Any]) -> Path:
        """
        Write a JSON array, creating the parent directory if needed.

        Output is stable for identical input, so repeated writes of the
        same data produce byte-identical files.

        Raises:
            StorageError: If the file cannot be written
        """
        text = json.dumps(data, indent=self.indent, ensure_ascii=False)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Cannot write {path}: {e}") from e

        log_with_source(logger, "storage", "info", "Blob written", path=str(path), count=len(data))
        return path
