"""JSON file record store.

Each store keeps one ordered collection of records (a JSON array of objects)
in a single file. Every read re-parses the whole file; every write replaces
it. Writers to the same store are serialized with a per-store lock so two
overlapping read-modify-write cycles cannot lose an update.
"""

import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Protocol, Union

from storefront.api.exceptions import MalformedStoreError, StoreWriteError

# Configure module logger
logger = logging.getLogger(__name__)

Record = Dict[str, Any]


class Repository(Protocol):
    """Interface shared by record stores.

    Services only depend on this protocol, so the flat-file backing can be
    swapped for an embedded database without touching them.
    """

    def load(self) -> List[Record]:
        ...

    def save(self, records: List[Record]) -> None:
        ...

    def transaction(self) -> Any:
        ...


class JsonStore:
    """Whole-file JSON array store.

    Attributes:
        path: Location of the backing file.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = threading.RLock()

    def ensure_exists(self) -> None:
        """Create the backing file with an empty array if it is missing."""
        with self._lock:
            if self.path.exists():
                return
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._write([])
            logger.info("Created empty store", extra={"path": str(self.path)})

    def load(self) -> List[Record]:
        """Read every record from the backing file.

        Returns:
            The stored records in file order. A missing or blank file yields
            an empty list.

        Raises:
            MalformedStoreError: If the file is not a JSON array.
        """
        if not self.path.exists():
            return []

        text = self.path.read_text(encoding="utf-8")
        if not text.strip():
            return []

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            logger.error(
                "Store file is not valid JSON",
                extra={"path": str(self.path), "error": str(e)},
            )
            raise MalformedStoreError(str(self.path), e)

        if not isinstance(data, list):
            error = ValueError(f"expected a JSON array, got {type(data).__name__}")
            logger.error(
                "Store file is not a JSON array",
                extra={"path": str(self.path), "error": str(error)},
            )
            raise MalformedStoreError(str(self.path), error)

        return data

    def save(self, records: List[Record]) -> None:
        """Replace the backing file with ``records``.

        Args:
            records: Full record list to persist.

        Raises:
            StoreWriteError: If the file cannot be written.
        """
        with self._lock:
            self._write(records)

    @contextmanager
    def transaction(self) -> Iterator[List[Record]]:
        """Load, let the caller mutate, then save under the store lock.

        The records are only written back if the block exits without an
        exception, so a failed request leaves the file untouched.

        Example:
            >>> with store.transaction() as records:
            ...     records.append({"id": "1"})
        """
        with self._lock:
            records = self.load()
            yield records
            self._write(records)

    def _write(self, records: List[Record]) -> None:
        """Write JSON to a temp file in the same directory, then swap it in."""
        dir_path = self.path.parent
        dir_path.mkdir(parents=True, exist_ok=True)
        try:
            with tempfile.NamedTemporaryFile(
                mode="w",
                dir=dir_path,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
                encoding="utf-8",
            ) as tf:
                json.dump(records, tf, indent=2, ensure_ascii=False)
                temp_path = Path(tf.name)
        except OSError as e:
            raise StoreWriteError(str(self.path), e)

        try:
            os.replace(temp_path, self.path)
        except OSError as e:
            if temp_path.exists():
                temp_path.unlink()
            raise StoreWriteError(str(self.path), e)

        logger.debug(
            "Saved store",
            extra={"path": str(self.path), "num_records": len(records)},
        )
