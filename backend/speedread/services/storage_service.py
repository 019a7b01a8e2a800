"""
Vocabulary Storage
Persists the vocabulary snapshot as a versioned JSON blob on disk.

Blob layout:
    {"version": 1, "state": {"words": [...], "sessions": [...], ...}}

Writes go to a temporary file that replaces the blob in one step, so a
reader never sees a partially written state.
"""
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from speedread.core.exceptions import StorageError, StoreVersionError
from speedread.models.vocabulary import VocabularySnapshot

logger = logging.getLogger(__name__)


class VocabularyStorage:
    """File-backed storage for the vocabulary snapshot"""

    def __init__(self, path: str | Path, version: int = 1):
        self.path = Path(path)
        self.version = version

    def load(self) -> Optional[VocabularySnapshot]:
        """
        Load the persisted snapshot.

        Returns:
            The snapshot, or None when nothing has been persisted yet

        Raises:
            StoreVersionError: blob written by a newer schema version
            StorageError: blob unreadable or invalid
        """
        if not self.path.exists():
            logger.info(f"No vocabulary store at {self.path}, starting empty")
            return None

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to read vocabulary store {self.path}: {e}")
            raise StorageError(f"Unreadable vocabulary store: {e}") from e

        if not isinstance(raw, dict) or "state" not in raw:
            raise StorageError("Vocabulary store has no 'state' section")

        version = raw.get("version")
        if version is None:
            logger.warning(f"Vocabulary store {self.path} has no version, loading as legacy data")
        elif not isinstance(version, int):
            raise StorageError(f"Invalid vocabulary store version: {version!r}")
        elif version > self.version:
            raise StoreVersionError(version, self.version)
        elif version < self.version:
            logger.warning(
                f"Vocabulary store version {version} is older than {self.version}, loading without migration"
            )

        try:
            return VocabularySnapshot.model_validate(raw["state"])
        except ValidationError as e:
            logger.error(f"Invalid vocabulary store contents: {e}")
            raise StorageError(f"Invalid vocabulary store contents: {e}") from e

    def save(self, snapshot: VocabularySnapshot) -> None:
        """Write the snapshot, replacing any previous blob atomically."""
        blob = {
            "version": self.version,
            "state": snapshot.model_dump(mode="json")
        }

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(blob, f, ensure_ascii=False)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            logger.error(f"Failed to write vocabulary store {self.path}: {e}")
            raise StorageError(f"Could not write vocabulary store: {e}") from e

        logger.debug(f"Saved vocabulary store with {len(snapshot.words)} words")
