"""FeedbackStore: flat-file persistence for feedback entries.

The backing file holds a single JSON array of feedback records. It is created
lazily (as ``[]``) and rewritten in full on every append.

Best-effort persistence policy:
    - A file that is not UTF-8 JSON or whose top level is not an array reads
      as an empty list. The parse failure is logged, and the next append
      overwrites the unreadable content.
    - Individual records that do not form a valid entry are skipped when
      listing and logged. They stay in the file and are written back
      unchanged on the next append.
    - I/O failures raise StorageError; callers decide whether to surface them.

Known limitation:
    ``append`` is a non-atomic read-modify-write with no locking. Two
    concurrent submissions can interleave and one entry may be lost. This is
    accepted at the expected load.
"""

import json
import logging
from pathlib import Path
from typing import Any, List, Union

from pydantic import ValidationError as PydanticValidationError

from feedback_service.lib.exceptions import StorageError
from feedback_service.lib.feedback.models import FeedbackEntry

logger = logging.getLogger(__name__)


class FeedbackStore:
    """Reads and appends FeedbackEntry records in a single JSON file."""

    def __init__(self, file_path: Union[str, Path]):
        self.file_path = Path(file_path)

    def ensure_file(self) -> None:
        """Create the backing file with an empty array if it does not exist.

        Failures are logged only; a following read reports them as StorageError.
        """
        try:
            if not self.file_path.exists():
                self.file_path.parent.mkdir(parents=True, exist_ok=True)
                self.file_path.write_text("[]", encoding="utf-8")
                logger.info('Created feedback store at %s', self.file_path)
        except OSError as e:
            logger.error('Error ensuring feedback file %s: %s', self.file_path, e)

    def read_records(self) -> List[Any]:
        """Load the raw items of the stored JSON array, unvalidated.

        Returns:
            The array items in insertion order. Empty if the file content
            cannot be decoded or parsed as a JSON array.

        Raises:
            StorageError: If the file cannot be read
        """
        self.ensure_file()
        try:
            raw = self.file_path.read_bytes()
        except OSError as e:
            raise StorageError(
                "failed to read feedbacks",
                details={"error": str(e)},
            ) from e

        try:
            # UnicodeDecodeError and json.JSONDecodeError are both ValueError subclasses
            records = json.loads(raw.decode("utf-8") or "[]")
            if not isinstance(records, list):
                raise TypeError(f"expected a JSON array, got {type(records).__name__}")
        except (ValueError, TypeError) as e:
            logger.warning(
                'Feedback store %s is unreadable, treating as empty: %s', self.file_path, e
            )
            return []
        return records

    def read(self) -> List[FeedbackEntry]:
        """Load all valid stored entries in insertion order.

        Returns:
            List of FeedbackEntry, oldest first. Records that are not valid
            entries are left out.

        Raises:
            StorageError: If the file cannot be read
        """
        entries = []
        for index, record in enumerate(self.read_records()):
            try:
                entries.append(FeedbackEntry.model_validate(record))
            except PydanticValidationError as e:
                logger.warning(
                    'Skipping invalid feedback record %d in %s: %s',
                    index, self.file_path, e.errors(include_url=False),
                )
        return entries

    def _write_records(self, records: List[Any]) -> None:
        payload = json.dumps(records, indent=2, ensure_ascii=False)
        try:
            self.file_path.write_text(payload, encoding="utf-8")
        except OSError as e:
            raise StorageError(
                "failed to write feedbacks",
                details={"error": str(e)},
            ) from e

    def append(self, entry: FeedbackEntry) -> None:
        """Append one entry (read full array, add entry, rewrite file).

        Existing records are written back as they were read, including
        ones that are not valid entries.

        Raises:
            StorageError: If the file cannot be read or written
        """
        records = self.read_records()
        records.append(entry.to_record())
        self._write_records(records)
        logger.debug('Appended feedback %s (%d stored)', entry.id, len(records))

    def is_readable(self) -> bool:
        """Check whether the backing file can currently be read."""
        try:
            self.read_records()
            return True
        except StorageError:
            return False
