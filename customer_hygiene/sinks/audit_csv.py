"""Append-only CSV audit log with separate success and failure files."""

import fcntl
import logging
from collections.abc import Sequence
from pathlib import Path

from customer_hygiene.config import AuditConfig
from customer_hygiene.exceptions import AuditWriteError
from customer_hygiene.models.audit import AuditRecord

logger = logging.getLogger(__name__)

SUCCESS_HEADER = "Customer Id,Email,VAT ID,Phone"
FAILURE_HEADER = "Customer Id,Email,Obs"


class AuditLog:
    """Output audit rows to two CSV files.

    Rows are comma-joined without quoting, so a value containing a comma
    shifts the columns of its row. The header and each row are written
    under an exclusive ``flock`` so concurrent processes never interleave
    partial lines.
    """

    def __init__(self, config: AuditConfig | None = None) -> None:
        """Initialize the audit log.

        Parameters
        ----------
        config : AuditConfig | None
            Destination directory and file names. Defaults to ``AuditConfig()``.
        """
        self.config = config or AuditConfig()
        self.output_dir = self.config.directory
        self._counts: dict[bool, int] = {True: 0, False: 0}

    def path_for(self, is_success: bool) -> Path:
        """Get the file backing one stream."""
        name = self.config.success_file if is_success else self.config.failure_file
        return self.output_dir / name

    def append(self, is_success: bool, fields: Sequence[object]) -> bool:
        """Append one row to the success or failure stream.

        Parameters
        ----------
        is_success : bool
            Target stream.
        fields : Sequence[object]
            Ordered row values; ``None`` renders as an empty column.

        Returns
        -------
        bool
            False when the row could not be written. Never raises.
        """
        line = ",".join("" if value is None else str(value) for value in fields)
        header = SUCCESS_HEADER if is_success else FAILURE_HEADER
        try:
            self._write(self.path_for(is_success), header, line)
        except AuditWriteError as exc:
            logger.warning("Audit row dropped: %s", exc)
            return False

        self._counts[is_success] += 1
        return True

    def record(self, entry: AuditRecord) -> bool:
        """Append a typed audit record to its stream."""
        return self.append(entry.is_success, entry.fields())

    def counts(self) -> dict[str, int]:
        """Rows written by this instance, per stream."""
        return {"success": self._counts[True], "failure": self._counts[False]}

    def close(self) -> None:
        """Log summary."""
        logger.info(
            "Audit log %s: %d success rows, %d failure rows",
            self.output_dir,
            self._counts[True],
            self._counts[False],
        )

    def _write(self, file_path: Path, header: str, line: str) -> None:
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(file_path, "a", encoding="utf-8", newline="") as f:
                fcntl.flock(f.fileno(), fcntl.LOCK_EX)
                try:
                    # size is checked under the lock; another writer may have
                    # created the file between open() and flock()
                    f.seek(0, 2)
                    chunk = line + "\n"
                    if f.tell() == 0:
                        chunk = header + "\n" + chunk
                    f.write(chunk)
                    f.flush()
                finally:
                    fcntl.flock(f.fileno(), fcntl.LOCK_UN)
        except (OSError, UnicodeError) as exc:
            raise AuditWriteError(f"cannot write {file_path}: {exc}") from exc
