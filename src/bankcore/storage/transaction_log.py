"""In-memory transaction buffer flushed to the daily transactions file."""

from bankcore.domain.entities import TransactionRecord
from bankcore.logging import get_logger
from bankcore.storage.files import write_lines

logger = get_logger(__name__)


class TransactionLog:
    """Ordered buffer of transaction records since the last flush."""

    def __init__(self, transactions_path: str):
        """Initialize transaction log.

        Args:
            transactions_path: Path of the daily transactions file
        """
        self.transactions_path = transactions_path
        self._records: list[TransactionRecord] = []

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> tuple[TransactionRecord, ...]:
        """Buffered records in insertion order."""
        return tuple(self._records)

    def add(self, record: TransactionRecord) -> None:
        self._records.append(record)

    def write_and_clear(self) -> None:
        """Overwrite the transactions file with the buffer and a closing 00 record.

        The buffer is emptied even when the write fails.

        Raises:
            PersistenceError: If the file cannot be written
        """
        count = len(self._records)
        try:
            lines = [record.to_fixed40() for record in self._records]
            lines.append(TransactionRecord.end_of_session().to_fixed40())
            write_lines(self.transactions_path, lines)
        finally:
            self._records.clear()
        logger.info("Wrote %d transactions to %s", count, self.transactions_path)
