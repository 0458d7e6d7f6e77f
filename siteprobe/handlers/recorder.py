"""
Writes one row per outcome or extracted item to the output sink.
"""

import logging
from typing import Callable, Optional, Sequence

from ..config import Limits
from ..core.interfaces import OutputSink, Recordable
from ..core.results import ErrorKind, Result
from ..models import ExtractedItem
from ..utils import truncate


class ExtractionRecorder:
    """
    Truncating, flush-per-row writer.

    Recording is best-effort: a failing sink is logged and reported as a
    ``SINK`` failure, the run goes on.
    """

    def __init__(
        self,
        sink: OutputSink,
        header: Sequence[str],
        next_id: Callable[[], int],
        max_field_length: Optional[int] = Limits.MAX_FIELD_LENGTH,
    ):
        self.sink = sink
        self.header = tuple(header)
        self.next_id = next_id
        self.max_field_length = max_field_length
        self.rows_written = 0
        self.failures = 0
        self.logger = logging.getLogger(self.__class__.__name__)

    def start(self) -> Result:
        """Write the header row."""
        try:
            self.sink.write_header(self.header)
            self.sink.flush()
        except Exception as e:
            self.logger.error(f"Error writing header: {e}")
            return Result.failure(ErrorKind.SINK, str(e))
        return Result.success()

    def to_row(self, record: dict) -> list:
        return [
            truncate(record.get(column, ""), self.max_field_length)
            for column in self.header
        ]

    def record(self, entry: Recordable) -> Result:
        """Append ``entry`` and flush. Items get the next run id here."""
        try:
            record = entry.to_record()
            if isinstance(entry, ExtractedItem):
                record["id"] = str(self.next_id())
            row = self.to_row(record)
            self.sink.append(row)
            self.sink.flush()
        except Exception as e:
            self.failures += 1
            self.logger.error(f"Error logging result: {e}")
            return Result.failure(ErrorKind.SINK, str(e))

        self.rows_written += 1
        return Result.success(row)
