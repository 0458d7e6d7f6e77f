"""
Output files of a run: the CSV sink and timestamped page snapshots.
"""

import csv
import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

from .core.exceptions import SinkError
from .core.interfaces import BrowserSession

FILE_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"

CSV_PREFIXES = {
    "scrape": "comprehensive_scraped_data",
    "interactions": "comprehensive_link_button_test",
    "sections": "systematic_navigation_test",
}


def safe_name(name: str) -> str:
    """File-name friendly version of a section name."""
    return re.sub(r"[^a-zA-Z0-9]", "_", name)


class CsvSink:
    """Append-only CSV file, every field quoted."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._file = open(self.path, "w", newline="", encoding="utf-8")
        self._writer = csv.writer(self._file, quoting=csv.QUOTE_ALL)

    def _write(self, row: Sequence[str]) -> None:
        try:
            self._writer.writerow(row)
        except (OSError, ValueError, csv.Error) as e:
            raise SinkError(f"Could not write to {self.path}: {e}") from e

    def write_header(self, fields: Sequence[str]) -> None:
        self._write(fields)

    def append(self, row: Sequence[str]) -> None:
        self._write(row)

    def flush(self) -> None:
        try:
            self._file.flush()
        except (OSError, ValueError) as e:
            raise SinkError(f"Could not flush {self.path}: {e}") from e

    def close(self) -> None:
        if not self._file.closed:
            self._file.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class RunArtifacts:
    """Names and writes every file a run produces, all sharing one timestamp."""

    def __init__(self, output_dir: str = "output", timestamp: Optional[str] = None):
        self.output_dir = Path(output_dir)
        self.timestamp = timestamp or datetime.now().strftime(FILE_TIMESTAMP_FORMAT)
        self.logger = logging.getLogger(self.__class__.__name__)

    def prepare(self) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        return self.output_dir

    def csv_path(self, mode: str) -> Path:
        return self.output_dir / f"{CSV_PREFIXES[mode]}_{self.timestamp}.csv"

    def open_sink(self, mode: str) -> CsvSink:
        self.prepare()
        path = self.csv_path(mode)
        self.logger.info(f"✓ Output file configured: {path.resolve()}")
        return CsvSink(path)

    def save_snapshot(self, session: BrowserSession, name: str = "homepage") -> tuple:
        """Write the current document markup and a screenshot; returns both paths."""
        self.prepare()
        html_path = self.output_dir / f"{name}_{self.timestamp}.html"
        png_path = self.output_dir / f"{name}_{self.timestamp}.png"
        html_path.write_text(session.page_source(), encoding="utf-8")
        png_path.write_bytes(session.screenshot())
        return html_path, png_path

    def save_screenshot(self, session: BrowserSession, name: str) -> Optional[Path]:
        """Screenshot named after ``name``; failures are logged and return None."""
        try:
            self.prepare()
            stamp = datetime.now().strftime(FILE_TIMESTAMP_FORMAT)
            path = self.output_dir / f"{safe_name(name)}_{stamp}.png"
            path.write_bytes(session.screenshot())
        except Exception as e:
            self.logger.warning(f"  - Screenshot failed: {e}")
            return None
        self.logger.info(f"📸 Screenshot saved: {path.name}")
        return path
