"""
Data models for probe results.

Both record types are immutable: once an outcome or item exists it is only ever
appended to the output, never changed.
"""

from dataclasses import dataclass, fields
from datetime import datetime
from enum import Enum
from typing import Optional


TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def now_stamp() -> str:
    return datetime.now().strftime(TIMESTAMP_FORMAT)


class OutcomeCategory(Enum):
    HOVER = "hover"
    CLICK = "click"
    CLICK_NAVIGATE = "click_navigate"
    CLICK_SKIPPED = "click_skipped"
    SCRAPE = "scrape"
    INPUT = "input"
    SELECT = "select"


@dataclass(frozen=True)
class InteractionOutcome:
    """One attempted interaction or page-level scrape, successful or not."""
    attempt_id: int
    category: OutcomeCategory
    label: str
    subject_text: str = ""
    resulting_location_or_value: str = ""
    succeeded: bool = True
    error_detail: str = ""
    location_before: str = ""
    timestamp: str = ""
    section: str = ""
    element_type: str = ""
    scraped_data: str = ""
    navigated_to: Optional[str] = None
    mechanism: str = ""

    @property
    def navigated(self) -> bool:
        return self.navigated_to is not None

    def to_record(self) -> dict:
        return {
            "test_id": str(self.attempt_id),
            "section": self.section,
            "element_type": self.element_type or self.category.value,
            "action": self.label,
            "element_text": self.subject_text,
            "element_url": self.resulting_location_or_value,
            "scraped_data": self.scraped_data,
            "success": str(self.succeeded).lower(),
            "error_message": self.error_detail,
            "current_url": self.location_before,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class ExtractedItem:
    """Raw text pulled out of one content element."""
    title: str = ""
    description: str = ""
    price: str = ""
    calories: str = ""
    servings: str = ""
    cook_time: str = ""
    difficulty: str = ""
    ingredients: str = ""
    tags: str = ""
    category: str = ""
    url: str = ""
    image_url: str = ""
    source_location: str = ""
    scraped_at: str = ""

    @property
    def is_meaningful(self) -> bool:
        """Only items with a title, description or price are worth a row."""
        return bool(self.title or self.description or self.price)

    @property
    def dedup_key(self) -> tuple:
        return (self.title, self.url, self.price)

    def to_record(self) -> dict:
        record = {f.name: getattr(self, f.name) for f in fields(self)}
        record["dietary_tags"] = record.pop("tags")
        record["source_page"] = record.pop("source_location")
        return record
