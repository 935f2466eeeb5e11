from dataclasses import asdict, dataclass, fields
from datetime import date, timedelta
from enum import Enum
from typing import Optional

ON_NOTICE_DAYS = 14


@dataclass
class PlanningApplicationRecord:
    council_reference: Optional[str] = None
    address: Optional[str] = None
    description: Optional[str] = None
    document_description: Optional[str] = None
    date_received: Optional[str] = None
    on_notice_to: Optional[str] = None
    date_scraped: Optional[str] = None

    # Reserved columns, nothing on the detail page populates them.
    applicant: Optional[str] = None
    owner: Optional[str] = None
    stage_description: Optional[str] = None
    stage_status: Optional[str] = None
    title_reference: Optional[str] = None

    def to_row(self) -> dict:
        return asdict(self)

    @classmethod
    def columns(cls) -> list:
        return [field.name for field in fields(cls)]


def on_notice_to(date_received: date) -> date:
    """
    Last day of the public comment window.
    :param date_received: date the application was lodged
    :return: date_received plus the on-notice period
    """
    return date_received + timedelta(days=ON_NOTICE_DAYS)


class WriteOutcome(Enum):
    INSERTED = 'inserted'
    SKIPPED_DUPLICATE = 'skipped_duplicate'
    DRY_RUN = 'dry_run'


@dataclass
class RunSummary:
    processed: int = 0
    inserted: int = 0
    skipped: int = 0
    failed: int = 0

    def as_dict(self) -> dict:
        return asdict(self)
