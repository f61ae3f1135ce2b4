from dataclasses import dataclass, field
from typing import List

from models.finance import Transaction


@dataclass
class SkippedRow:
    reason: str
    row: dict


@dataclass
class UploadStats:
    total_rows: int
    imported_rows: int
    detected_duplicates: int
    detected_transfers: int


@dataclass
class UploadResult:
    imported: List[Transaction]
    stats: UploadStats
    skipped: List[SkippedRow] = field(default_factory=list)
