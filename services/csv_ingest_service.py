import logging

from errors import AppError
from helpers.normalize import normalize_rows
from models.upload_dto import SkippedRow, UploadResult, UploadStats
from services.csv_parser import parse_csv_rows

logger = logging.getLogger(__name__)


class NoTransactionsError(AppError):
    status_code = 400


def ingest_csv(store, user_id: str, account_id: str, contents: bytes, currency: str) -> UploadResult:
    """
    Parse, normalize and persist a CSV statement for one account.

    The whole batch is written with a single store call. Structural CSV
    problems raise CsvParseError before anything is stored; individual rows
    without a usable date or with a zero amount are reported in ``skipped``.
    """
    rows = parse_csv_rows(contents)
    candidates, dropped = normalize_rows(rows, currency)

    for reason, row in dropped:
        logger.warning(f"Dropped CSV row ({reason}): {row}")

    if not candidates:
        raise NoTransactionsError("No transactions detected in CSV")

    imported = store.create_transactions(user_id, account_id, candidates)
    logger.info(
        f"Imported {len(imported)} of {len(rows)} rows for user={user_id} account={account_id}"
    )

    return UploadResult(
        imported=imported,
        skipped=[SkippedRow(reason=reason, row=row) for reason, row in dropped],
        stats=UploadStats(
            total_rows=len(rows),
            imported_rows=len(imported),
            # No duplicate detection: re-importing a statement imports it again
            detected_duplicates=0,
            detected_transfers=sum(1 for t in imported if t.is_transfer),
        ),
    )
