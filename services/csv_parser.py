"""
CSV Row Parser: turns an uploaded statement into raw row dicts.

Only structural problems (encoding, quoting, column counts) are errors here;
whether a row is a usable transaction is decided by the normalizer.
"""
import csv
import io

from errors import CsvParseError

AMOUNT_COLUMNS = ["amount", "cad", "value"]
CREDIT_COLUMNS = ["credit", "deposit", "in"]
DEBIT_COLUMNS = ["debit", "withdrawal", "out"]
DATE_COLUMNS = ["date", "transaction date", "posted date", "date posted", "timestamp"]
DESCRIPTION_COLUMNS = ["description", "details", "memo", "transaction", "merchant", "name"]


def find_column(row: dict, candidates: list) -> str | None:
    """Return the first column of ``row`` matching a candidate name (case-insensitive).

    Candidates are tried in order, so earlier candidates win over later ones
    regardless of header order.
    """
    lowered = {}
    for column in row:
        lowered.setdefault(column.lower(), column)

    for candidate in candidates:
        column = lowered.get(candidate.lower())
        if column is not None:
            return column
    return None


def parse_csv_rows(contents: bytes) -> list:
    """
    Parse a CSV byte buffer with a header row into a list of trimmed row dicts.

    Raises:
        CsvParseError: if the buffer is not UTF-8, has no header, repeats a
            header name, contains an unterminated quote, or a row has the
            wrong number of cells.
    """
    try:
        text = contents.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise CsvParseError("File must be UTF-8 encoded CSV") from exc

    reader = csv.reader(io.StringIO(text, newline=""), strict=True)

    rows = []
    header = None
    try:
        for record in reader:
            if not record or (len(record) == 1 and not record[0].strip()):
                continue

            cells = [cell.strip() for cell in record]
            if header is None:
                duplicates = sorted({name for name in cells if cells.count(name) > 1})
                if duplicates:
                    raise CsvParseError(
                        f"duplicate header {', '.join(duplicates)}",
                        line=reader.line_num,
                    )
                header = cells
                continue

            if len(cells) != len(header):
                raise CsvParseError(
                    f"expected {len(header)} columns, found {len(cells)}",
                    line=reader.line_num,
                )
            rows.append(dict(zip(header, cells)))
    except csv.Error as exc:
        raise CsvParseError(str(exc), line=reader.line_num) from exc

    if header is None:
        raise CsvParseError("CSV is missing headers")

    return rows
