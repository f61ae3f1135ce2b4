import pytest

from errors import CsvParseError
from services.csv_parser import AMOUNT_COLUMNS, DATE_COLUMNS, find_column, parse_csv_rows


def test_rows_are_trimmed_and_keyed_by_header():
    contents = b" Date , Description ,Amount\n2024-01-05,  Netflix  , -16.49 \n"

    rows = parse_csv_rows(contents)

    assert rows == [{"Date": "2024-01-05", "Description": "Netflix", "Amount": "-16.49"}]


def test_blank_lines_are_skipped():
    contents = b"Date,Description,Amount\n\n2024-01-05,Netflix,-16.49\n\n2024-01-10,Employer,10\n"

    assert len(parse_csv_rows(contents)) == 2


def test_quoted_commas_and_bom_are_handled():
    contents = '\ufeffDate,Description,Amount\n2024-01-05,"Metro, Montreal","$1,200.00"\n'.encode("utf-8")

    rows = parse_csv_rows(contents)

    assert rows[0]["Date"] == "2024-01-05"
    assert rows[0]["Description"] == "Metro, Montreal"
    assert rows[0]["Amount"] == "$1,200.00"


def test_wrong_column_count_fails_the_whole_parse():
    contents = b"Date,Description,Amount\n2024-01-05,Netflix,-16.49\n2024-01-06,Spotify\n"

    with pytest.raises(CsvParseError) as excinfo:
        parse_csv_rows(contents)

    assert excinfo.value.line == 3
    assert excinfo.value.status_code == 400


def test_unbalanced_quote_fails():
    contents = b'Date,Description,Amount\n2024-01-05,"Netflix,-16.49\n'

    with pytest.raises(CsvParseError):
        parse_csv_rows(contents)


def test_non_utf8_input_fails():
    with pytest.raises(CsvParseError, match="UTF-8"):
        parse_csv_rows(b"Date,Description\n\xff\xfe\xfa,x\n")


def test_empty_file_has_no_header():
    with pytest.raises(CsvParseError, match="missing headers"):
        parse_csv_rows(b"")


def test_header_only_yields_no_rows():
    assert parse_csv_rows(b"Date,Description,Amount\n") == []


def test_find_column_is_case_insensitive():
    row = {"POSTED DATE": "2024-01-05", "Value": "3"}

    assert find_column(row, DATE_COLUMNS) == "POSTED DATE"
    assert find_column(row, AMOUNT_COLUMNS) == "Value"


def test_find_column_prefers_earlier_candidates():
    row = {"Timestamp": "x", "Transaction Date": "y", "Date": "z"}

    assert find_column(row, DATE_COLUMNS) == "Date"


def test_find_column_returns_none_without_match():
    assert find_column({"Foo": "1"}, AMOUNT_COLUMNS) is None


def test_repeated_header_name_fails():
    contents = b"Date,Amount,Description,Amount\n2024-01-05,-16.49,Netflix,-20.00\n"

    with pytest.raises(CsvParseError) as excinfo:
        parse_csv_rows(contents)

    assert excinfo.value.line == 1
    assert "Amount" in excinfo.value.message
