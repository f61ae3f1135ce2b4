import dataclasses
from datetime import date, datetime
from decimal import Decimal

from pydantic.alias_generators import to_camel


def to_json(value):
    """
    Convert DTOs into JSON-ready data with camelCase field names.

    Only dataclass field names are renamed; plain dicts (raw CSV rows,
    insight data) keep their keys as-is.
    """
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            to_camel(field.name): to_json(getattr(value, field.name))
            for field in dataclasses.fields(value)
            if field.name not in ("password_hash", "raw")
        }
    if isinstance(value, dict):
        return {key: to_json(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json(item) for item in value]
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value
