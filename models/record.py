"""
models/record.py
----------------
Shared plumbing for records loaded from the persisted JSON state.

The stored documents carry more fields than the engine models (notes,
payment method, colors...). `RecordReader` pulls out the modeled fields and
keeps everything else, plus the raw value of any modeled field that failed
to parse, in an `extra` dict so that saving a record never loses data.
"""

from datetime import date
from typing import Any, Optional, Union

from utils.parsing import date_to_str, is_number, parse_date, safe_float, safe_int

RecordId = Union[int, str, None]


class RecordReader:
    """Reads modeled fields out of a raw JSON mapping."""

    def __init__(self, data: dict):
        self.data = dict(data or {})
        self.extra: dict = {}
        self._known: set[str] = set()

    def value(self, key: str, default: Any = None) -> Any:
        self._known.add(key)
        value = self.data.get(key)
        return default if value is None else value

    def text(self, key: str, default: str = "") -> str:
        value = self.value(key)
        return default if value in (None, "") else str(value)

    def amount(self, key: str) -> float:
        self._known.add(key)
        raw = self.data.get(key)
        if raw not in (None, "") and not is_number(raw):
            self.extra[key] = raw
        return safe_float(raw)

    def integer(self, key: str) -> int:
        self._known.add(key)
        raw = self.data.get(key)
        if raw not in (None, "") and not is_number(raw):
            self.extra[key] = raw
        return safe_int(raw)

    def date(self, key: str) -> Optional[date]:
        self._known.add(key)
        raw = self.data.get(key)
        parsed = parse_date(raw)
        if parsed is None and raw not in (None, ""):
            self.extra[key] = raw
        return parsed

    def leftovers(self) -> dict:
        """Unmodeled keys plus the raw value of fields that failed to parse."""
        rest = {k: v for k, v in self.data.items() if k not in self._known}
        rest.update(self.extra)
        return rest


def build_payload(known: dict, extra: dict) -> dict:
    """
    Merge modeled fields back over the preserved extras.

    A key present in `extra` wins: it is either unmodeled or holds the raw
    value of a field that could not be parsed.
    """
    payload = dict(extra)
    for key, value in known.items():
        if key in extra:
            continue
        if isinstance(value, date):
            value = date_to_str(value)
        payload[key] = value
    return payload
