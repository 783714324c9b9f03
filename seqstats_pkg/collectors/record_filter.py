"""Exclusion of records by id."""

from typing import Iterable, Union

from seqstats_pkg.exceptions import RecordIdError

__all__ = [
    'RecordFilter',
    'decode_record_id',
]


def decode_record_id(record_id: Union[str, bytes, bytearray]) -> str:
    """Return the record id as text, raising RecordIdError if it is not valid UTF-8."""
    if isinstance(record_id, str):
        return record_id
    try:
        return bytes(record_id).decode('utf-8')
    except UnicodeDecodeError as e:
        raise RecordIdError(f"Record id is not utf-8 encoded: {e}") from e


class RecordFilter:
    """Decides whether a record is excluded from the statistics.

    Filter ids are matched exactly against the record id. Their order and
    any repeats are irrelevant.
    """

    def __init__(self, filter_ids: Iterable[str] = ()):
        self.filter_ids = frozenset(filter_ids)

    def __len__(self) -> int:
        return len(self.filter_ids)

    def is_excluded(self, record_id: Union[str, bytes, bytearray]) -> bool:
        """Return True when the record id is one of the filter ids."""
        return decode_record_id(record_id) in self.filter_ids

    def __repr__(self) -> str:
        return f"RecordFilter({sorted(self.filter_ids)!r})"
