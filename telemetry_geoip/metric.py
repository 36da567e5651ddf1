"""
Metric point model used by processors
"""

import time
from typing import Dict, List, Optional, Tuple, Union

from .errors import FieldTypeError

FieldValue = Union[str, int, float, bool]

FIELD_TYPES = (str, int, float, bool)


def expect_string(name: str, value: FieldValue) -> str:
    """Return value as a string or raise FieldTypeError."""
    if not isinstance(value, str):
        raise FieldTypeError(f"Field {name!r} holds {type(value).__name__}, expected str: {value!r}")
    return value


class Metric:
    """A single observation: measurement name, tags, fields and timestamp.

    The pipeline owns metric lifetime; processors only read and write fields.
    """

    def __init__(self, name: str, tags: Optional[Dict[str, str]] = None,
                 fields: Optional[Dict[str, FieldValue]] = None, timestamp: Optional[int] = None):
        self.name = name
        self.tags: Dict[str, str] = dict(tags or {})
        self.fields: Dict[str, FieldValue] = {}
        self.time = timestamp if timestamp is not None else time.time_ns()
        for key, value in (fields or {}).items():
            self.add_field(key, value)

    def get_field(self, name: str) -> Optional[FieldValue]:
        """Get a field value, None if the field is absent"""
        return self.fields.get(name)

    def has_field(self, name: str) -> bool:
        return name in self.fields

    def add_field(self, name: str, value: FieldValue):
        """Add a field, overwriting any existing value"""
        if not isinstance(value, FIELD_TYPES):
            raise FieldTypeError(f"Unsupported value type for field {name!r}: {type(value).__name__}")
        self.fields[name] = value

    def remove_field(self, name: str):
        self.fields.pop(name, None)

    def field_list(self) -> List[Tuple[str, FieldValue]]:
        return list(self.fields.items())

    def copy(self) -> "Metric":
        return Metric(self.name, tags=self.tags, fields=self.fields, timestamp=self.time)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Metric):
            return NotImplemented
        return (self.name, self.tags, self.fields, self.time) == (other.name, other.tags, other.fields, other.time)

    def __repr__(self) -> str:
        return f"Metric(name={self.name!r}, tags={self.tags!r}, fields={self.fields!r}, time={self.time})"
