from fvtemporal.fields.value_types import ValueType
from fvtemporal.fields.vol_field import TimeHistoryError, VolField

__all__ = [
    "ValueType",
    "VolField",
    "TimeHistoryError",
]
