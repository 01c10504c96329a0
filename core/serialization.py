# =============================================================================
# core/serialization.py  —  Dataclass → JSON-ready dict
# =============================================================================
#
# Every tool and HTTP route returns a plain dict.  This module is the single
# place that turns core dataclasses into one: dataclass FIELD names become
# camelCase, and the two currency fields render as the wire names
# "from" / "to".  Keys of ordinary dict values (phrase keys such as
# "thank_you") are data and are left untouched.
# =============================================================================

from dataclasses import fields, is_dataclass
from datetime import date, datetime
from typing import Any

# Wire names that cannot be spelled as Python identifiers.
_RENAMES = {
    "from_currency": "from",
    "to_currency": "to",
}


def camelize(name: str) -> str:
    """snake_case → camelCase ("total_cost" → "totalCost")."""
    if name in _RENAMES:
        return _RENAMES[name]
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def to_payload(obj: Any, **extra: Any) -> Any:
    """Convert a dataclass (or list of them) to a JSON-serializable value.

    Keyword arguments are merged into the top-level dict (camelized); use
    them for derived properties that are not dataclass fields.
    """
    if is_dataclass(obj) and not isinstance(obj, type):
        data = {camelize(f.name): to_payload(getattr(obj, f.name)) for f in fields(obj)}
        data.update({camelize(k): to_payload(v) for k, v in extra.items()})
        return data
    if isinstance(obj, dict):
        return {k: to_payload(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple, set, frozenset)):
        return [to_payload(item) for item in obj]
    if isinstance(obj, (date, datetime)):
        return obj.isoformat()
    return obj
