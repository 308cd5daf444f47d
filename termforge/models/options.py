"""
Typed option values for prompt modules and keybinding arguments.

YAML gives us arbitrary Python objects. They are converted once, at parse
time, into a closed set of value types so that emitters never need to inspect
raw runtime types:

- Scalar: text
- Bool: true/false
- Number: int or float
- ValueList: ordered list of option values
- Table: string-keyed mapping of option values

Anything else YAML can produce (dates, timestamps) becomes a Scalar of its
string form.
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple, Union

# Option keys whose string tables are display labels (OS name -> symbol).
LABEL_TABLE_KEYS = frozenset({"symbols"})


@dataclass(frozen=True)
class Scalar:
    value: str


@dataclass(frozen=True)
class Bool:
    value: bool


@dataclass(frozen=True)
class Number:
    value: Union[int, float]

    @property
    def is_integral(self) -> bool:
        if isinstance(self.value, int):
            return True
        return self.value.is_integer()


@dataclass(frozen=True)
class ValueList:
    items: Tuple["OptionValue", ...] = ()


@dataclass(frozen=True)
class Table:
    entries: Tuple[Tuple[str, "OptionValue"], ...] = ()
    labels: bool = False

    def sorted_entries(self):
        return sorted(self.entries, key=lambda entry: entry[0])


OptionValue = Union[Scalar, Bool, Number, ValueList, Table]


def parse_option(value: Any, key: str = "") -> OptionValue:
    """Convert a raw YAML value into an OptionValue."""
    # bool must be tested before int
    if isinstance(value, bool):
        return Bool(value)
    if isinstance(value, (int, float)):
        return Number(value)
    if isinstance(value, str):
        return Scalar(value)
    if value is None:
        return Scalar("")
    if isinstance(value, (list, tuple)):
        return ValueList(tuple(parse_option(item) for item in value))
    if isinstance(value, dict):
        entries = tuple((str(k), parse_option(v, str(k))) for k, v in value.items())
        labels = key in LABEL_TABLE_KEYS and all(
            isinstance(v, Scalar) for _, v in entries
        )
        return Table(entries, labels=labels)
    return Scalar(str(value))


def parse_options(raw: Dict[str, Any]) -> Dict[str, OptionValue]:
    if not raw:
        return {}
    return {str(k): parse_option(v, str(k)) for k, v in raw.items()}


def to_python(value: OptionValue) -> Any:
    """Convert an OptionValue back to plain Python data for serialization."""
    if isinstance(value, (Scalar, Bool, Number)):
        return value.value
    if isinstance(value, ValueList):
        return [to_python(item) for item in value.items]
    if isinstance(value, Table):
        return {k: to_python(v) for k, v in value.entries}
    raise TypeError(f"not an option value: {value!r}")
