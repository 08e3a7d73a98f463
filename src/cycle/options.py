"""
Selection policy options - parsing, validation and normalization.

Raw options come in two shapes, for either sub-policy:
- a single value, applied to the collection's default label
    auto_select="first"
- a mapping from label to value
    auto_select={"selected": "first", "starred": 2}

After parsing, both sub-policies are plain label -> value maps holding active
entries only ("none" and unset entries are dropped), so presence of a label
means the policy is active for it.
"""
import re
import warnings
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, TypeVar
from pydantic import BaseModel, ConfigDict, Field

from src.cycle.errors import ConfigurationError

NONE = "none"

T = TypeVar("T")


class AutoSelectKind(Enum):
    FIRST = "first"
    LAST = "last"
    INDEX = "index"


@dataclass(frozen=True)
class AutoSelect:
    """Which item to select when a collection is populated."""
    kind: AutoSelectKind
    index: int = 0

    def resolve(self, length: int) -> int:
        """
        Candidate index for a sequence of the given length.

        The result is not range checked: callers look it up without wrapping,
        so an out-of-range index simply yields no candidate.
        """
        if self.kind is AutoSelectKind.FIRST:
            return 0
        if self.kind is AutoSelectKind.LAST:
            return length - 1
        return self.index

    @classmethod
    def at(cls, index: int) -> "AutoSelect":
        return cls(AutoSelectKind.INDEX, index)


AutoSelect.FIRST = AutoSelect(AutoSelectKind.FIRST)
AutoSelect.LAST = AutoSelect(AutoSelectKind.LAST)


class RemovalRepairMode(Enum):
    """Which item to select when the selected item is removed."""
    PREV = "prev"
    NEXT = "next"
    PREV_NO_LOOP = "prevNoLoop"
    NEXT_NO_LOOP = "nextNoLoop"
    NONE = "none"

    @property
    def forward(self) -> bool:
        """True if the item that moved into the removed slot is the candidate."""
        return self in (RemovalRepairMode.NEXT, RemovalRepairMode.NEXT_NO_LOOP)

    @property
    def looped(self) -> bool:
        """True if the candidate wraps around the ends instead of being clamped."""
        return self in (RemovalRepairMode.PREV, RemovalRepairMode.NEXT)


class CycleOptions(BaseModel):
    """Normalized selection policy configuration of one collection."""
    model_config = ConfigDict(frozen=True)

    auto_select: Dict[str, AutoSelect] = Field(default_factory=dict)
    select_if_removed: Dict[str, RemovalRepairMode] = Field(default_factory=dict)

    @property
    def auto_select_active(self) -> bool:
        return bool(self.auto_select)

    @property
    def select_if_removed_active(self) -> bool:
        return bool(self.select_if_removed)


# --- Value parsers ---

_INTEGER_PATTERN = re.compile(r"^\s*([+-]?\d+)(?:\.0*)?\s*$")


def _as_integer(value: Any) -> Optional[int]:
    """
    int for anything that represents an integer losslessly, otherwise None.

    Strings may carry a sign, surrounding whitespace and a zero fraction
    ("+3", " 7 ", "3.0").
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        match = _INTEGER_PATTERN.match(value)
        if match:
            return int(match.group(1))
    return None


def parse_auto_select_value(value: Any) -> Optional[AutoSelect]:
    """AutoSelect for a raw value, None for "none". Raises ValueError if invalid."""
    if value is None or value == NONE:
        return None
    if isinstance(value, AutoSelect):
        return value
    if value == "first":
        return AutoSelect.FIRST
    if value == "last":
        return AutoSelect.LAST
    index = _as_integer(value)
    if index is None:
        raise ValueError(value)
    return AutoSelect.at(index)


def parse_removal_repair_value(value: Any) -> Optional[RemovalRepairMode]:
    """RemovalRepairMode for a raw value, None for "none". Raises ValueError if invalid."""
    if value is None:
        return None
    if isinstance(value, RemovalRepairMode):
        mode = value
    elif isinstance(value, str):
        mode = RemovalRepairMode(value)
    else:
        raise ValueError(value)
    return None if mode is RemovalRepairMode.NONE else mode


# --- Option normalization ---

def _normalize(
    option_name: str,
    raw: Any,
    parse: Callable[[Any], Optional[T]],
    default_label: str,
    ignored_labels: Iterable[str],
) -> Dict[str, T]:
    is_hash = isinstance(raw, Mapping)
    entries = dict(raw) if is_hash else {default_label: raw}

    # Validate everything before building anything
    parsed: Dict[str, Optional[T]] = {}
    for label, value in entries.items():
        if not isinstance(label, str) or not label:
            raise ConfigurationError(f"{option_name} option: Invalid label {label!r} inside hash")
        try:
            parsed[label] = parse(value)
        except ValueError:
            message = f'{option_name} option: Invalid value "{value}"'
            if is_hash:
                message += " inside hash"
            raise ConfigurationError(message) from None

    normalized = {label: value for label, value in parsed.items() if value is not None}

    conflicts = [label for label in normalized if label in set(ignored_labels)]
    if conflicts:
        quoted = ", ".join(f'"{label}"' for label in conflicts)
        raise ConfigurationError(
            f"Conflicting options: Can't define {option_name} behaviour for label {quoted} "
            "because it is ignored in the collection."
        )
    return normalized


def parse_options(
    auto_select: Any = None,
    select_if_removed: Any = None,
    *,
    default_label: str,
    ignored_labels: Iterable[str] = (),
    initial_selection: Any = None,
) -> CycleOptions:
    """
    Validate and normalize raw selection policy options.

    Args:
        auto_select: "first", "last", "none", an integer (or integer string,
            such as "3", "+3" or "3.0"), an AutoSelect, or a mapping of
            label -> one of those
        select_if_removed: "prev", "next", "prevNoLoop", "nextNoLoop", "none",
            or a mapping of label -> one of those
        default_label: Label a single (non-mapping) value applies to
        ignored_labels: Labels the collection does not track; an active policy
            for any of them is a configuration error
        initial_selection: Deprecated alias of auto_select

    Raises:
        ConfigurationError: on any invalid value or conflicting label
    """
    if initial_selection is not None:
        warnings.warn(
            "initial_selection is deprecated, use auto_select instead",
            DeprecationWarning,
            stacklevel=3,
        )
        if auto_select is None:
            auto_select = initial_selection

    ignored = tuple(ignored_labels)
    return CycleOptions(
        auto_select=_normalize("auto_select", auto_select, parse_auto_select_value, default_label, ignored),
        select_if_removed=_normalize(
            "select_if_removed", select_if_removed, parse_removal_repair_value, default_label, ignored
        ),
    )
