"""
Bookshelf Backend — Declarative Constraints
=============================================

What:  Rule predicates and the generic schema evaluator for JSON bodies.
Why:   Every schema is checked the same way, and every violation is reported.
How:   A PayloadSchema holds an ordered list of Constraint(field, rule, message).
       `validate()` runs every constraint against the payload and returns the
       messages of those that fail, in declaration order.

Partial schemas (updates):
    A field that is absent or null is "not supplied" and all of its
    constraints are skipped. A supplied field is held to the same rules as
    on create.
"""

import re
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, NamedTuple, Optional, Sequence, Tuple

Rule = Callable[[Any], bool]


class Constraint(NamedTuple):
    """One rule on one field, with the message reported when it fails."""

    field: str
    rule: Rule
    message: str


# ══════════════════════════════════════════════════════════════════════════
# Rule Predicates
# ══════════════════════════════════════════════════════════════════════════

def is_not_empty(value: Any) -> bool:
    """Present, not null, and not the empty string."""
    return value is not None and value != ""


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_number(value: Any) -> bool:
    # bool is an int subclass; JSON true/false are not numbers
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_int(value: Any) -> bool:
    """Integral JSON number (200 and 200.0 both count)."""
    if not is_number(value):
        return False
    if isinstance(value, float):
        return value.is_integer()
    return True


def min_value(minimum: int) -> Rule:
    """Numeric lower bound; non-numbers fail."""

    def rule(value: Any) -> bool:
        return is_number(value) and value >= minimum

    return rule


def parse_iso_date(value: str) -> Optional[datetime]:
    """
    Parse an ISO 8601 date or date-time string into an aware UTC datetime.

    Date-only and naive values are taken as UTC; values with an offset are
    converted to UTC. Returns None when the string does not parse, or when
    the UTC instant falls outside years 1-9999 ("0001-01-01T00:00:00+01:00").
    """
    try:
        parsed = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except OverflowError:
        return None


def is_iso_date_string(value: Any) -> bool:
    return isinstance(value, str) and parse_iso_date(value) is not None


_ISBN_SEPARATORS = re.compile(r"[\s-]+")
_ISBN10 = re.compile(r"[0-9]{9}[0-9X]", re.ASCII)
_ISBN13 = re.compile(r"[0-9]{13}", re.ASCII)


def _isbn10_checksum_ok(digits: str) -> bool:
    total = 0
    for position, char in enumerate(digits, start=1):
        total += position * (10 if char == "X" else int(char))
    return total % 11 == 0


def _isbn13_checksum_ok(digits: str) -> bool:
    total = sum(int(char) * (1 if index % 2 == 0 else 3) for index, char in enumerate(digits[:12]))
    return (10 - total % 10) % 10 == int(digits[12])


def is_isbn(value: Any) -> bool:
    """
    ISBN-10 or ISBN-13 with a valid check digit.

    Hyphens and whitespace are ignored, so "978-3-16-148410-0" and
    "9783161484100" are equivalent.
    """
    if not isinstance(value, str):
        return False
    digits = _ISBN_SEPARATORS.sub("", value)
    if _ISBN10.fullmatch(digits):
        return _isbn10_checksum_ok(digits)
    if _ISBN13.fullmatch(digits):
        return _isbn13_checksum_ok(digits)
    return False


# ══════════════════════════════════════════════════════════════════════════
# Schema Evaluation
# ══════════════════════════════════════════════════════════════════════════

class PayloadSchema:
    """
    An ordered constraint list for a JSON object body.

    Attributes:
        name:        Schema name used in log messages ("CreateBook", ...)
        constraints: Constraint entries, evaluated in order
        partial:     When True, absent/null fields skip their constraints
    """

    def __init__(self, name: str, constraints: Sequence[Constraint], partial: bool = False):
        self.name = name
        self.constraints: Tuple[Constraint, ...] = tuple(constraints)
        self.partial = partial

    @property
    def fields(self) -> Tuple[str, ...]:
        """Distinct field names in declaration order."""
        return tuple(dict.fromkeys(c.field for c in self.constraints))

    def is_supplied(self, payload: Mapping[str, Any], field: str) -> bool:
        return payload.get(field) is not None

    def validate(self, payload: Mapping[str, Any]) -> List[str]:
        """Return one message per failed constraint; empty when valid."""
        errors: List[str] = []
        for constraint in self.constraints:
            if self.partial and not self.is_supplied(payload, constraint.field):
                continue
            if not constraint.rule(payload.get(constraint.field)):
                errors.append(constraint.message)
        return errors

    def extract(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Known fields only. For partial schemas, only the supplied ones.

        Unknown keys (including a client-sent `id`) are dropped here.
        """
        if self.partial:
            return {f: payload[f] for f in self.fields if self.is_supplied(payload, f)}
        return {f: payload.get(f) for f in self.fields}

    def __repr__(self) -> str:
        return f"<PayloadSchema(name='{self.name}', fields={list(self.fields)}, partial={self.partial})>"
