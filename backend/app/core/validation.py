"""Field validation shared by the forum models.

Rules are typed predicates paired with the message reported when they fail.
They run in declaration order and never raise: failures are collected per
field into a ``ValidationErrors`` instance that callers inspect or turn into
an HTTP 422 response.
"""
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class ValidationErrors:
    def __init__(self) -> None:
        self._errors: dict[str, list[str]] = {}

    def add(self, field: str, message: str) -> None:
        self._errors.setdefault(field, []).append(message)

    def has(self, field: str) -> bool:
        return field in self._errors

    def first(self, field: str) -> str | None:
        messages = self._errors.get(field)
        return messages[0] if messages else None

    def merge(self, other: "ValidationErrors") -> None:
        for field, messages in other._errors.items():
            for message in messages:
                self.add(field, message)

    def as_dict(self) -> dict[str, list[str]]:
        return {field: list(messages) for field, messages in self._errors.items()}

    def __bool__(self) -> bool:
        return bool(self._errors)

    def __repr__(self) -> str:
        return f"ValidationErrors({self._errors!r})"


@dataclass(frozen=True)
class Rule(Generic[T]):
    """A check on one field of ``T``.

    ``check`` returns True when the entity is valid for this rule. ``on``
    limits the rule to the listed scenarios; an empty tuple means always.
    """

    field: str
    check: Callable[[T], bool]
    message: str
    on: tuple[str, ...] = ()

    def applies(self, scenario: str | None) -> bool:
        return not self.on or scenario in self.on


def validate(
    entity: T,
    rules: Iterable[Rule[T]],
    scenario: str | None = None,
    errors: ValidationErrors | None = None,
) -> ValidationErrors:
    if errors is None:
        errors = ValidationErrors()
    for rule in rules:
        if not rule.applies(scenario):
            continue
        # only the first failure of a field is reported
        if errors.has(rule.field):
            continue
        if not rule.check(entity):
            errors.add(rule.field, rule.message)
    return errors


def required(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True
