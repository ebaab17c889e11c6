"""
selector.py

Responsibility: Build CSS selector strings from typed fragments.

A compound selector is assembled in a fixed order:

    element#id.class[attr]:pseudo-class::pseudo-element

Rules enforced on every append:
- Fragments must not go "backwards" in that order (`OrderViolation`).
- element, id and pseudo-element may occur at most once (`DuplicateSelector`).

Checks run before the fragment is appended, so a failed call leaves the
builder unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class SelectorError(ValueError):
    pass


class OrderViolation(SelectorError):
    pass


class DuplicateSelector(SelectorError):
    pass


ORDER_MESSAGE = (
    "Selector parts should be arranged in the following order: "
    "element, id, class, attribute, pseudo-class, pseudo-element"
)
DUPLICATE_MESSAGE = "Element, id and pseudo-element should not occur more then one time inside the selector"


class FragmentKind(Enum):
    ELEMENT = "element"
    ID = "id"
    CLASS = "class"
    ATTR = "attr"
    PSEUDO_CLASS = "pseudo_class"
    PSEUDO_ELEMENT = "pseudo_element"
    COMBINED = "combined"

    @property
    def rank(self) -> int | None:
        return _RANKS.get(self)

    @property
    def unique(self) -> bool:
        return self in _UNIQUE


_RANKS = {
    FragmentKind.ELEMENT: 0,
    FragmentKind.ID: 1,
    FragmentKind.CLASS: 2,
    FragmentKind.ATTR: 3,
    FragmentKind.PSEUDO_CLASS: 4,
    FragmentKind.PSEUDO_ELEMENT: 5,
}

_UNIQUE = frozenset({FragmentKind.ELEMENT, FragmentKind.ID, FragmentKind.PSEUDO_ELEMENT})


class Stringifiable(Protocol):
    def stringify(self) -> str: ...


@dataclass(frozen=True)
class Fragment:
    """One rendered piece of a selector."""

    kind: FragmentKind
    text: str


class SelectorBuilder:
    """
    Fluent, mutating selector builder.

    Every fragment method returns the same instance so calls can be chained.
    Obtain instances through `cssbuilder.facade.css_selector_builder`.
    """

    def __init__(self) -> None:
        self._fragments: list[Fragment] = []

    @property
    def fragments(self) -> tuple[Fragment, ...]:
        return tuple(self._fragments)

    def _check_order(self, kind: FragmentKind) -> None:
        if not self._fragments:
            return
        prev_rank = self._fragments[-1].kind.rank
        # A combined fragment has no rank to compare against.
        if prev_rank is not None and prev_rank > kind.rank:
            raise OrderViolation(ORDER_MESSAGE)

    def _check_count(self, kind: FragmentKind) -> None:
        if any(f.kind is kind for f in self._fragments):
            raise DuplicateSelector(DUPLICATE_MESSAGE)

    def _append(self, kind: FragmentKind, text: str) -> SelectorBuilder:
        self._check_order(kind)
        if kind.unique:
            self._check_count(kind)
        self._fragments.append(Fragment(kind=kind, text=text))
        return self

    def element(self, value: str) -> SelectorBuilder:
        return self._append(FragmentKind.ELEMENT, str(value))

    def id(self, value: str) -> SelectorBuilder:
        return self._append(FragmentKind.ID, f"#{value}")

    def class_(self, value: str) -> SelectorBuilder:
        return self._append(FragmentKind.CLASS, f".{value}")

    def attr(self, value: str) -> SelectorBuilder:
        return self._append(FragmentKind.ATTR, f"[{value}]")

    def pseudo_class(self, value: str) -> SelectorBuilder:
        return self._append(FragmentKind.PSEUDO_CLASS, f":{value}")

    def pseudo_element(self, value: str) -> SelectorBuilder:
        return self._append(FragmentKind.PSEUDO_ELEMENT, f"::{value}")

    def combine(self, left: Stringifiable, combinator: str, right: Stringifiable) -> SelectorBuilder:
        """
        Join two selectors with a combinator (' ', '+', '~', '>').

        Both sides are rendered immediately; the combinator is not validated.
        """
        text = f"{left.stringify()} {combinator} {right.stringify()}"
        self._fragments.append(Fragment(kind=FragmentKind.COMBINED, text=text))
        return self

    def stringify(self) -> str:
        return "".join(f.text for f in self._fragments)

    def __str__(self) -> str:
        return self.stringify()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.stringify()!r})"


# Reachable as `getattr(builder, "class")` for data-driven callers.
setattr(SelectorBuilder, "class", SelectorBuilder.class_)
