"""
facade.py

Responsibility: Single entry point for building selectors.

Each method creates a fresh `SelectorBuilder` and delegates to it, so callers
never construct builders directly:

    css_selector_builder.id("main").class_("container").stringify()
    # => '#main.container'
"""

from __future__ import annotations

from cssbuilder.selector import SelectorBuilder, Stringifiable


class SelectorFacade:
    def element(self, value: str) -> SelectorBuilder:
        return SelectorBuilder().element(value)

    def id(self, value: str) -> SelectorBuilder:
        return SelectorBuilder().id(value)

    def class_(self, value: str) -> SelectorBuilder:
        return SelectorBuilder().class_(value)

    def attr(self, value: str) -> SelectorBuilder:
        return SelectorBuilder().attr(value)

    def pseudo_class(self, value: str) -> SelectorBuilder:
        return SelectorBuilder().pseudo_class(value)

    def pseudo_element(self, value: str) -> SelectorBuilder:
        return SelectorBuilder().pseudo_element(value)

    def combine(self, left: Stringifiable, combinator: str, right: Stringifiable) -> SelectorBuilder:
        return SelectorBuilder().combine(left, combinator, right)


setattr(SelectorFacade, "class", SelectorFacade.class_)

css_selector_builder = SelectorFacade()
