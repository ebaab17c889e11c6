import pytest

from cssbuilder.facade import css_selector_builder as builder
from cssbuilder.selector import (
    DUPLICATE_MESSAGE,
    ORDER_MESSAGE,
    DuplicateSelector,
    FragmentKind,
    OrderViolation,
    SelectorBuilder,
    SelectorError,
)


def test_element_attr_pseudo_class() -> None:
    sel = builder.element("a").attr('href$=".png"').pseudo_class("focus")
    assert sel.stringify() == 'a[href$=".png"]:focus'


def test_id_with_repeated_classes() -> None:
    assert builder.id("main").class_("container").class_("editable").stringify() == "#main.container.editable"


def test_all_parts_in_order() -> None:
    sel = (
        builder.element("input")
        .id("email")
        .class_("field")
        .attr("type=email")
        .pseudo_class("focus")
        .pseudo_class("invalid")
        .pseudo_element("placeholder")
    )
    assert sel.stringify() == "input#email.field[type=email]:focus:invalid::placeholder"


def test_each_facade_entry_point_renders_its_form() -> None:
    assert builder.element("div").stringify() == "div"
    assert builder.id("nav").stringify() == "#nav"
    assert builder.class_("btn").stringify() == ".btn"
    assert builder.attr("disabled").stringify() == "[disabled]"
    assert builder.pseudo_class("hover").stringify() == ":hover"
    assert builder.pseudo_element("before").stringify() == "::before"


def test_class_is_reachable_by_its_css_name() -> None:
    sel = getattr(builder, "class")("a")
    assert getattr(sel, "class")("b").stringify() == ".a.b"


def test_facade_returns_fresh_builders() -> None:
    first = builder.element("p")
    second = builder.element("p")
    assert first is not second
    assert isinstance(first, SelectorBuilder)
    first.class_("lead")
    assert second.stringify() == "p"


def test_chained_calls_return_same_instance() -> None:
    sel = builder.element("ul")
    assert sel.class_("menu") is sel


@pytest.mark.parametrize(
    "build",
    [
        lambda: builder.element("div").element("span"),
        lambda: builder.id("a").id("b"),
        lambda: builder.pseudo_element("after").pseudo_element("before"),
        lambda: builder.element("div").combine(builder.id("x"), ">", builder.class_("c")).element("span"),
        lambda: builder.id("a").class_("b").combine(builder.attr("c"), "~", builder.element("p")).id("d"),
    ],
)
def test_unique_parts_cannot_repeat(build) -> None:
    with pytest.raises(DuplicateSelector):
        build()


def test_duplicate_message() -> None:
    with pytest.raises(DuplicateSelector) as exc:
        builder.id("a").id("b")
    assert str(exc.value) == DUPLICATE_MESSAGE


def test_duplicate_pseudo_element_after_nothing_else() -> None:
    with pytest.raises(DuplicateSelector):
        builder.pseudo_element("after").pseudo_element("after")


@pytest.mark.parametrize(
    "build",
    [
        lambda: builder.class_("c").element("div"),
        lambda: builder.id("a").element("div"),
        lambda: builder.attr("href").class_("link"),
        lambda: builder.pseudo_class("hover").attr("href"),
        lambda: builder.pseudo_element("after").pseudo_class("hover"),
        lambda: builder.class_("c").id("main"),
        lambda: builder.element("div").id("x").class_("c").element("span"),
        lambda: builder.id("a").class_("b").attr("c").id("d"),
    ],
)
def test_out_of_order_parts_fail(build) -> None:
    with pytest.raises(OrderViolation) as exc:
        build()
    assert str(exc.value) == ORDER_MESSAGE


def test_order_is_checked_before_count() -> None:
    # Both rules are broken here; the order check runs first.
    with pytest.raises(OrderViolation):
        builder.element("div").id("a").element("span")


def test_failed_append_leaves_builder_unchanged() -> None:
    sel = builder.element("div").class_("box")
    with pytest.raises(OrderViolation):
        sel.id("main")
    assert sel.stringify() == "div.box"
    assert [f.kind for f in sel.fragments] == [FragmentKind.ELEMENT, FragmentKind.CLASS]


def test_errors_are_value_errors() -> None:
    assert issubclass(OrderViolation, SelectorError)
    assert issubclass(DuplicateSelector, SelectorError)
    with pytest.raises(ValueError):
        builder.id("a").id("b")


def test_combine() -> None:
    sel = builder.combine(builder.element("div").id("main"), "+", builder.element("table").id("data"))
    assert sel.stringify() == "div#main + table#data"


def test_nested_combine() -> None:
    sel = builder.combine(
        builder.element("div").id("main").class_("container").class_("draggable"),
        "+",
        builder.combine(
            builder.element("table").id("data"),
            "~",
            builder.combine(
                builder.element("tr").pseudo_class("nth-of-type(even)"),
                " ",
                builder.element("td").pseudo_class("nth-of-type(even)"),
            ),
        ),
    )
    assert sel.stringify() == (
        "div#main.container.draggable + table#data ~ tr:nth-of-type(even)   td:nth-of-type(even)"
    )


def test_combine_result_can_be_combined_again() -> None:
    inner = builder.combine(builder.element("ul"), ">", builder.element("li"))
    outer = builder.combine(builder.element("nav"), " ", inner)
    assert outer.stringify() == "nav   ul > li"


def test_combinator_is_not_validated() -> None:
    sel = builder.combine(builder.element("a"), "||", builder.element("b"))
    assert sel.stringify() == "a || b"


def test_combine_accepts_any_stringifiable() -> None:
    class Raw:
        def stringify(self) -> str:
            return "*"

    assert builder.combine(Raw(), ">", builder.class_("x")).stringify() == "* > .x"


def test_parts_after_combine_skip_order_check() -> None:
    sel = builder.combine(builder.element("a"), ">", builder.pseudo_element("after"))
    assert sel.element("b").stringify() == "a > ::afterb"


def test_unique_parts_are_counted_across_a_combine() -> None:
    sel = builder.element("a").combine(builder.class_("x"), "+", builder.class_("y"))
    with pytest.raises(DuplicateSelector):
        sel.element("b")
    assert sel.stringify() == "a.x + .y"


def test_stringify_is_idempotent() -> None:
    sel = builder.element("a").class_("x")
    assert sel.stringify() == sel.stringify() == "a.x"
    assert str(sel) == "a.x"


def test_empty_builder_renders_empty_string() -> None:
    assert SelectorBuilder().stringify() == ""


def test_kind_ranks() -> None:
    ordered = [
        FragmentKind.ELEMENT,
        FragmentKind.ID,
        FragmentKind.CLASS,
        FragmentKind.ATTR,
        FragmentKind.PSEUDO_CLASS,
        FragmentKind.PSEUDO_ELEMENT,
    ]
    assert [k.rank for k in ordered] == list(range(6))
    assert FragmentKind.COMBINED.rank is None
    assert {k for k in FragmentKind if k.unique} == {
        FragmentKind.ELEMENT,
        FragmentKind.ID,
        FragmentKind.PSEUDO_ELEMENT,
    }
