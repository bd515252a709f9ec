"""Tests for lark-based selector parsing."""

import pytest

from stylecheck.parser import SelectorSyntaxError, build_selector, parse_selector_structure


class TestSelectorStructure:
    def test_compound_parts(self):
        (compound,), combinators = parse_selector_structure(
            'a.Button.is-active#main[type="submit"]:hover::before'
        )
        assert combinators == ()
        assert compound.element == "a"
        assert compound.classes == ("Button", "is-active")
        assert compound.ids == ("main",)
        assert compound.pseudo_classes == ("hover",)
        assert compound.pseudo_elements == ("before",)
        (attribute,) = compound.attributes
        assert (attribute.name, attribute.operator, attribute.value, attribute.quote) == (
            "type",
            "=",
            "submit",
            '"',
        )

    @pytest.mark.parametrize(
        "text, expected",
        [
            (".A .B", (" ",)),
            (".A > .B", (">",)),
            (".A>.B", (">",)),
            (".A + .B ~ .C", ("+", "~")),
        ],
    )
    def test_combinators(self, text, expected):
        _, combinators = parse_selector_structure(text)
        assert combinators == expected

    def test_parent_reference_with_suffix(self):
        (compound,), _ = parse_selector_structure("&-cell")
        assert compound.is_parent_reference
        assert compound.parent_suffix == "-cell"

    def test_parent_reference_with_class(self):
        (compound,), _ = parse_selector_structure("&.is-open")
        assert compound.element == "&"
        assert compound.parent_suffix == ""
        assert compound.classes == ("is-open",)

    def test_placeholder_and_keyframe_percentage(self):
        (placeholder,), _ = parse_selector_structure("%Button-base")
        assert placeholder.element == "%Button-base"
        (step,), _ = parse_selector_structure("50%")
        assert step.element == "50%"

    def test_rejected_selector_raises(self):
        with pytest.raises(SelectorSyntaxError):
            parse_selector_structure(".A >> .B")


class TestBuildSelector:
    def test_whitespace_normalized(self):
        selector = build_selector(".A   >\n  .B", 3, 5)
        assert selector.text == ".A > .B"
        assert (selector.line, selector.column) == (3, 5)
        assert selector.class_names == ("A", "B")

    def test_fallback_still_finds_classes(self):
        selector = build_selector(".A >> .B-c", 1, 1)
        assert selector.class_names == ("A", "B-c")

    def test_interpolated_selector_falls_back(self):
        selector = build_selector(".Grid-#{$name}", 1, 1)
        assert selector.class_names == ("Grid-",)

    def test_starts_with_parent_reference(self):
        assert build_selector("&--wide", 1, 1).starts_with_parent_reference
        assert not build_selector(".A &", 1, 1).starts_with_parent_reference
