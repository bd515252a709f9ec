"""End-to-end tests for check() and check_many()."""

import logging

import pytest

import stylecheck.engine.engine as engine_module
from stylecheck import CheckOptions, RuleId, Severity, check, check_many

CLEAN = ".Modal { display: block; }\n\n.FooComponent { color: #000; }\n"

FOUR_LEVELS = (
    ".A {\n"
    "  .A-b {\n"
    "    .A-c {\n"
    "      .A-d {\n"
    "        color: #000;\n"
    "      }\n"
    "    }\n"
    "  }\n"
    "}\n"
)


def _rules(diagnostics) -> list[RuleId]:
    return [d.rule for d in diagnostics]


# ---------------------------------------------------------------------------
# check()
# ---------------------------------------------------------------------------


class TestCheck:
    def test_conforming_file_has_no_diagnostics(self):
        assert check("clean.scss", CLEAN) == []

    def test_compact_ruleset(self):
        rules = _rules(check("a.scss", ".Modal{display:block;position:relative;}\n"))
        assert RuleId.BRACE_SPACING in rules
        assert RuleId.COLON_SPACING in rules
        assert RuleId.DECLARATION_GROUP_OUT_OF_ORDER not in rules

    def test_group_out_of_order(self):
        diagnostics = check("a.scss", ".Modal { color: #000; display: block; }\n")
        (diag,) = [d for d in diagnostics if d.rule is RuleId.DECLARATION_GROUP_OUT_OF_ORDER]
        assert "color" in diag.message and "Typographical" in diag.message
        assert "display" in diag.message and "Layout" in diag.message

    def test_four_levels_of_nesting(self):
        diagnostics = check("a.scss", FOUR_LEVELS)
        nesting = [d for d in diagnostics if d.rule is RuleId.EXCESSIVE_NESTING]
        assert len(nesting) == 1
        assert nesting[0].line == 4
        assert "depth 4" in nesting[0].message and "maximum 3" in nesting[0].message

    def test_hundreds_of_nesting_levels_are_reported_not_raised(self):
        source = ".A {\n" * 400 + "}\n" * 400
        diagnostics = check("deep.scss", source)
        nesting = [d for d in diagnostics if d.rule is RuleId.EXCESSIVE_NESTING]
        assert len(nesting) == 397
        assert nesting[0].line == 4

        report = check_many([("deep.scss", source, None)])
        assert report.failed == {}
        assert RuleId.EXCESSIVE_NESTING in _rules(report.diagnostics)

    def test_unknown_class(self):
        diagnostics = check("a.scss", ".btn_primary { color: #000; }\n")
        assert _rules(diagnostics) == [RuleId.UNKNOWN_NAMING_PATTERN]

    def test_malformed_input_recovers(self):
        diagnostics = check("a.scss", ".Foo { color: #000")
        assert RuleId.UNBALANCED_BRACES in _rules(diagnostics)

    @pytest.mark.parametrize("source", ["", "\x00\xff\x10}{", "'", "/*", "{{{{", "}}}}"])
    def test_never_raises(self, source):
        assert isinstance(check("odd.css", source), list)

    def test_results_sorted_and_tagged_with_file(self):
        source = ".A{top:0}\n.b_c { top: 0px; }"
        diagnostics = check("x.scss", source)
        assert diagnostics == sorted(diagnostics, key=lambda d: d.sort_key)
        assert {d.file_id for d in diagnostics} == {"x.scss"}

    def test_one_violation_does_not_hide_another(self):
        rules = _rules(check("a.scss", ".A { color: #FFF; top: 0px; }\n"))
        assert RuleId.HEX_CASE_OR_LENGTH in rules
        assert RuleId.UNIT_ON_ZERO_VALUE in rules
        assert RuleId.DECLARATION_GROUP_OUT_OF_ORDER in rules


class TestCheckOptionsApplied:
    def test_disabled_rules_are_not_reported(self):
        options = CheckOptions.from_mapping(
            {"disabledRules": ["BraceSpacing", "UnbalancedBraces"]}
        )
        rules = _rules(check("a.scss", ".Foo{ color: #000", options))
        assert RuleId.BRACE_SPACING not in rules
        assert RuleId.UNBALANCED_BRACES not in rules
        assert RuleId.FILE_END_WHITESPACE in rules

    def test_only_enabled_rules(self):
        options = CheckOptions(enabled_rules={RuleId.COLON_SPACING})
        diagnostics = check("a.scss", ".Modal{display:block;}", options)
        assert set(_rules(diagnostics)) == {RuleId.COLON_SPACING}

    def test_severity_override(self):
        options = CheckOptions(severity_overrides={RuleId.QUOTE_STYLE: Severity.WARNING})
        (diag,) = check("a.scss", ".A { content: 'x'; }\n", options)
        assert diag.rule is RuleId.QUOTE_STYLE
        assert diag.severity is Severity.WARNING

    def test_default_severity_is_error(self):
        (diag,) = check("a.scss", ".A { content: 'x'; }\n")
        assert diag.severity is Severity.ERROR

    def test_vendor_exempt(self):
        options = CheckOptions(vendor_exempt=True)
        assert check("vendor.css", ".btn_primary { color: #000; }\n", options) == []


# ---------------------------------------------------------------------------
# check_many()
# ---------------------------------------------------------------------------


class TestCheckMany:
    def test_merges_files(self):
        report = check_many(
            [
                ("b.scss", ".btn_x { top: 0; }\n", None),
                ("a.scss", CLEAN, None),
                ("c.scss", ".A{ top: 0; }\n", CheckOptions()),
            ],
            max_workers=2,
        )
        assert sorted(report.files) == ["a.scss", "b.scss", "c.scss"]
        assert [d.file_id for d in report.diagnostics] == ["b.scss", "c.scss"]
        assert not report.passed
        assert report.exit_code == 1
        assert report.by_file()["a.scss"] == []

    def test_empty_batch(self):
        report = check_many([])
        assert report.files == []
        assert report.passed

    def test_per_file_options(self):
        report = check_many(
            [
                ("vendor.css", ".btn_x { top: 0; }\n", CheckOptions(vendor_exempt=True)),
                ("own.css", ".btn_x { top: 0; }\n", None),
            ]
        )
        assert [d.file_id for d in report.diagnostics] == ["own.css"]

    def test_worker_failure_is_isolated(self, monkeypatch, caplog):
        real_tokenize = engine_module.tokenize

        def flaky_tokenize(text):
            if "EXPLODE" in text:
                raise RuntimeError("lexer exploded")
            return real_tokenize(text)

        monkeypatch.setattr(engine_module, "tokenize", flaky_tokenize)
        with caplog.at_level(logging.ERROR, logger="stylecheck.engine.engine"):
            report = check_many(
                [("bad.scss", "EXPLODE", None), ("good.scss", CLEAN, None)]
            )
        assert report.files == ["good.scss"]
        assert report.failed == {"bad.scss": "lexer exploded"}
        assert not report.passed
        assert "Checking bad.scss failed" in caplog.text
