"""Unit tests for featurespec.translator."""

import ast

import pytest

from featurespec.models import IntentKind, StepIntent
from featurespec.translator import (
    PLAYWRIGHT_TS,
    PYTEST,
    STEP_RULES,
    StepRule,
    classify_step,
    escape_string,
    extract_literal,
    get_dialect,
    quote_title,
    translate,
)


class TestEscapeString:
    def test_plain_text_unchanged(self) -> None:
        assert escape_string("Example Domain") == "Example Domain"

    def test_backslash_first(self) -> None:
        assert escape_string("a\\'b") == "a\\\\\\'b"

    def test_each_character(self) -> None:
        assert escape_string("'") == "\\'"
        assert escape_string('"') == '\\"'
        assert escape_string("\n") == "\\n"
        assert escape_string("\r") == "\\r"
        assert escape_string("\t") == "\\t"

    @pytest.mark.parametrize(
        "text",
        [
            "It's",
            'say "hi"',
            "C:\\temp\\new",
            "line1\nline2\r\n\tindented",
            "\\n is not a newline",
            "mixed \\ ' \" \n \r \t end\\",
        ],
    )
    def test_parses_back_as_python_literal(self, text: str) -> None:
        assert ast.literal_eval("'" + escape_string(text) + "'") == text


class TestQuoteTitle:
    def test_only_double_quotes(self) -> None:
        assert quote_title('The "best" it\'s') == 'The \\"best\\" it\'s'

    def test_backslash_untouched(self) -> None:
        assert quote_title("a\\b") == "a\\b"


class TestExtractLiteral:
    def test_first_literal(self) -> None:
        assert extract_literal('click on "A" then "B"') == "A"

    def test_none(self) -> None:
        assert extract_literal("no quotes here") is None

    def test_empty_quotes_do_not_count(self) -> None:
        assert extract_literal('see text ""') is None

    def test_single_quotes_do_not_count(self) -> None:
        assert extract_literal("see text 'x'") is None


class TestStepRule:
    def test_needs_literal(self) -> None:
        rule = StepRule(IntentKind.CLICK, ("click on",))
        assert rule.match('When I click on "Go"') == StepIntent(IntentKind.CLICK, "Go")
        assert rule.match("When I click on the button") is None

    def test_no_literal(self) -> None:
        rule = StepRule(IntentKind.WAIT_FOR_LOAD, ("page is loaded",), needs_literal=False)
        assert rule.match("When the PAGE IS LOADED") == StepIntent(IntentKind.WAIT_FOR_LOAD)

    def test_rule_order(self) -> None:
        assert [r.kind for r in STEP_RULES] == [
            IntentKind.NAVIGATE,
            IntentKind.ASSERT_TITLE,
            IntentKind.ASSERT_VISIBLE_TEXT,
            IntentKind.ASSERT_LINK,
            IntentKind.CLICK,
            IntentKind.ASSERT_URL_CONTAINS,
            IntentKind.WAIT_FOR_LOAD,
            IntentKind.BROWSER_WINDOW,
        ]


class TestClassifyStep:
    @pytest.mark.parametrize(
        "step, kind, value",
        [
            ('Given I navigate to "https://example.com"', IntentKind.NAVIGATE, "https://example.com"),
            ('Given I go to "https://example.com/docs"', IntentKind.NAVIGATE, "https://example.com/docs"),
            ('Then the page title should be "Example Domain"', IntentKind.ASSERT_TITLE, "Example Domain"),
            ('Then I should see text "Welcome"', IntentKind.ASSERT_VISIBLE_TEXT, "Welcome"),
            ('Then I should see the main heading "Docs"', IntentKind.ASSERT_VISIBLE_TEXT, "Docs"),
            ('And I should see a link "Get started"', IntentKind.ASSERT_LINK, "Get started"),
            ('When I click on "Get started"', IntentKind.CLICK, "Get started"),
            ('Then the URL should contain "intro"', IntentKind.ASSERT_URL_CONTAINS, "intro"),
            ("When the page is loaded", IntentKind.WAIT_FOR_LOAD, None),
            ("Then the page should be fully loaded", IntentKind.WAIT_FOR_LOAD, None),
            ("Given I open a new browser window", IntentKind.BROWSER_WINDOW, None),
            ("Given the browser window is maximised", IntentKind.BROWSER_WINDOW, None),
        ],
    )
    def test_recognized(self, step: str, kind: IntentKind, value: str | None) -> None:
        assert classify_step(step) == StepIntent(kind, value)

    def test_case_insensitive(self) -> None:
        assert classify_step('Then THE PAGE TITLE SHOULD BE "X"').kind == IntentKind.ASSERT_TITLE

    def test_first_match_wins(self) -> None:
        intent = classify_step('When I navigate to "https://a.com" and click on "More"')
        assert intent == StepIntent(IntentKind.NAVIGATE, "https://a.com")

    def test_missing_literal_falls_through(self) -> None:
        intent = classify_step("When I navigate to home and the page is loaded")
        assert intent.kind == IntentKind.WAIT_FOR_LOAD

    def test_unmatched_is_passthrough(self) -> None:
        step = "Given a user with the following roles:"
        assert classify_step(step) == StepIntent(IntentKind.PASSTHROUGH, step)

    def test_literal_rule_without_literal_is_passthrough(self) -> None:
        assert classify_step("When I click on the button").kind == IntentKind.PASSTHROUGH


class TestTranslate:
    def test_navigate(self) -> None:
        assert translate('Given I navigate to "https://example.com"') == "page.goto('https://example.com')"

    def test_title(self) -> None:
        assert (
            translate('Then the page title should be "Example Domain"')
            == "expect(page).to_have_title('Example Domain')"
        )

    def test_visible_text_escaped(self) -> None:
        assert (
            translate('Then I should see text "It\'s here"')
            == "expect(page.get_by_text('It\\'s here')).to_be_visible()"
        )

    def test_link(self) -> None:
        assert (
            translate('And I should see a link "Docs"')
            == "expect(page.locator('a', has_text='Docs')).to_be_visible()"
        )

    def test_click(self) -> None:
        assert translate('When I click on "Get started"') == "page.click('text=Get started')"

    def test_url_contains(self) -> None:
        assert translate('Then the url should contain "/docs"') == "assert '/docs' in page.url"

    def test_wait(self) -> None:
        assert translate("When the page is loaded") == "page.wait_for_load_state('networkidle')"

    def test_browser_window(self) -> None:
        assert translate("Given I open a new browser window").startswith("# Browser window")

    def test_passthrough(self) -> None:
        assert translate("Given something odd") == "# TODO: Implement step - Given something odd"

    @pytest.mark.parametrize("step", ["", " ", "\"", "{value}", "\\", "click on \"\"", "日本語"])
    def test_total(self, step: str) -> None:
        statement = translate(step)
        assert isinstance(statement, str)
        assert statement

    def test_braces_in_literal(self) -> None:
        assert translate('Then I should see text "{x}"') == "expect(page.get_by_text('{x}')).to_be_visible()"

    def test_playwright_ts(self) -> None:
        assert translate('When I click on "Go"', "playwright-ts") == "await page.click('text=Go');"
        assert (
            translate('And I should see a link "Docs"', "playwright-ts")
            == "await expect(page.locator('a', { hasText: 'Docs' })).toBeVisible();"
        )
        assert translate("Given x", "playwright-ts") == "// TODO: Implement step - Given x"

    def test_unknown_dialect(self) -> None:
        with pytest.raises(ValueError, match="Unknown dialect"):
            translate("Given x", "cobol")


class TestDialect:
    def test_get_dialect(self) -> None:
        assert get_dialect("pytest") is PYTEST
        assert get_dialect("playwright-ts") is PLAYWRIGHT_TS

    def test_every_kind_has_a_template(self) -> None:
        for dialect in (PYTEST, PLAYWRIGHT_TS):
            assert set(dialect.templates) == set(IntentKind)

    def test_is_comment(self) -> None:
        assert PYTEST.is_comment("# TODO: Implement step - x")
        assert not PYTEST.is_comment("page.goto('x')")
        assert PLAYWRIGHT_TS.is_comment("// Browser window opened automatically by Playwright")
