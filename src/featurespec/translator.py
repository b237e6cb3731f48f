"""Step text -> browser test statement translation.

Steps are matched against STEP_RULES top to bottom and the first rule that
matches wins. Rules that need a quoted literal only match when the step
contains one. Anything left over becomes a placeholder comment, so
``translate`` is defined for every input string.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from featurespec.models import IntentKind, StepIntent

QUOTED_LITERAL = re.compile(r'"([^"]+)"')


def escape_string(text: str) -> str:
    """Escape text for use inside a single-quoted string literal.

    Backslashes go first so later substitutions are not escaped twice.
    """
    return (
        text.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )


def quote_title(text: str) -> str:
    """Escape a feature or scenario name for a double-quoted position."""
    return text.replace('"', '\\"')


def extract_literal(step: str) -> str | None:
    """Return the first double-quoted literal in a step, if any."""
    match = QUOTED_LITERAL.search(step)
    return match.group(1) if match else None


@dataclass(frozen=True)
class StepRule:
    """One entry of the ordered step table."""

    kind: IntentKind
    triggers: tuple[str, ...]
    needs_literal: bool = True

    def match(self, step: str) -> StepIntent | None:
        lowered = step.lower()
        if not any(trigger in lowered for trigger in self.triggers):
            return None
        if not self.needs_literal:
            return StepIntent(self.kind)
        literal = extract_literal(step)
        if literal is None:
            return None
        return StepIntent(self.kind, literal)


# Order matters: first match wins.
STEP_RULES: tuple[StepRule, ...] = (
    StepRule(IntentKind.NAVIGATE, ("navigate to", "go to")),
    StepRule(IntentKind.ASSERT_TITLE, ("page title should be",)),
    StepRule(IntentKind.ASSERT_VISIBLE_TEXT, ("should see text", "should see the main heading")),
    StepRule(IntentKind.ASSERT_LINK, ("should see a link",)),
    StepRule(IntentKind.CLICK, ("click on",)),
    StepRule(IntentKind.ASSERT_URL_CONTAINS, ("url should contain",)),
    StepRule(
        IntentKind.WAIT_FOR_LOAD,
        ("page is loaded", "page should be fully loaded"),
        needs_literal=False,
    ),
    StepRule(
        IntentKind.BROWSER_WINDOW,
        ("open a new browser window", "browser window"),
        needs_literal=False,
    ),
)


def classify_step(step: str) -> StepIntent:
    """Map step text to the intent of the first matching rule."""
    for rule in STEP_RULES:
        intent = rule.match(step)
        if intent is not None:
            return intent
    return StepIntent(IntentKind.PASSTHROUGH, step)


@dataclass(frozen=True)
class Dialect:
    """Statement templates for one target test framework."""

    name: str
    templates: dict[IntentKind, str]

    def is_comment(self, statement: str) -> bool:
        prefix = self.templates[IntentKind.PASSTHROUGH].split(" ", 1)[0]
        return statement.startswith(prefix)

    def render(self, intent: StepIntent) -> str:
        template = self.templates[intent.kind]
        if intent.kind == IntentKind.PASSTHROUGH:
            return template.format(value=intent.value)
        if intent.value is None:
            return template
        return template.format(value=escape_string(intent.value))


PYTEST = Dialect(
    name="pytest",
    templates={
        IntentKind.NAVIGATE: "page.goto('{value}')",
        IntentKind.ASSERT_TITLE: "expect(page).to_have_title('{value}')",
        IntentKind.ASSERT_VISIBLE_TEXT: "expect(page.get_by_text('{value}')).to_be_visible()",
        IntentKind.ASSERT_LINK: "expect(page.locator('a', has_text='{value}')).to_be_visible()",
        IntentKind.CLICK: "page.click('text={value}')",
        IntentKind.ASSERT_URL_CONTAINS: "assert '{value}' in page.url",
        IntentKind.WAIT_FOR_LOAD: "page.wait_for_load_state('networkidle')",
        IntentKind.BROWSER_WINDOW: "# Browser window opened automatically by Playwright",
        IntentKind.PASSTHROUGH: "# TODO: Implement step - {value}",
    },
)

PLAYWRIGHT_TS = Dialect(
    name="playwright-ts",
    templates={
        IntentKind.NAVIGATE: "await page.goto('{value}');",
        IntentKind.ASSERT_TITLE: "await expect(page).toHaveTitle('{value}');",
        IntentKind.ASSERT_VISIBLE_TEXT: "await expect(page.getByText('{value}')).toBeVisible();",
        IntentKind.ASSERT_LINK: (
            "await expect(page.locator('a', {{ hasText: '{value}' }})).toBeVisible();"
        ),
        IntentKind.CLICK: "await page.click('text={value}');",
        IntentKind.ASSERT_URL_CONTAINS: "expect(page.url()).toContain('{value}');",
        IntentKind.WAIT_FOR_LOAD: "await page.waitForLoadState('networkidle');",
        IntentKind.BROWSER_WINDOW: "// Browser window opened automatically by Playwright",
        IntentKind.PASSTHROUGH: "// TODO: Implement step - {value}",
    },
)

DIALECTS: dict[str, Dialect] = {d.name: d for d in (PYTEST, PLAYWRIGHT_TS)}


def get_dialect(name: str) -> Dialect:
    try:
        return DIALECTS[name]
    except KeyError:
        known = ", ".join(sorted(DIALECTS))
        raise ValueError(f"Unknown dialect '{name}' (expected one of: {known})") from None


def translate(step: str, dialect: str = "pytest") -> str:
    """Translate one step line into a single statement."""
    return get_dialect(dialect).render(classify_step(step))
