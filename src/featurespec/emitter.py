"""Test module generation from parsed features."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from pathlib import PurePath

from featurespec.models import FeatureRecord, ScenarioRecord
from featurespec.translator import (
    PLAYWRIGHT_TS,
    PYTEST,
    Dialect,
    classify_step,
    get_dialect,
    quote_title,
)

FEATURE_SUFFIX = ".feature"
SETUP_TRIGGERS = ("navigate to", "browser window")
GENERATED_MARKER = "DO NOT EDIT - this file is regenerated from feature files."


def needs_setup(feature: FeatureRecord) -> bool:
    """True when any step in the feature navigates or opens a browser window."""
    return any(
        trigger in step.lower()
        for scenario in feature.scenarios
        for step in scenario.steps
        for trigger in SETUP_TRIGGERS
    )


def feature_stem(source_name: str) -> str:
    """File name of a feature without its extension."""
    name = PurePath(source_name).name
    if name.endswith(FEATURE_SUFFIX):
        return name[: -len(FEATURE_SUFFIX)]
    return PurePath(name).stem


def docstring_text(text: str) -> str:
    """Escape text for a triple-double-quoted Python docstring."""
    return text.replace("\\", "\\\\").replace('"', '\\"')


class SpecEmitter(ABC):
    """Base class for per-dialect test module emitters."""

    dialect: Dialect
    output_suffix = ""

    def output_name(self, source_name: str) -> str:
        return feature_stem(source_name) + self.output_suffix

    def matches_name(self, file_name: str) -> bool:
        """True when file_name follows this dialect's output naming."""
        return file_name.endswith(self.output_suffix)

    def is_generated(self, file_name: str, content: str) -> bool:
        """True when a file in the output directory was written by this emitter."""
        return self.matches_name(file_name)

    def statements(self, scenario: ScenarioRecord) -> list[str]:
        return [self.dialect.render(classify_step(step)) for step in scenario.steps]

    @abstractmethod
    def emit(self, feature: FeatureRecord, source_name: str) -> str:
        """Render a complete test module for one feature."""


class PlaywrightTSEmitter(SpecEmitter):
    """Generates Playwright Test (TypeScript) spec files."""

    dialect = PLAYWRIGHT_TS
    output_suffix = ".spec.ts"

    def emit(self, feature: FeatureRecord, source_name: str) -> str:
        lines = [
            "import { test, expect } from '@playwright/test';",
            "",
            f'test.describe("{quote_title(feature.title)}", () => {{',
        ]

        if needs_setup(feature):
            lines.append("  test.beforeEach(async ({ page }) => {")
            lines.append("    // Setup before each test")
            lines.append("  });")
            lines.append("")

        for scenario in feature.scenarios:
            lines.append(f'  test("{quote_title(scenario.name)}", async ({{ page }}) => {{')
            for statement in self.statements(scenario):
                lines.append(f"    {statement}")
            lines.append("  });")
            lines.append("")

        lines.append("});")
        return "\n".join(lines) + "\n"


class PytestEmitter(SpecEmitter):
    """Generates pytest-playwright test modules."""

    dialect = PYTEST
    output_suffix = ".py"
    output_prefix = "test_"

    def output_name(self, source_name: str) -> str:
        stem = re.sub(r"[^A-Za-z0-9_]", "_", feature_stem(source_name))
        return f"{self.output_prefix}{stem}{self.output_suffix}"

    def matches_name(self, file_name: str) -> bool:
        return file_name.startswith(self.output_prefix) and file_name.endswith(self.output_suffix)

    def is_generated(self, file_name: str, content: str) -> bool:
        # Hand-written test_*.py modules may share the output directory
        return self.matches_name(file_name) and GENERATED_MARKER in content

    def emit(self, feature: FeatureRecord, source_name: str) -> str:
        lines = [
            f'"""Generated browser tests from {docstring_text(PurePath(source_name).name)}.',
            "",
            GENERATED_MARKER,
            '"""',
            "",
            "import pytest",
            "from playwright.sync_api import Page, expect",
            "",
            "",
            f"class {self._make_class_name(feature.title, source_name)}:",
            f'    """Feature: {docstring_text(feature.title)}"""',
        ]

        if needs_setup(feature):
            lines.append("")
            lines.append("    @pytest.fixture(autouse=True)")
            lines.append("    def before_each(self, page: Page) -> None:")
            lines.append("        # Setup before each test")
            lines.append("        pass")

        seen: set[str] = set()
        for i, scenario in enumerate(feature.scenarios):
            base = func_name = self._make_test_name(scenario.name, i)
            n = 1
            # Duplicate scenario names would shadow each other in the class
            while func_name in seen:
                n += 1
                func_name = f"{base}_{n}"
            seen.add(func_name)

            lines.append("")
            lines.append(f"    def {func_name}(self, page: Page) -> None:")
            lines.append(f'        """Scenario: {docstring_text(scenario.name)}"""')
            statements = self.statements(scenario)
            for statement in statements:
                lines.append(f"        {statement}")
            if all(self.dialect.is_comment(s) for s in statements):
                lines.append("        pass")

        return "\n".join(lines) + "\n"

    def _make_class_name(self, title: str, source_name: str) -> str:
        words = re.findall(r"[A-Za-z0-9]+", title) or re.findall(
            r"[A-Za-z0-9]+", feature_stem(source_name)
        )
        return "Test" + "".join(w[0].upper() + w[1:] for w in words)

    def _make_test_name(self, name: str, index: int) -> str:
        """Convert a scenario name to a valid test method name."""
        slug = re.sub(r"[^a-zA-Z0-9\s]", "", name.lower())
        slug = re.sub(r"\s+", "_", slug.strip())
        if not slug:
            return f"test_scenario_{index}"
        return f"test_{slug}"


EMITTERS: dict[str, type[SpecEmitter]] = {
    PYTEST.name: PytestEmitter,
    PLAYWRIGHT_TS.name: PlaywrightTSEmitter,
}


def get_emitter(dialect: str = "pytest") -> SpecEmitter:
    get_dialect(dialect)
    return EMITTERS[dialect]()


def render_feature(feature: FeatureRecord, source_name: str, dialect: str = "pytest") -> str:
    """Render a parsed feature as a complete test module."""
    return get_emitter(dialect).emit(feature, source_name)
