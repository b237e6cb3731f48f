"""Core data models for featurespec."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class ScenarioRecord:
    """A named scenario and its raw step lines, in declaration order."""

    name: str
    steps: tuple[str, ...] = ()


@dataclass(frozen=True)
class FeatureRecord:
    """A parsed feature file."""

    title: str = ""
    background: bool = False
    scenarios: tuple[ScenarioRecord, ...] = ()
    source_file: str | None = None

    @property
    def step_count(self) -> int:
        return sum(len(s.steps) for s in self.scenarios)


class IntentKind(Enum):
    """The closed set of actions a step can be translated into."""

    NAVIGATE = "navigate"
    ASSERT_TITLE = "assert-title"
    ASSERT_VISIBLE_TEXT = "assert-visible-text"
    ASSERT_LINK = "assert-link"
    CLICK = "click"
    ASSERT_URL_CONTAINS = "assert-url-contains"
    WAIT_FOR_LOAD = "wait-for-load"
    BROWSER_WINDOW = "browser-window"
    PASSTHROUGH = "passthrough"


@dataclass(frozen=True)
class StepIntent:
    """A recognized step.

    ``value`` holds the quoted literal for literal-bearing kinds, the
    original step text for PASSTHROUGH, and None otherwise.
    """

    kind: IntentKind
    value: str | None = None


@dataclass
class ProjectConfig:
    """Project configuration for featurespec."""

    version: str = "0.1.0"
    features_dir: str = "features"
    output_dir: str = "tests-playwright"
    dialect: str = "pytest"


@dataclass
class GenerationResult:
    """Outcome of one clean -> generate run."""

    removed: list[str] = field(default_factory=list)
    generated: dict[str, int] = field(default_factory=dict)
    skipped: list[str] = field(default_factory=list)

    @property
    def scenario_count(self) -> int:
        return sum(self.generated.values())
