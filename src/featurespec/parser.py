"""Line-oriented feature file parser.

Recognized lines (case-sensitive, after trimming):
    Feature: <title>
    Background:
    Scenario: <name>
    Given / When / Then / And <text>

Everything else is ignored. The parser never raises: malformed input
yields a smaller FeatureRecord rather than an error.
"""

from __future__ import annotations

from enum import Enum, auto
from pathlib import Path

from featurespec.models import FeatureRecord, ScenarioRecord

FEATURE_PREFIX = "Feature:"
BACKGROUND_PREFIX = "Background:"
SCENARIO_PREFIX = "Scenario:"
STEP_PREFIXES = ("Given ", "When ", "Then ", "And ")


class LineType(Enum):
    FEATURE = auto()        # Feature: title
    BACKGROUND = auto()     # Background:
    SCENARIO = auto()       # Scenario: name
    STEP = auto()           # Given/When/Then/And ...
    IGNORED = auto()        # blank, comment, tag, table, doc string


def classify_line(line: str) -> LineType:
    """Classify one trimmed line by its keyword prefix."""
    if line.startswith(FEATURE_PREFIX):
        return LineType.FEATURE
    if line.startswith(BACKGROUND_PREFIX):
        return LineType.BACKGROUND
    if line.startswith(SCENARIO_PREFIX):
        return LineType.SCENARIO
    if line.startswith(STEP_PREFIXES):
        return LineType.STEP
    return LineType.IGNORED


class FeatureParser:
    """Builds a FeatureRecord from feature text."""

    def __init__(self, content: str, source_file: str | None = None) -> None:
        self.lines = content.split("\n")
        self.source_file = source_file
        self.title = ""
        self.background = False
        self.scenarios: list[ScenarioRecord] = []
        self._name: str | None = None
        self._steps: list[str] = []

    def parse(self) -> FeatureRecord:
        for raw in self.lines:
            line = raw.strip()
            line_type = classify_line(line)

            if line_type == LineType.FEATURE:
                self.title = line[len(FEATURE_PREFIX):].strip()
            elif line_type == LineType.BACKGROUND:
                self.background = True
            elif line_type == LineType.SCENARIO:
                self._flush()
                self._name = line[len(SCENARIO_PREFIX):].strip()
            elif line_type == LineType.STEP:
                # Steps outside a scenario (e.g. under Background) are dropped
                if self._name is not None:
                    self._steps.append(line)

        self._flush()
        return FeatureRecord(
            title=self.title,
            background=self.background,
            scenarios=tuple(self.scenarios),
            source_file=self.source_file,
        )

    def _flush(self) -> None:
        if self._name is None:
            return
        self.scenarios.append(ScenarioRecord(name=self._name, steps=tuple(self._steps)))
        self._name = None
        self._steps = []


def parse_feature_string(content: str, source_file: str | None = None) -> FeatureRecord:
    """Parse feature text into a FeatureRecord."""
    return FeatureParser(content, source_file).parse()


def parse_feature_file(path: Path) -> FeatureRecord:
    """Parse a UTF-8 feature file into a FeatureRecord."""
    content = path.read_text(encoding="utf-8")
    return parse_feature_string(content, source_file=str(path))
