"""Hand-off of generated test modules to their test runner."""

from __future__ import annotations

import logging
import re
import subprocess
import sys
from dataclasses import dataclass, field
from pathlib import Path

from featurespec.models import ProjectConfig

logger = logging.getLogger(__name__)

PYTEST_TIMEOUT = 300


@dataclass
class TestResult:
    """Outcome of one hand-off to pytest.

    ``returncode`` is pytest's exit status; it is None when pytest never ran.
    """

    __test__ = False

    returncode: int | None = None
    counts: dict[str, int] = field(default_factory=dict)
    output: str = ""
    failing_tests: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        if self.returncode is None:
            return not self.counts.get("failed") and not self.counts.get("errors")
        return self.returncode == 0


def run_generated_tests(
    config: ProjectConfig, project_root: Path, headed: bool = False
) -> TestResult:
    """Run the generated pytest-playwright modules and collect results."""
    output_dir = project_root / config.output_dir
    if not output_dir.is_dir() or not list(output_dir.glob("test_*.py")):
        return TestResult(output="No generated tests found. Run `featurespec generate` first.")

    cmd = [sys.executable, "-m", "pytest", str(output_dir), "--tb=short", "-q", "-rf"]
    if headed:
        cmd.append("--headed")
    logger.debug("Running %s", " ".join(cmd))

    try:
        proc = subprocess.run(cmd, capture_output=True, text=True, timeout=PYTEST_TIMEOUT)
    except subprocess.TimeoutExpired:
        return TestResult(counts={"errors": 1}, output="Test execution timed out (5 minutes)")
    except FileNotFoundError:
        return TestResult(counts={"errors": 1}, output="pytest not found")

    return summarize_pytest_output(proc.stdout + proc.stderr, proc.returncode)


def launch_playwright_ui(config: ProjectConfig, project_root: Path) -> int:
    """Open the interactive Playwright UI on generated specs. Blocks until it exits."""
    cmd = ["npx", "playwright", "test", "--ui"]
    logger.debug("Launching %s in %s", " ".join(cmd), project_root)
    try:
        return subprocess.call(cmd, cwd=project_root)
    except FileNotFoundError:
        logger.error("npx not found; install Node.js to use the Playwright UI")
        return 127
    except KeyboardInterrupt:
        return 0


SUMMARY_ITEM = re.compile(r"(\d+) (passed|failed|skipped|xfailed|xpassed|errors?)\b")


def summarize_pytest_output(output: str, returncode: int | None = None) -> TestResult:
    """Collect the summary counts and FAILED lines from pytest's output."""
    result = TestResult(returncode=returncode, output=output)
    for line in output.splitlines():
        line = line.strip()
        if line.startswith("FAILED"):
            result.failing_tests.append(line)
        for count, outcome in SUMMARY_ITEM.findall(line):
            key = "errors" if outcome.startswith("error") else outcome
            result.counts[key] = int(count)
    return result
