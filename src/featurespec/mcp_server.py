"""FastMCP server exposing featurespec tools."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from fastmcp import FastMCP

from featurespec.config import ConfigError, resolve_config
from featurespec.emitter import render_feature as _render
from featurespec.models import FeatureRecord
from featurespec.parser import parse_feature_file, parse_feature_string
from featurespec.pipeline import GenerationError, generate_specs as _generate_specs
from featurespec.translator import DIALECTS, classify_step, translate

mcp = FastMCP("featurespec")


# --- Serialization helpers ---


def _serialize_feature(feature: FeatureRecord) -> dict[str, Any]:
    return {
        "title": feature.title,
        "background": feature.background,
        "source_file": feature.source_file,
        "scenario_count": len(feature.scenarios),
        "scenarios": [
            {"name": s.name, "steps": list(s.steps)} for s in feature.scenarios
        ],
    }


def _load_feature(
    content: str | None, file_path: str | None
) -> FeatureRecord | None:
    if file_path:
        return parse_feature_file(Path(file_path))
    if content is not None:
        return parse_feature_string(content)
    return None


# --- Tool implementation functions (testable without MCP) ---


def _parse_feature(content: str | None = None, file_path: str | None = None) -> dict[str, Any]:
    try:
        feature = _load_feature(content, file_path)
    except (OSError, UnicodeDecodeError) as exc:
        return {"error": str(exc)}
    if feature is None:
        return {"error": "Provide either 'content' or 'file_path'"}
    return _serialize_feature(feature)


def _translate_step(step: str, dialect: str = "pytest") -> dict[str, Any]:
    if dialect not in DIALECTS:
        return {"error": f"Unknown dialect '{dialect}'"}
    intent = classify_step(step)
    return {
        "intent": intent.kind.value,
        "value": intent.value,
        "statement": translate(step, dialect),
    }


def _render_feature(
    content: str | None = None,
    file_path: str | None = None,
    dialect: str = "pytest",
) -> dict[str, Any]:
    if dialect not in DIALECTS:
        return {"error": f"Unknown dialect '{dialect}'"}
    try:
        feature = _load_feature(content, file_path)
    except (OSError, UnicodeDecodeError) as exc:
        return {"error": str(exc)}
    if feature is None:
        return {"error": "Provide either 'content' or 'file_path'"}
    source_name = Path(file_path).name if file_path else "inline.feature"
    return {
        "dialect": dialect,
        "scenario_count": len(feature.scenarios),
        "output": _render(feature, source_name, dialect),
    }


def _generate(project_root: str = ".") -> dict[str, Any]:
    root = Path(project_root)
    try:
        config = resolve_config(root)
        result = _generate_specs(config, project_root=root)
    except (ConfigError, GenerationError, OSError) as exc:
        return {"ok": False, "error": str(exc)}
    return {
        "ok": True,
        "output_dir": str(root / config.output_dir),
        "removed": result.removed,
        "generated": result.generated,
        "skipped": result.skipped,
    }


# --- MCP tool registration (thin wrappers) ---


@mcp.tool()
def parse_feature(content: str | None = None, file_path: str | None = None) -> dict:
    """Parse a feature file or feature text into its title and scenarios.

    Provide either `content` (raw feature text) or `file_path`.
    """
    return _parse_feature(content, file_path)


@mcp.tool()
def translate_step(step: str, dialect: str = "pytest") -> dict:
    """Translate one Given/When/Then step into a browser test statement.

    Returns the recognized intent, its quoted value and the generated statement.
    """
    return _translate_step(step, dialect)


@mcp.tool()
def render_feature(
    content: str | None = None,
    file_path: str | None = None,
    dialect: str = "pytest",
) -> dict:
    """Render a feature as a complete test module without writing it.

    Args:
        dialect: "pytest" for pytest-playwright, "playwright-ts" for Playwright Test.
    """
    return _render_feature(content, file_path, dialect)


@mcp.tool()
def generate_specs(project_root: str = ".") -> dict:
    """Regenerate all test modules for a project from its feature files."""
    return _generate(project_root)


if __name__ == "__main__":
    mcp.run()
