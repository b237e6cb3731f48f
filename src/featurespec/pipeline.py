"""Clean -> generate pipeline over a features directory."""

from __future__ import annotations

import logging
from pathlib import Path

from featurespec.emitter import FEATURE_SUFFIX, SpecEmitter, get_emitter
from featurespec.models import FeatureRecord, GenerationResult, ProjectConfig
from featurespec.parser import parse_feature_string
from featurespec.store import FileStore, LocalFileStore

logger = logging.getLogger(__name__)


class GenerationError(Exception):
    """Raised when a generation run cannot complete."""


class FeaturesDirNotFoundError(GenerationError):
    """The configured features directory does not exist."""


class NoFeatureFilesError(GenerationError):
    """The features directory holds no feature files."""


class FeatureDecodeError(GenerationError):
    """A feature file is not valid UTF-8."""


def clean_generated(output_dir: Path, store: FileStore, emitter: SpecEmitter) -> list[str]:
    """Delete previously generated files from output_dir. Returns the removed names."""
    if not store.is_dir(output_dir):
        return []
    removed: list[str] = []
    for name in store.list_dir(output_dir):
        if not emitter.matches_name(name):
            continue
        try:
            content = store.read_text(output_dir / name)
        except UnicodeDecodeError:
            # Not something we wrote
            continue
        if emitter.is_generated(name, content):
            store.delete(output_dir / name)
            logger.debug("Removed %s", output_dir / name)
            removed.append(name)
    return removed


def find_feature_files(features_dir: Path, store: FileStore) -> list[str]:
    return [name for name in store.list_dir(features_dir) if name.endswith(FEATURE_SUFFIX)]


def read_features(features_dir: Path, store: FileStore) -> list[tuple[str, FeatureRecord]]:
    """Parse every feature file in features_dir, in sorted order."""
    feature_files = find_feature_files(features_dir, store)
    if not feature_files:
        raise NoFeatureFilesError(f"No feature files found in {features_dir}")

    features: list[tuple[str, FeatureRecord]] = []
    for name in feature_files:
        path = features_dir / name
        try:
            content = store.read_text(path)
        except UnicodeDecodeError as exc:
            raise FeatureDecodeError(f"{path} is not valid UTF-8: {exc}") from exc
        features.append((name, parse_feature_string(content, source_file=str(path))))
    return features


def generate_specs(
    config: ProjectConfig,
    store: FileStore | None = None,
    project_root: Path | None = None,
) -> GenerationResult:
    """Regenerate every test module from the configured features directory.

    All feature files are read before anything is deleted, so a run that
    fails on its input leaves existing output untouched. Store errors
    propagate.
    """
    store = store or LocalFileStore()
    root = project_root if project_root is not None else Path.cwd()
    features_dir = root / config.features_dir
    output_dir = root / config.output_dir
    emitter = get_emitter(config.dialect)

    if not store.is_dir(features_dir):
        raise FeaturesDirNotFoundError(f"Features directory not found: {features_dir}")

    features = read_features(features_dir, store)

    store.make_dirs(output_dir)
    result = GenerationResult(removed=clean_generated(output_dir, store, emitter))

    for name, feature in features:
        if not feature.scenarios:
            logger.info("Skipping %s: no scenarios", name)
            result.skipped.append(name)
            continue

        output_name = emitter.output_name(name)
        store.write_text(output_dir / output_name, emitter.emit(feature, name))
        logger.info("Generated %s (%d scenarios)", output_name, len(feature.scenarios))
        result.generated[output_name] = len(feature.scenarios)

    return result
