"""Career catalog loading and validation."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

import yaml
from pydantic import ValidationError

from career_compass.catalog.models import Career, CatalogEntryError
from career_compass.config.settings import Settings, get_settings
from career_compass.utils.logging import get_logger

logger = get_logger("catalog")


@dataclass(frozen=True)
class SkippedEntry:
    """A catalog entry that could not be used."""

    index: int
    career_id: str | None
    reason: str


@dataclass
class CatalogLoadResult:
    """Validated careers plus the entries that were rejected."""

    careers: list[Career] = field(default_factory=list)
    skipped: list[SkippedEntry] = field(default_factory=list)


def _entry_id(data: object) -> str | None:
    if isinstance(data, Career):
        return data.id
    if isinstance(data, Mapping):
        value = data.get("id")
        return str(value) if value is not None else None
    return None


def _format_validation_error(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(loc) for loc in item.get("loc", ())) or "<entry>"
        parts.append(f"{location}: {item.get('msg', 'invalid')}")
    return "; ".join(parts)


def parse_career(data: object, index: int | None = None) -> Career:
    """Validate one catalog entry.

    Raises:
        CatalogEntryError: If the entry is not a Career or a valid mapping.
    """
    if isinstance(data, Career):
        return data

    career_id = _entry_id(data)
    if not isinstance(data, Mapping):
        raise CatalogEntryError(
            f"Catalog entry must be a mapping, got {type(data).__name__}",
            index=index,
            career_id=career_id,
        )
    try:
        return Career.model_validate(dict(data))
    except ValidationError as e:
        raise CatalogEntryError(
            f"Invalid career '{career_id or '?'}': {_format_validation_error(e)}",
            index=index,
            career_id=career_id,
        ) from e


class CatalogService:
    """Service for loading and validating career catalogs."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    def parse_entry(self, data: object, index: int | None = None) -> Career:
        """Validate one catalog entry."""
        return parse_career(data, index=index)

    def parse_catalog(self, records: Iterable[object]) -> CatalogLoadResult:
        """Validate every entry, skipping (and logging) malformed ones."""
        result = CatalogLoadResult()
        for index, record in enumerate(records):
            try:
                result.careers.append(self.parse_entry(record, index=index))
            except CatalogEntryError as e:
                logger.warning("Skipping catalog entry %d: %s", index, e)
                result.skipped.append(
                    SkippedEntry(index=index, career_id=e.career_id, reason=str(e))
                )
        return result

    def load_catalog(self, path: Path | str | None = None) -> CatalogLoadResult:
        """Load a catalog from YAML or JSON.

        The file holds either a list of careers or a mapping with a
        ``careers`` list.
        """
        catalog_path = Path(path) if path is not None else self.settings.catalog_path
        if not catalog_path.exists():
            raise FileNotFoundError(f"Catalog not found: {catalog_path}")

        suffix = catalog_path.suffix.lower()
        if suffix == ".json":
            data = self._load_json(catalog_path)
        else:
            data = self._load_yaml(catalog_path)

        records = self._extract_records(data, catalog_path)
        result = self.parse_catalog(records)
        logger.info(
            "Loaded %d career(s) from %s (%d skipped)",
            len(result.careers),
            catalog_path,
            len(result.skipped),
        )
        return result

    def _load_yaml(self, path: Path) -> object:
        try:
            with path.open("r", encoding="utf-8") as f:
                return yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML catalog: {path}") from e

    def _load_json(self, path: Path) -> object:
        try:
            with path.open("r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON catalog: {path}") from e

    def _extract_records(self, data: object, path: Path) -> list:
        if data is None:
            return []
        if isinstance(data, dict):
            data = data.get("careers", [])
        if not isinstance(data, list):
            raise ValueError(f"Catalog must be a list of careers: {path}")
        return data
