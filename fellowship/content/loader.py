"""
YAML catalog files.

A catalog file has the same keys as RunConfig. event_flavors may be left
out, in which case the default flavor pool is used.
"""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..errors import CatalogLoadError
from ..state.schema import RunConfig
from .defaults import EVENT_FLAVORS

logger = logging.getLogger(__name__)


def load_catalog(path: Path | str) -> RunConfig:
    """
    Load and validate a catalog from YAML.

    Raises:
        CatalogLoadError: file missing, unparseable, or not a valid catalog
    """
    path = Path(path)
    if not path.exists():
        raise CatalogLoadError(f"Catalog file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise CatalogLoadError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise CatalogLoadError(f"Catalog root must be a mapping: {path}")

    data.setdefault("event_flavors", EVENT_FLAVORS)

    try:
        catalog = RunConfig.model_validate(data)
    except ValidationError as e:
        raise CatalogLoadError(f"Invalid catalog {path}: {e}") from e

    logger.debug(
        "Loaded catalog %s: %d leaders, %d members, %d gear, %d tactics",
        path,
        len(catalog.leaders),
        len(catalog.member_templates),
        len(catalog.gear_templates),
        len(catalog.tactic_templates),
    )
    return catalog


def dump_catalog(catalog: RunConfig, path: Path | str) -> Path:
    """Write a catalog as YAML. Returns the path written."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    data = catalog.model_dump(mode="json")
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, sort_keys=False, allow_unicode=True)

    logger.debug("Wrote catalog to %s", path)
    return path
