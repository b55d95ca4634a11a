"""Loading holiday definitions from YAML catalogs."""

import logging
from pathlib import Path
from typing import Any, List, Optional, Union

import yaml
from pydantic import ValidationError

from ..exceptions import HolidayCatalogError
from .models import HolidayDefinition

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).parent / "data" / "holidays.yaml"


def parse_holiday_definitions(
    data: Any, source: Optional[Path] = None
) -> List[HolidayDefinition]:
    """Validate already-parsed catalog data into holiday definitions.

    Accepts either a mapping with a ``holidays`` list or the list itself.

    Args:
        data: Parsed YAML/JSON data
        source: File the data came from, used in error messages

    Returns:
        Definitions in catalog order

    Raises:
        HolidayCatalogError: If the data is malformed or names are duplicated
    """
    entries = data.get("holidays") if isinstance(data, dict) else data
    if not isinstance(entries, list):
        raise HolidayCatalogError("Holiday catalog must contain a 'holidays' list", source)

    definitions: List[HolidayDefinition] = []
    seen_names = set()
    for index, entry in enumerate(entries):
        try:
            definition = HolidayDefinition.model_validate(entry)
        except ValidationError as e:
            name = entry.get("name", "<unnamed>") if isinstance(entry, dict) else "<invalid>"
            logger.error("Invalid holiday definition #%d (%s) in %s", index, name, source)
            raise HolidayCatalogError(
                f"Invalid holiday definition #{index} ({name}): {e}", source
            ) from e

        if definition.name in seen_names:
            logger.error("Duplicate holiday name %r in %s", definition.name, source)
            raise HolidayCatalogError(f"Duplicate holiday name: {definition.name}", source)
        seen_names.add(definition.name)
        definitions.append(definition)

    return definitions


def load_holiday_definitions(path: Optional[Union[str, Path]] = None) -> List[HolidayDefinition]:
    """Load holiday definitions from a YAML file.

    Args:
        path: Catalog file, defaults to the catalog bundled with the package

    Returns:
        Definitions in catalog order

    Raises:
        HolidayCatalogError: If the file cannot be read, parsed or validated
    """
    catalog_path = Path(path) if path is not None else DEFAULT_CATALOG_PATH

    try:
        with catalog_path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        logger.error("Cannot read holiday catalog %s: %s", catalog_path, e)
        raise HolidayCatalogError(f"Cannot read holiday catalog: {e}", catalog_path) from e
    except yaml.YAMLError as e:
        logger.error("Malformed holiday catalog %s: %s", catalog_path, e)
        raise HolidayCatalogError(f"Malformed holiday catalog: {e}", catalog_path) from e

    definitions = parse_holiday_definitions(data, catalog_path)
    logger.debug("Loaded %d holiday definitions from %s", len(definitions), catalog_path)
    return definitions
