"""Load an API description from a YAML or JSON file."""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from oas_docs.errors import DescriptionError
from .base import ApiDescription

logger = logging.getLogger(__name__)


def load_description(file_path: Path) -> ApiDescription:
    """Parse a description file into an ApiDescription.

    JSON is a subset of YAML, so both go through yaml.safe_load.
    """
    try:
        text = Path(file_path).read_text(encoding="utf-8")
    except OSError as e:
        raise DescriptionError(f"failed reading description file {file_path}: {e}") from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DescriptionError(f"failed parsing description file {file_path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise DescriptionError(
            f"description file {file_path} must contain a mapping, got {type(data).__name__}"
        )

    try:
        description = ApiDescription.model_validate(data)
    except ValidationError as e:
        raise DescriptionError(f"invalid description in {file_path}: {e}") from e

    logger.debug("Loaded %d path entries from %s", len(description.paths), file_path)
    return description
