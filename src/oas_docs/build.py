"""Top-level build operations: description -> YAML file or stream."""

import logging
from typing import TextIO

from pydantic import BaseModel

from oas_docs.errors import BuildError, PersistError, SerializationError
from oas_docs.model.base import ApiDescription
from oas_docs.output.yaml_writer import DEFAULT_DOCS_OUT_PATH, marshal_to_yaml, persist
from oas_docs.transform.builder import transform

logger = logging.getLogger(__name__)


class BuildConfig(BaseModel):
    """Options for build_docs / build_stream.

    Only the first config passed to a build call is honored.
    """

    custom_path: str = ""
    merge_components: bool = False


def _first_config(configs: tuple[BuildConfig, ...]) -> BuildConfig:
    if not configs:
        return BuildConfig()
    return configs[0]


def get_out_path(*configs: BuildConfig) -> str:
    return _first_config(configs).custom_path or DEFAULT_DOCS_OUT_PATH


def build_docs(description: ApiDescription, *configs: BuildConfig) -> str:
    """Transform the description and save it as YAML.

    Returns the path written to. Raises BuildError naming the failed stage,
    with the stage error chained as __cause__.
    """
    conf = _first_config(configs)
    out_path = get_out_path(*configs)
    logger.info("Building OAS document to %s", out_path)

    description.init_call_stack_for_routes()
    document = transform(description, merge_components=conf.merge_components)

    try:
        persist(document, out_path)
    except SerializationError as e:
        raise BuildError(f"marshaling issue occurred: {e}") from e
    except PersistError as e:
        raise BuildError(f"an issue occurred while saving to YAML output: {e}") from e

    return out_path


def build_stream(description: ApiDescription, stream: TextIO, *configs: BuildConfig) -> None:
    """Transform the description and write the YAML to an open text stream."""
    conf = _first_config(configs)

    description.init_call_stack_for_routes()
    document = transform(description, merge_components=conf.merge_components)

    try:
        yml = marshal_to_yaml(document)
    except SerializationError as e:
        raise BuildError(f"marshaling issue occurred: {e}") from e

    try:
        stream.write(yml)
        stream.flush()
    except (OSError, ValueError) as e:
        raise BuildError(f"an issue occurred while writing to YAML stream: {e}") from e
