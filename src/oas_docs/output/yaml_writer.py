"""YAML serialization and file persistence for canonical documents."""

import logging
from pathlib import Path
from typing import Any, BinaryIO

import yaml

from oas_docs.errors import CreateError, SerializationError, WriteError
from oas_docs.transform.document import to_mapping

logger = logging.getLogger(__name__)

DEFAULT_DOCS_OUT_PATH = "./internal/dist/openapi.yaml"


class _NoAliasDumper(yaml.SafeDumper):
    """SafeDumper that writes repeated objects in full instead of &anchors."""

    def ignore_aliases(self, data: Any) -> bool:
        return True


def marshal_to_yaml(document: Any) -> str:
    """Encode a canonical document (or plain mapping) as YAML text.

    Keys keep the order the transformer produced them in.
    """
    try:
        return yaml.dump(
            to_mapping(document),
            Dumper=_NoAliasDumper,
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )
    except yaml.YAMLError as e:
        raise SerializationError(f"failed marshaling to yaml: {e}") from e


def write_and_flush(data: bytes, stream: BinaryIO) -> None:
    try:
        stream.write(data)
    except (OSError, ValueError) as e:
        raise WriteError(f"failed writing to YAML output file: {e}") from e

    try:
        stream.flush()
    except (OSError, ValueError) as e:
        raise WriteError(f"failed flushing output writer: {e}") from e


def persist(document: Any, destination: str | Path = DEFAULT_DOCS_OUT_PATH) -> None:
    """Serialize a document and write it to destination, truncating it."""
    data = marshal_to_yaml(document).encode("utf-8")

    try:
        out = open(destination, "wb")
    except OSError as e:
        raise CreateError(f"failed creating yaml output file {destination}: {e}") from e

    with out:
        write_and_flush(data, out)

    logger.info("Wrote %d bytes to %s", len(data), destination)
