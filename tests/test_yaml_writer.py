import io
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import yaml

from oas_docs.errors import CreateError, SerializationError, WriteError
from oas_docs.model.loader import load_description
from oas_docs.output.yaml_writer import marshal_to_yaml, persist, write_and_flush
from oas_docs.transform.builder import transform
from oas_docs.transform.document import to_mapping

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def petstore_document():
    return transform(load_description(FIXTURES / "petstore_description.yaml"))


class TestMarshalToYaml:
    def test_round_trip(self, petstore_document):
        text = marshal_to_yaml(petstore_document)
        assert yaml.safe_load(text) == to_mapping(petstore_document)

    def test_key_order_preserved(self, petstore_document):
        text = marshal_to_yaml(petstore_document)
        top_level = [
            line.split(":")[0]
            for line in text.splitlines()
            if line and not line[0].isspace() and not line.startswith("-")
        ]
        assert top_level == ["openapi", "info", "externalDocs", "servers", "tags", "paths", "components"]

    def test_numeric_keys_unquoted(self, petstore_document):
        text = marshal_to_yaml(petstore_document)
        assert "        404:" in text
        assert "'404'" not in text

    def test_ref_key(self, petstore_document):
        assert "$ref: '#/components/schemas/Pet'" in marshal_to_yaml(petstore_document)

    def test_no_anchors(self):
        shared = ["a"]
        text = marshal_to_yaml({"x": shared, "y": shared})
        assert "&" not in text and "*" not in text

    def test_unencodable_value(self):
        with pytest.raises(SerializationError):
            marshal_to_yaml({"bad": object()})


class TestWriteAndFlush:
    def test_writes_and_flushes(self):
        stream = io.BytesIO()
        write_and_flush(b"openapi: 3.0.1\n", stream)
        assert stream.getvalue() == b"openapi: 3.0.1\n"

    def test_write_failure(self):
        stream = MagicMock()
        stream.write.side_effect = OSError("disk full")
        with pytest.raises(WriteError, match="failed writing"):
            write_and_flush(b"x", stream)

    def test_flush_failure(self):
        stream = MagicMock()
        stream.flush.side_effect = OSError("disk full")
        with pytest.raises(WriteError, match="failed flushing"):
            write_and_flush(b"x", stream)


class TestPersist:
    def test_persist_writes_file(self, tmp_path, petstore_document):
        out = tmp_path / "openapi.yaml"
        persist(petstore_document, out)
        assert yaml.safe_load(out.read_text(encoding="utf-8")) == to_mapping(petstore_document)

    def test_persist_truncates(self, tmp_path):
        out = tmp_path / "openapi.yaml"
        out.write_text("old: content\n" * 100)
        persist({"openapi": "3.0.1"}, out)
        assert out.read_text() == "openapi: 3.0.1\n"

    def test_missing_parent_directory(self, tmp_path):
        out = tmp_path / "missing" / "openapi.yaml"
        with pytest.raises(CreateError):
            persist({"openapi": "3.0.1"}, out)
        assert not out.exists()

    def test_destination_is_directory(self, tmp_path):
        with pytest.raises(CreateError):
            persist({"openapi": "3.0.1"}, tmp_path)

    def test_serialization_error_creates_no_file(self, tmp_path):
        out = tmp_path / "openapi.yaml"
        with pytest.raises(SerializationError):
            persist({"bad": object()}, out)
        assert not out.exists()
