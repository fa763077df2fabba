"""Canonical OAS document records.

Each record mirrors one object of the OpenAPI document model. Fields carry
their wire key as an alias, and an optional attribute is None when absent.
to_mapping() walks records in field declaration order, so the order of the
fields below is the key order of the written document.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ContactObject(_Record):
    email: str


class LicenseObject(_Record):
    name: str
    url: str


class InfoObject(_Record):
    title: str
    description: str
    terms_of_service: str = Field(alias="termsOfService")
    contact: ContactObject
    license: LicenseObject
    version: str


class ExternalDocsObject(_Record):
    description: str
    url: str


class ServerObject(_Record):
    url: str


class TagObject(_Record):
    name: str
    description: str
    external_docs: ExternalDocsObject = Field(alias="externalDocs")


class RefObject(_Record):
    ref: str = Field(alias="$ref")


class MediaTypeObject(_Record):
    schema_: RefObject = Field(alias="schema")


class RequestBodyObject(_Record):
    description: str
    content: dict[str, MediaTypeObject]


class ResponseObject(_Record):
    description: str
    content: dict[str, MediaTypeObject]


class OperationObject(_Record):
    tags: list[str]
    summary: str
    operation_id: str = Field(alias="operationId")
    security: list[dict[str, list[str]]]
    request_body: RequestBodyObject = Field(alias="requestBody")
    responses: dict[int, ResponseObject]


class XmlObject(_Record):
    name: str
    wrapped: bool


class PropertyObject(_Record):
    type: str | None = None
    format: str | None = None
    description: str | None = None
    enum: list[Any] | None = None
    default: Any = None


class SchemaObject(_Record):
    type: str
    properties: dict[str, PropertyObject]
    ref: str = Field(alias="$ref")
    xml: XmlObject | None = None


class FlowObject(_Record):
    authorization_url: str = Field(alias="authorizationUrl")
    scopes: dict[str, str]


class SecuritySchemeObject(_Record):
    name: str | None = None
    type: str | None = None
    in_: str | None = Field(default=None, alias="in")
    flows: dict[str, FlowObject] | None = None


class ComponentsObject(_Record):
    schemas: dict[str, SchemaObject] | None = None
    security_schemes: dict[str, SecuritySchemeObject] | None = Field(
        default=None, alias="securitySchemes"
    )


class CanonicalDocument(_Record):
    openapi: str
    info: InfoObject
    external_docs: ExternalDocsObject = Field(alias="externalDocs")
    servers: list[ServerObject]
    tags: list[TagObject]
    paths: dict[str, dict[str, OperationObject]]
    components: ComponentsObject


def to_mapping(value: Any) -> Any:
    """Encode a record tree into plain dicts, lists and scalars.

    Record fields are renamed to their wire key and dropped when None.
    Free-form values (enum members, defaults) are copied but never filtered.
    """
    if isinstance(value, BaseModel):
        mapping = {}
        for name, field in type(value).model_fields.items():
            item = getattr(value, name)
            if item is None:
                continue
            mapping[field.alias or name] = to_mapping(item)
        return mapping
    if isinstance(value, dict):
        return {key: to_mapping(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_mapping(item) for item in value]
    return value
