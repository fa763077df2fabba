"""Document transformer: ApiDescription -> CanonicalDocument.

The transform is total. It never raises for a well-typed description;
incomplete input simply yields an incomplete document.
"""

import copy
import logging

from oas_docs.model.base import (
    ApiDescription,
    ComponentGroup,
    ContentEntry,
    ExternalDocs,
    Info,
    PathEntry,
    RequestBody,
    ResponseEntry,
    Schema,
    SchemaProperty,
    SecurityFlow,
    SecurityRequirement,
    SecurityScheme,
    SecurityScope,
    Tag,
)
from .document import (
    CanonicalDocument,
    ComponentsObject,
    ContactObject,
    ExternalDocsObject,
    FlowObject,
    InfoObject,
    LicenseObject,
    MediaTypeObject,
    OperationObject,
    PropertyObject,
    RefObject,
    RequestBodyObject,
    ResponseObject,
    SchemaObject,
    SecuritySchemeObject,
    ServerObject,
    TagObject,
    XmlObject,
)

logger = logging.getLogger(__name__)


def transform(description: ApiDescription, merge_components: bool = False) -> CanonicalDocument:
    """Build the canonical document for a description.

    By default only the last component group survives, as each group
    overwrites the schemas and securitySchemes of the previous one. Pass
    merge_components=True to merge every group instead.
    """
    document = CanonicalDocument(
        openapi=description.oas_version,
        info=_make_info(description.info),
        external_docs=_make_external_docs(description.external_docs),
        servers=[ServerObject(url=s.url) for s in description.servers],
        tags=[_make_tag(t) for t in description.tags],
        paths=make_paths(description.paths),
        components=make_components(description.components, merge=merge_components),
    )
    logger.debug(
        "Transformed %d path entries into %d routes",
        len(description.paths),
        len(document.paths),
    )
    return document


def _make_info(info: Info) -> InfoObject:
    return InfoObject(
        title=info.title,
        description=info.description,
        terms_of_service=info.terms_of_service,
        contact=ContactObject(email=info.contact.email),
        license=LicenseObject(name=info.license.name, url=info.license.url),
        version=info.version,
    )


def _make_external_docs(docs: ExternalDocs) -> ExternalDocsObject:
    return ExternalDocsObject(description=docs.description, url=docs.url)


def _make_tag(tag: Tag) -> TagObject:
    return TagObject(
        name=tag.name,
        description=tag.description,
        external_docs=_make_external_docs(tag.external_docs),
    )


# Paths


def make_paths(paths: list[PathEntry]) -> dict[str, dict[str, OperationObject]]:
    """Group path entries by route, then by lower-cased method.

    A later entry for the same (route, method) replaces the earlier one.
    """
    all_paths: dict[str, dict[str, OperationObject]] = {}
    for path in paths:
        methods = all_paths.setdefault(path.route, {})
        methods[path.http_method.lower()] = OperationObject(
            tags=list(path.tags),
            summary=path.summary,
            operation_id=path.operation_id,
            security=make_security(path.security),
            request_body=_make_request_body(path.request_body or RequestBody()),
            responses=_make_responses(path.responses),
        )
    return all_paths


def make_security(requirements: list[SecurityRequirement]) -> list[dict[str, list[str]]]:
    return [{req.auth_name: list(req.perm_types)} for req in requirements]


def _make_request_body(body: RequestBody) -> RequestBodyObject:
    return RequestBodyObject(description=body.description, content=_make_content(body.content))


def _make_responses(responses: list[ResponseEntry]) -> dict[int, ResponseObject]:
    return {
        resp.code: ResponseObject(description=resp.description, content=_make_content(resp.content))
        for resp in responses
    }


def _make_content(content: list[ContentEntry]) -> dict[str, MediaTypeObject]:
    return {ct.name: MediaTypeObject(schema_=RefObject(ref=ct.ref)) for ct in content}


# Components


def make_components(groups: list[ComponentGroup], merge: bool = False) -> ComponentsObject:
    components = ComponentsObject()
    for group in groups:
        schemas = _make_schemas(group.schemas)
        schemes = _make_security_schemes(group.security_schemes)
        if merge and components.schemas is not None:
            components.schemas.update(schemas)
            components.security_schemes.update(schemes)
        else:
            components.schemas = schemas
            components.security_schemes = schemes
    return components


def _make_schemas(schemas: list[Schema]) -> dict[str, SchemaObject]:
    result = {}
    for s in schemas:
        result[s.name] = SchemaObject(
            type=s.type,
            properties=_make_properties(s.properties),
            ref=s.ref,
            xml=XmlObject(name=s.xml.name, wrapped=s.xml.wrapped) if s.xml.name else None,
        )
    return result


def _make_properties(properties: list[SchemaProperty]) -> dict[str, PropertyObject]:
    return {
        prop.name: PropertyObject(
            type=prop.type or None,
            format=prop.format or None,
            description=prop.description or None,
            enum=copy.deepcopy(prop.enum) or None,
            default=copy.deepcopy(prop.default),
        )
        for prop in properties
    }


def _make_security_schemes(schemes: list[SecurityScheme]) -> dict[str, SecuritySchemeObject]:
    result = {}
    for ss in schemes:
        result[ss.name] = SecuritySchemeObject(
            # flow-based schemes are identified by their key only
            name=ss.name if ss.name and not ss.flows else None,
            type=ss.type or None,
            in_=ss.location or None,
            flows=_make_flows(ss.flows) if ss.flows else None,
        )
    return result


def _make_flows(flows: list[SecurityFlow]) -> dict[str, FlowObject]:
    return {
        flow.type: FlowObject(authorization_url=flow.auth_url, scopes=_make_scopes(flow.scopes))
        for flow in flows
    }


def _make_scopes(scopes: list[SecurityScope]) -> dict[str, str]:
    return {scope.name: scope.description for scope in scopes if scope.name}
