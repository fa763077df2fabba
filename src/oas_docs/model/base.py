"""Data models for the in-memory API description.

Callers build an ApiDescription (directly, from a file via the loader, or
through attached route declarations) and hand it to the transformer.
"""

from typing import Any, Callable

from pydantic import BaseModel, PrivateAttr

DEFAULT_OAS_VERSION = "3.0.1"


class Contact(BaseModel):
    email: str = ""


class License(BaseModel):
    name: str = ""
    url: str = ""


class Info(BaseModel):
    """The info block of the document."""

    title: str = ""
    description: str = ""
    terms_of_service: str = ""
    contact: Contact = Contact()
    license: License = License()
    version: str = ""


class ExternalDocs(BaseModel):
    description: str = ""
    url: str = ""


class Server(BaseModel):
    url: str


class Tag(BaseModel):
    name: str
    description: str = ""
    external_docs: ExternalDocs = ExternalDocs()


class SecurityRequirement(BaseModel):
    """An authentication scheme name and the scopes it requires."""

    auth_name: str
    perm_types: list[str] = []


class ContentEntry(BaseModel):
    """A media type paired with a schema reference."""

    name: str  # application/json, application/xml, ...
    ref: str  # #/components/schemas/User


class RequestBody(BaseModel):
    description: str = ""
    content: list[ContentEntry] = []


class ResponseEntry(BaseModel):
    code: int
    description: str = ""
    content: list[ContentEntry] = []


class PathEntry(BaseModel):
    """A single route + HTTP method pair."""

    route: str  # /users/{id}
    http_method: str  # any casing, lower-cased on output
    tags: list[str] = []
    summary: str = ""
    operation_id: str = ""
    security: list[SecurityRequirement] = []
    request_body: RequestBody | None = None
    responses: list[ResponseEntry] = []


class XmlEntry(BaseModel):
    name: str = ""
    wrapped: bool = False


class SchemaProperty(BaseModel):
    name: str
    type: str = ""
    format: str = ""
    description: str = ""
    enum: list[Any] = []
    default: Any = None


class Schema(BaseModel):
    name: str
    type: str = ""
    properties: list[SchemaProperty] = []
    ref: str = ""
    xml: XmlEntry = XmlEntry()


class SecurityScope(BaseModel):
    name: str = ""
    description: str = ""


class SecurityFlow(BaseModel):
    type: str  # implicit, password, clientCredentials, authorizationCode
    auth_url: str = ""
    scopes: list[SecurityScope] = []


class SecurityScheme(BaseModel):
    name: str = ""
    type: str = ""
    location: str = ""  # header / query / cookie
    flows: list[SecurityFlow] = []


class ComponentGroup(BaseModel):
    schemas: list[Schema] = []
    security_schemes: list[SecurityScheme] = []


RouteDecl = Callable[["ApiDescription"], None]


class ApiDescription(BaseModel):
    """Top-level API description."""

    oas_version: str = DEFAULT_OAS_VERSION
    info: Info = Info()
    external_docs: ExternalDocs = ExternalDocs()
    servers: list[Server] = []
    tags: list[Tag] = []
    paths: list[PathEntry] = []
    components: list[ComponentGroup] = []

    _route_decls: dict[str, RouteDecl] = PrivateAttr(default_factory=dict)
    _invoked: set[str] = PrivateAttr(default_factory=set)

    def add_path(self, entry: PathEntry) -> None:
        self.paths.append(entry)

    def get_path_by_index(self, index: int) -> PathEntry:
        return self.paths[index]

    def attach_routes(self, *route_decls: RouteDecl) -> None:
        """Register route declarations.

        Each declaration is called with this description and is expected to
        add its path entries. Declarations are keyed by their __name__, so
        attaching a second callable with the same name replaces the first.
        """
        for decl in route_decls:
            self._route_decls[decl.__name__] = decl

    def get_registered_routes(self) -> dict[str, RouteDecl]:
        return dict(self._route_decls)

    def init_call_stack_for_routes(self) -> None:
        """Invoke every attached declaration that has not run yet.

        Declarations attached while this runs are invoked in the same call.
        """
        pending = [name for name in self._route_decls if name not in self._invoked]
        while pending:
            for name in pending:
                self._invoked.add(name)
                self._route_decls[name](self)
            pending = [name for name in self._route_decls if name not in self._invoked]
