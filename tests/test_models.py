from oas_docs.model.base import (
    ApiDescription,
    PathEntry,
    RequestBody,
    ResponseEntry,
    SchemaProperty,
    SecurityScheme,
)


class TestPathEntry:
    def test_create_minimal_entry(self):
        entry = PathEntry(route="/users", http_method="GET")
        assert entry.tags == []
        assert entry.summary == ""
        assert entry.security == []
        assert entry.request_body is None
        assert entry.responses == []

    def test_defaults_are_not_shared(self):
        a = PathEntry(route="/a", http_method="GET")
        b = PathEntry(route="/b", http_method="GET")
        a.tags.append("x")
        assert b.tags == []

    def test_nested_from_dict(self):
        entry = PathEntry(
            route="/users",
            http_method="POST",
            request_body={"description": "new user", "content": [{"name": "application/json", "ref": "#/u"}]},
            responses=[{"code": 201, "description": "Created"}],
        )
        assert isinstance(entry.request_body, RequestBody)
        assert entry.request_body.content[0].ref == "#/u"
        assert isinstance(entry.responses[0], ResponseEntry)


class TestSchemaModels:
    def test_property_defaults(self):
        prop = SchemaProperty(name="id")
        assert prop.format == ""
        assert prop.enum == []
        assert prop.default is None

    def test_security_scheme_defaults(self):
        scheme = SecurityScheme()
        assert scheme.name == ""
        assert scheme.location == ""
        assert scheme.flows == []


class TestApiDescription:
    def test_defaults(self):
        desc = ApiDescription()
        assert desc.oas_version == "3.0.1"
        assert desc.paths == []
        assert desc.components == []

    def test_add_and_get_path(self):
        desc = ApiDescription()
        desc.add_path(PathEntry(route="/a", http_method="GET"))
        desc.add_path(PathEntry(route="/b", http_method="GET"))
        assert desc.get_path_by_index(1).route == "/b"

    def test_attach_routes_registers_by_name(self):
        def create_user(d: ApiDescription):
            d.add_path(PathEntry(route="/users", http_method="POST"))

        desc = ApiDescription()
        desc.attach_routes(create_user)
        assert list(desc.get_registered_routes()) == ["create_user"]
        assert desc.paths == []

    def test_init_call_stack_runs_each_decl_once(self):
        def list_users(d: ApiDescription):
            d.add_path(PathEntry(route="/users", http_method="GET"))

        desc = ApiDescription()
        desc.attach_routes(list_users)
        desc.init_call_stack_for_routes()
        desc.init_call_stack_for_routes()
        assert len(desc.paths) == 1

    def test_late_attached_decl_still_runs(self):
        def first(d: ApiDescription):
            d.add_path(PathEntry(route="/a", http_method="GET"))

        def second(d: ApiDescription):
            d.add_path(PathEntry(route="/b", http_method="GET"))

        desc = ApiDescription()
        desc.attach_routes(first)
        desc.init_call_stack_for_routes()
        desc.attach_routes(second)
        desc.init_call_stack_for_routes()
        assert [p.route for p in desc.paths] == ["/a", "/b"]

    def test_decl_attaching_another_decl(self):
        def users_detail(d: ApiDescription):
            d.add_path(PathEntry(route="/users/{id}", http_method="GET"))

        def users(d: ApiDescription):
            d.add_path(PathEntry(route="/users", http_method="GET"))
            d.attach_routes(users_detail)

        desc = ApiDescription()
        desc.attach_routes(users)
        desc.init_call_stack_for_routes()
        assert [p.route for p in desc.paths] == ["/users", "/users/{id}"]
