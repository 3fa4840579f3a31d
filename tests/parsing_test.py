"""
Tests parsing description documents
"""
from pathlib import Path

import httpx
import pytest
import yarl
from pydantic import ValidationError

from mockapi3 import OpenAPI, SpecError, ReferenceResolutionError, FileSystemLoader, WebLoader
from mockapi3.base import deref
from mockapi3.errors import OperationParameterValidationError
from mockapi3.v30 import Schema

FIXTURES = Path(__file__).parent / "fixtures"

URLBASE = "/"


def test_parse_from_yaml(with_widgets):
    api = OpenAPI(URLBASE, with_widgets)
    assert api.info.title == "widgets"
    assert api.openapi == "3.0.3"


def test_parsing_references(widgets):
    endpoint = widgets.lookup("/widgets", "POST")
    body = endpoint.requestBody
    assert body.required is True
    schema = deref(body.content["application/json"].schema_)
    assert body.content["application/json"].schema_.target is widgets.components.schemas["Widget"]
    assert isinstance(schema, Schema)
    assert schema.required == ["name"]

    endpoint = widgets.lookup("/widgets/{id}", "get")
    assert [p.name for p in endpoint.parameters] == ["id"]


def test_parsing_reference_chain(composition):
    alias = composition.components.schemas["Alias"]
    assert deref(alias) is composition.components.schemas["Named"]
    assert alias.target is not None
    assert deref(alias.target) is deref(alias)


def test_parsing_reference_invalid(with_widgets):
    with_widgets["paths"]["/widgets"]["post"]["requestBody"]["$ref"] = "#/components/requestBodies/Missing"
    with pytest.raises(ReferenceResolutionError):
        OpenAPI(URLBASE, with_widgets)


def test_parsing_reference_external(with_widgets):
    with_widgets["paths"]["/widgets"]["post"]["requestBody"]["$ref"] = "other.yaml#/components/requestBodies/Widget"
    with pytest.raises(ReferenceResolutionError, match="external"):
        OpenAPI(URLBASE, with_widgets)


def test_parsing_reference_circular(with_composition):
    schemas = with_composition["components"]["schemas"]
    schemas["A"] = {"$ref": "#/components/schemas/B"}
    schemas["B"] = {"$ref": "#/components/schemas/A"}
    with pytest.raises(ReferenceResolutionError, match="Circular"):
        OpenAPI(URLBASE, with_composition)


def test_parsing_reference_escaped(with_composition):
    schemas = with_composition["components"]["schemas"]
    schemas["a/b~c"] = {"type": "string"}
    schemas["Escaped"] = {"$ref": "#/components/schemas/a~1b~0c"}
    api = OpenAPI(URLBASE, with_composition)
    assert deref(api.components.schemas["Escaped"]).type == "string"


@pytest.mark.parametrize(
    "version, match",
    [
        ({"openapi": "3.1.0"}, "3.1 not supported"),
        ({"openapi": "4.0.0"}, "major version"),
        ({"swagger": "2.0"}, "swagger version 2.0"),
        ({}, "missing openapi field"),
    ],
)
def test_parsing_version(with_widgets, version, match):
    del with_widgets["openapi"]
    with_widgets.update(version)
    with pytest.raises(SpecError, match=match):
        OpenAPI(URLBASE, with_widgets)


def test_parsing_paths_invalid(with_widgets):
    with_widgets["paths"]["/widgets"]["get"]["unknown"] = True
    with pytest.raises(ValidationError):
        OpenAPI(URLBASE, with_widgets)


def test_parsing_schema_type_invalid(with_composition):
    with_composition["components"]["schemas"]["Base"]["type"] = "int"
    with pytest.raises(ValidationError):
        OpenAPI(URLBASE, with_composition)


def test_parsing_wrong_parameter_name(with_widgets):
    with_widgets["paths"]["/widgets/{id}"]["get"]["parameters"] = [
        {"name": "different", "in": "path", "required": True, "schema": {"type": "string"}}
    ]
    with pytest.raises(OperationParameterValidationError, match="Parameter name not found in path: different"):
        OpenAPI(URLBASE, with_widgets)


def test_parsing_missing_parameter(with_widgets):
    del with_widgets["paths"]["/widgets/{id}"]["parameters"]
    with pytest.raises(OperationParameterValidationError, match="not found in parameters: id"):
        OpenAPI(URLBASE, with_widgets)


def test_parsing_path_parameter_not_required(with_widgets):
    with_widgets["components"]["parameters"]["id"]["required"] = False
    with pytest.raises(ValidationError, match="must be required"):
        OpenAPI(URLBASE, with_widgets)


def test_parsing_pathitem_ref(with_widgets):
    with_widgets["paths"]["/gadgets"] = {"$ref": "#/paths/~1widgets"}
    with pytest.raises(SpecError, match="PathItem"):
        OpenAPI(URLBASE, with_widgets)


def test_parsing_extensions(with_widgets):
    with_widgets["x-mock"] = {"seed": 1}
    with_widgets["paths"]["x-internal"] = True
    api = OpenAPI(URLBASE, with_widgets)
    assert api._root.extensions == {"mock": {"seed": 1}}
    assert api.paths.extensions == {"internal": True}
    assert "x-internal" not in api.paths


def test_parameter_override(with_widgets):
    """
    operation parameters replace the path item parameters with the same name & location
    """
    item = with_widgets["paths"]["/widgets/{id}"]
    item["get"]["parameters"] = [
        {"name": "id", "in": "path", "required": True, "description": "override", "schema": {"type": "string"}},
        {"name": "id", "in": "query", "schema": {"type": "string"}},
    ]
    api = OpenAPI(URLBASE, with_widgets)

    parameters = api.lookup("/widgets/{id}", "get").parameters
    assert [(p.name, p.in_.value) for p in parameters] == [("id", "path"), ("id", "query")]
    assert parameters[0].description == "override"

    parameters = api.lookup("/widgets/{id}", "delete").parameters
    assert [p.description for p in parameters] == [None]


def test_endpoints(widgets):
    endpoints = list(widgets.endpoints())
    assert [str(e) for e in endpoints] == [
        "GET /items/{item-id}",
        "HEAD /items/{item-id}",
        "POST /notes",
        "GET /reports",
        "GET /widgets",
        "POST /widgets",
        "DELETE /widgets/{id}",
        "GET /widgets/{id}",
        "PATCH /widgets/{id}",
        "PUT /widgets/{id}",
    ]
    assert {e.resource for e in endpoints} == {"items", "notes", "reports", "widgets"}

    with pytest.raises(KeyError):
        widgets.lookup("/widgets", "delete")


def test_security_schemes(widgets):
    assert widgets.security[0].root == {"apiKey": []}
    assert widgets.security_schemes["apiKey"].root.name == "X-Key"


def test_loader_filesystem():
    api = OpenAPI.load_file(URLBASE, yarl.URL("widgets.yaml"), loader=FileSystemLoader(FIXTURES))
    assert api.info.title == "widgets"


def test_loader_web():
    document = (FIXTURES / "widgets.yaml").read_bytes()

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api/widgets.yaml":
            return httpx.Response(200, content=document)
        return httpx.Response(404)

    def session_factory(*args, **kwargs) -> httpx.Client:
        return httpx.Client(*args, transport=httpx.MockTransport(handler), **kwargs)

    loader = WebLoader(yarl.URL("http://example.com/"), session_factory=session_factory)
    api = OpenAPI.load_file("http://example.com/api/widgets.yaml", yarl.URL("/api/widgets.yaml"), loader=loader)
    assert api.lookup("/widgets", "get").operationId == "listWidgets"

    with pytest.raises(httpx.HTTPStatusError):
        loader.load(yarl.URL("/api/missing.yaml"))

    api = OpenAPI.load_sync("http://example.com/api/widgets.yaml", session_factory=session_factory)
    assert api.info.title == "widgets"


def test_loader_json():
    api = OpenAPI.loads(
        "http://example.com/api.json",
        '{"openapi": "3.0.0", "info": {"title": "json", "version": "1"}, "paths": {}}',
        FileSystemLoader(FIXTURES),
    )
    assert api.info.title == "json"
    assert list(api.endpoints()) == []


def test_loader_decode():
    assert FileSystemLoader.decode("ä".encode("utf-8")) == "ä"
    with pytest.raises(ValueError):
        FileSystemLoader.decode(b"\xff\xfe")
