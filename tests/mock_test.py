import pytest

from mockapi3 import (
    IncomingRequest,
    Responder,
    MockResponse,
    OperationNotImplementedError,
    RecordNotFoundError,
    RequestBodyError,
)


def request(method, path, body=b"", content_type="application/json", **path_params):
    headers = {"Content-Type": content_type} if content_type else {}
    return IncomingRequest(method, path, headers=headers, path_params=path_params, body=body)


@pytest.fixture
def responder(store):
    yield Responder(store)


def test_mock_crud(widgets, responder):
    post = widgets.lookup("/widgets", "post")
    get = widgets.lookup("/widgets/{id}", "get")
    put = widgets.lookup("/widgets/{id}", "put")
    patch = widgets.lookup("/widgets/{id}", "patch")
    delete = widgets.lookup("/widgets/{id}", "delete")
    list_ = widgets.lookup("/widgets", "get")

    assert responder.respond(list_, request("GET", "/widgets")) == MockResponse(200, [])

    r = responder.respond(post, request("POST", "/widgets", b'{"name": "gear"}'))
    assert r == MockResponse(201, {"name": "gear", "id": 1})

    r = responder.respond(post, request("POST", "/widgets"), {"name": "cog"})
    assert r == MockResponse(201, {"name": "cog", "id": 2})

    r = responder.respond(get, request("GET", "/widgets/1", id="1"))
    assert r == MockResponse(200, {"name": "gear", "id": 1})

    r = responder.respond(put, request("PUT", "/widgets/1", b'{"color": "red"}', id="1"))
    assert r == MockResponse(200, {"name": "gear", "color": "red", "id": 1})

    r = responder.respond(patch, request("PATCH", "/widgets/2", b'{"id": 5, "size": 3}', id="2"))
    assert r == MockResponse(200, {"name": "cog", "size": 3, "id": 2})

    assert responder.respond(delete, request("DELETE", "/widgets/1", id="1")) == MockResponse(204)

    r = responder.respond(list_, request("GET", "/widgets"))
    assert r == MockResponse(200, [{"name": "cog", "size": 3, "id": 2}])


def test_mock_not_found(widgets, responder):
    for method in ["get", "put", "patch", "delete"]:
        endpoint = widgets.lookup("/widgets/{id}", method)
        with pytest.raises(RecordNotFoundError):
            responder.respond(endpoint, request(method.upper(), "/widgets/7", b"{}", id="7"))

    with pytest.raises(RecordNotFoundError):
        responder.respond(widgets.lookup("/widgets/{id}", "get"), request("GET", "/widgets/abc", id="abc"))


def test_mock_post_body(widgets, responder):
    post = widgets.lookup("/widgets", "post")

    assert responder.respond(post, request("POST", "/widgets", content_type=None)) == MockResponse(201, {"id": 1})

    r = responder.respond(post, request("POST", "/widgets", b"name: gear\n", "application/yaml"))
    assert r.data == {"name": "gear", "id": 2}

    r = responder.respond(post, request("POST", "/widgets", b'{"name": "cog"}', content_type=None))
    assert r.data == {"name": "cog", "id": 3}

    with pytest.raises(RequestBodyError, match="must be an object"):
        responder.respond(post, request("POST", "/widgets", b"[1, 2]"))

    with pytest.raises(RequestBodyError, match="invalid body"):
        responder.respond(post, request("POST", "/widgets", b"{"))

    with pytest.raises(RequestBodyError, match="can not store a text/plain body"):
        responder.respond(post, request("POST", "/widgets", b"gear", "text/plain"))


def test_mock_not_implemented(widgets, responder):
    item = widgets.lookup("/items/{item-id}", "head")
    with pytest.raises(OperationNotImplementedError) as e:
        responder.respond(item, request("HEAD", "/items/1", **{"item-id": "1"}))
    assert e.value.status_code == 501
    assert e.value.message == "HEAD /items/{item-id} is not implemented"
    assert (e.value.method, e.value.path) == ("head", "/items/1")


def test_mock_collection_methods(with_widgets, store):
    """
    put & delete without an identifier are not implemented
    """
    from mockapi3 import OpenAPI

    item = with_widgets["paths"]["/widgets"]
    item["put"] = {"responses": {"200": {"description": "replaced"}}}
    item["delete"] = {"responses": {"204": {"description": "deleted"}}}
    api = OpenAPI("/", with_widgets)
    responder = Responder(store)

    for method in ["put", "delete"]:
        with pytest.raises(OperationNotImplementedError):
            responder.respond(api.lookup("/widgets", method), request(method.upper(), "/widgets", b"{}"))


def test_mock_identifier(widgets):
    get = widgets.lookup("/widgets/{id}", "get")
    assert get.identifier_name == "id"
    assert get.identifier(request("GET", "/widgets/3", id="3")) == 3
    assert get.identifier(request("GET", "/widgets/x", id="x")) == "x"
    assert get.identifier(request("GET", "/widgets/")) is None

    assert widgets.lookup("/widgets", "get").identifier_name is None
    assert widgets.lookup("/items/{item-id}", "get").identifier_name == "item-id"
