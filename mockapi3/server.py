import logging
import re
from typing import Dict, Tuple

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from starlette.concurrency import run_in_threadpool

from .errors import MockError
from .mock import MockResponse, Responder
from .openapi import OpenAPI, Endpoint
from .request import IncomingRequest, Validator
from .store import Store

log = logging.getLogger("mockapi3.server")

_PARAMETER = re.compile(r"{([^{}]+)}")
_IDENTIFIER = re.compile(r"[a-zA-Z_][a-zA-Z0-9_]*")


def route_path(path: str) -> Tuple[str, Dict[str, str]]:
    """
    starlette path parameters have to be identifiers, alias the others

    /items/{item-id} -> ('/items/{_p0}', {'_p0': 'item-id'})
    """
    aliases: Dict[str, str] = dict()

    def replace(m: re.Match) -> str:
        name = m.group(1)
        if _IDENTIFIER.fullmatch(name):
            return m.group(0)
        alias = f"_p{len(aliases)}"
        aliases[alias] = name
        return f"{{{alias}}}"

    return _PARAMETER.sub(replace, path), aliases


def _dispatch(validator: Validator, responder: Responder, endpoint: Endpoint, request: IncomingRequest) -> MockResponse:
    data = validator.validate(request, endpoint)
    return responder.respond(endpoint, request, data)


def _route(endpoint: Endpoint, aliases: Dict[str, str], validator: Validator, responder: Responder):
    async def handle(request: Request) -> Response:
        log.info(f"{endpoint.method} {request.url.path} Request received")
        incoming = IncomingRequest(
            method=request.method,
            path=request.url.path,
            headers=request.headers.items(),
            query=dict(request.query_params),
            path_params={aliases.get(k, k): v for k, v in request.path_params.items()},
            cookies=dict(request.cookies),
            body=await request.body(),
        )
        result = await run_in_threadpool(_dispatch, validator, responder, endpoint, incoming)
        log.info(f'> Responding with "{result.status_code}"')
        if result.data is None:
            return Response(status_code=result.status_code)
        return JSONResponse(result.data, status_code=result.status_code)

    handle.__name__ = endpoint.operationId or f"{endpoint.method}_{endpoint.resource}"
    return handle


async def mock_error_handler(request: Request, exc: MockError) -> JSONResponse:
    log.info(f'> Responding with "{exc.status_code}" ({exc.reason})')
    return JSONResponse(exc.to_dict(), status_code=exc.status_code)


def create_app(api: OpenAPI, store: Store) -> FastAPI:
    """
    a FastAPI application serving one route per operation of the description document

    :param api: the description document
    :param store: the records
    """
    app = FastAPI(title=api.info.title, version=api.info.version, openapi_url=None, docs_url=None, redoc_url=None)
    app.state.api = api
    app.state.store = store

    validator = Validator(api)
    responder = Responder(store)

    endpoints = []
    for endpoint in api.endpoints():
        store.ensure(endpoint.resource)
        path, aliases = route_path(endpoint.path)
        app.add_api_route(
            path,
            _route(endpoint, aliases, validator, responder),
            methods=[endpoint.method.upper()],
            include_in_schema=False,
        )
        endpoints.append(str(endpoint))

    app.add_exception_handler(MockError, mock_error_handler)

    if endpoints:
        log.info("Available endpoints:")
        for e in sorted(endpoints):
            log.info(f"  {e}")
    return app
