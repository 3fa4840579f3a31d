import dataclasses
import logging
import typing
from typing import Any, Optional

import yaml

from .body import decode_body, decode_content_type
from .errors import OperationNotImplementedError, RequestBodyError
from .store import Record, Store

if typing.TYPE_CHECKING:
    from .openapi import Endpoint
    from .request import IncomingRequest


@dataclasses.dataclass
class MockResponse:
    status_code: int
    data: Any = None


class Responder:
    """
    CRUD on the Store for validated requests

        GET    /widgets       list
        GET    /widgets/{id}  get
        POST   /widgets       create
        PUT    /widgets/{id}  update (merge)
        PATCH  /widgets/{id}  update (merge)
        DELETE /widgets/{id}  delete
    """

    log = logging.getLogger("mockapi3.server")

    def __init__(self, store: Store):
        self.store = store

    def respond(self, endpoint: "Endpoint", request: "IncomingRequest", data: Optional[Any] = None) -> MockResponse:
        """
        :param endpoint: the Endpoint the request was routed to
        :param request: the validated request
        :param data: the body, if decoded already
        :raises RecordNotFoundError: the identifier is unknown
        :raises OperationNotImplementedError: no mock behaviour for the method & path
        """
        method = endpoint.method
        resource = endpoint.resource
        identifier = endpoint.identifier(request)

        if method == "get":
            if identifier is None:
                return MockResponse(200, self.store.get(resource))
            return MockResponse(200, self.store.find(resource, identifier))

        elif method == "post":
            return MockResponse(201, self.store.create(resource, self._record(request, data)))

        elif method in ("put", "patch") and identifier is not None:
            return MockResponse(200, self.store.update(resource, identifier, self._record(request, data)))

        elif method == "delete" and identifier is not None:
            self.store.delete(resource, identifier)
            return MockResponse(204)

        self.log.warning(f"no mock behaviour for {method.upper()} {request.path}")
        raise OperationNotImplementedError(f"{endpoint} is not implemented", method, request.path)

    def _record(self, request: "IncomingRequest", data: Optional[Any]) -> Record:
        if data is None and request.body:
            data = self._decode(request)
        if data is None:
            data = dict()
        if not isinstance(data, dict):
            raise RequestBodyError("request body must be an object")
        return data

    def _decode(self, request: "IncomingRequest") -> Any:
        media_type, charset = "application/json", "utf-8"
        if request.content_type:
            type_, subtype, params = decode_content_type(request.content_type)
            media_type, charset = f"{type_}/{subtype}", dict(params).get("charset", charset)
        try:
            return decode_body(media_type, request.body, charset)
        except NotImplementedError:
            raise RequestBodyError(f"can not store a {media_type} body")
        except (ValueError, LookupError, yaml.YAMLError) as e:
            raise RequestBodyError(f"invalid body: {e}") from e
