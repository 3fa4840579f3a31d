import dataclasses
import logging
import typing
from typing import Any, Dict, Optional

import httpx

from .body import validate_body
from .errors import ParameterMissingError, RequestValidationError, SecurityError
from .openapi import resource_of
from .security import describe, effective_requirements, is_satisfied

if typing.TYPE_CHECKING:
    from .openapi import OpenAPI, Endpoint

BODY_METHODS = frozenset(["post", "put", "patch"])


@dataclasses.dataclass
class IncomingRequest:
    """
    the parts of a http request the validation & mock operate on
    """

    method: str
    path: str
    headers: httpx.Headers = dataclasses.field(default_factory=httpx.Headers)
    query: Dict[str, str] = dataclasses.field(default_factory=dict)
    path_params: Dict[str, str] = dataclasses.field(default_factory=dict)
    cookies: Dict[str, str] = dataclasses.field(default_factory=dict)
    body: bytes = b""

    def __post_init__(self):
        if not isinstance(self.headers, httpx.Headers):
            self.headers = httpx.Headers(self.headers)

    @property
    def content_type(self) -> Optional[str]:
        return self.headers.get("Content-Type")

    @property
    def resource(self) -> str:
        return resource_of(self.path)


class Validator:
    """
    validates requests against the description document

        security -> content type & body -> required parameters

    the first failing step raises
    """

    log = logging.getLogger("mockapi3.validator")

    def __init__(self, api: "OpenAPI"):
        self.api = api

    def validate(self, request: IncomingRequest, endpoint: "Endpoint") -> Any:
        """
        :param request: the request
        :param endpoint: the Endpoint the request was routed to
        :return: the decoded body, if the body was validated
        :raises RequestValidationError: the request is invalid
        """
        try:
            self._validate_security(request, endpoint)
            data = None
            if request.method.lower() in BODY_METHODS:
                data = validate_body(request.body, request.content_type, endpoint.requestBody)
            self._validate_parameters(request, endpoint)
        except RequestValidationError as e:
            for v in getattr(e, "violations", None) or [e.message]:
                self.log.error(f"Violation: request {v}")
            raise
        return data

    def _validate_security(self, request: IncomingRequest, endpoint: "Endpoint") -> None:
        requirements = effective_requirements(endpoint.operation, self.api.security)
        if not is_satisfied(requirements, self.api.security_schemes, request):
            accepted = describe(requirements)
            raise SecurityError(f"No security requirement satisfied (accepts {' or '.join(accepted)})", accepted)

    def _validate_parameters(self, request: IncomingRequest, endpoint: "Endpoint") -> None:
        for parameter in endpoint.parameters:
            if not parameter.required:
                continue
            if not parameter.value_from(request):
                location = parameter.in_.value
                raise ParameterMissingError(
                    f"{location} parameter '{parameter.name}' is required", parameter.name, location
                )
