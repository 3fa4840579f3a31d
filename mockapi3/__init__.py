from .version import __version__
from .openapi import OpenAPI, Endpoint
from .loader import FileSystemLoader, WebLoader
from .request import IncomingRequest, Validator
from .mock import MockResponse, Responder
from .store import Store
from .server import create_app
from .errors import (
    SpecError,
    ReferenceResolutionError,
    OperationParameterValidationError,
    MockError,
    RequestValidationError,
    SecurityError,
    ContentTypeError,
    RequestBodyError,
    SchemaValidationError,
    ParameterMissingError,
    RecordNotFoundError,
    OperationNotImplementedError,
)

__all__ = [
    "__version__",
    "OpenAPI",
    "Endpoint",
    "FileSystemLoader",
    "WebLoader",
    "IncomingRequest",
    "Validator",
    "MockResponse",
    "Responder",
    "Store",
    "create_app",
    "SpecError",
    "ReferenceResolutionError",
    "OperationParameterValidationError",
    "MockError",
    "RequestValidationError",
    "SecurityError",
    "ContentTypeError",
    "RequestBodyError",
    "SchemaValidationError",
    "ParameterMissingError",
    "RecordNotFoundError",
    "OperationNotImplementedError",
]
