from typing import ClassVar, List, Optional, Dict, Any
import dataclasses


class ErrorBase(Exception):
    pass


class SpecError(ErrorBase, ValueError):
    """
    This error class is used when an invalid format is found while parsing an
    object of the description document.
    """

    def __init__(self, message, element=None):
        super().__init__(message)
        self.message = message
        self.element = element


class ReferenceResolutionError(SpecError):
    """
    This error class is used when resolving a reference fails, usually because
    of a malformed path in the reference.
    """

    def __init__(self, message, element=None):
        super().__init__(message, element)
        self.document = None


@dataclasses.dataclass
class OperationParameterValidationError(SpecError):
    """
    The operations parameters do not match the path parameters
    """

    path: str
    method: str
    operationid: Optional[str]
    message: str

    def __str__(self):
        return f"{self.method.upper()} {self.path} ({self.operationid}): {self.message}"


@dataclasses.dataclass(repr=False)
class MockError(ErrorBase):
    """the request can not be served, the status_code tells the client why"""

    message: str

    status_code: ClassVar[int] = 500
    reason: ClassVar[str] = "internal-error"

    def __str__(self):
        return self.message

    def __repr__(self):
        return f"<{self.__class__.__name__} {self.status_code} {self.message}>"

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.reason, "message": self.message}


@dataclasses.dataclass(repr=False)
class RequestValidationError(MockError):
    """the request does not match the description document"""

    status_code: ClassVar[int] = 400
    reason: ClassVar[str] = "bad-request"


@dataclasses.dataclass(repr=False)
class SecurityError(RequestValidationError):
    """no security requirement alternative is satisfied"""

    accepted: List[str]

    status_code: ClassVar[int] = 401
    reason: ClassVar[str] = "unauthorized"


@dataclasses.dataclass(repr=False)
class ContentTypeError(RequestValidationError):
    """the Content-Type is missing or not declared for the operation"""

    content_type: Optional[str]
    accepted: List[str]

    status_code: ClassVar[int] = 415
    reason: ClassVar[str] = "unsupported-media-type"


@dataclasses.dataclass(repr=False)
class RequestBodyError(RequestValidationError):
    """the body is missing or can not be decoded"""


@dataclasses.dataclass(repr=False)
class SchemaValidationError(RequestValidationError):
    """the body violates the schema - all violations are collected"""

    violations: List[str]

    def to_dict(self) -> Dict[str, Any]:
        r = super().to_dict()
        r["violations"] = list(self.violations)
        return r


@dataclasses.dataclass(repr=False)
class ParameterMissingError(RequestValidationError):
    """a required parameter is absent or empty"""

    name: str
    location: str


@dataclasses.dataclass(repr=False)
class RecordNotFoundError(MockError):
    """the record identifier is unknown to the resource"""

    resource: str
    identifier: Any

    status_code: ClassVar[int] = 404
    reason: ClassVar[str] = "not-found"


@dataclasses.dataclass(repr=False)
class OperationNotImplementedError(MockError):
    """there is no mock behaviour for the method"""

    method: str
    path: str

    status_code: ClassVar[int] = 501
    reason: ClassVar[str] = "not-implemented"
