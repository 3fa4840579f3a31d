import enum
import typing
from typing import Union, Optional, Dict, Any

from pydantic import Field, model_validator

from ..base import ObjectExtended

from .general import Example, Reference
from .media import MediaType
from .schemas import Schema

if typing.TYPE_CHECKING:
    from ..request import IncomingRequest


class ParameterBase(ObjectExtended):
    """
    A `Parameter Object`_ defines a single operation parameter.

    .. _Parameter Object: https://github.com/OAI/OpenAPI-Specification/blob/main/versions/3.0.3.md#parameter-object
    """

    description: Optional[str] = Field(default=None)
    required: Optional[bool] = Field(default=None)
    deprecated: Optional[bool] = Field(default=None)
    allowEmptyValue: Optional[bool] = Field(default=None)

    style: Optional[str] = Field(default=None)
    explode: Optional[bool] = Field(default=None)
    allowReserved: Optional[bool] = Field(default=None)
    schema_: Optional[Union[Schema, Reference]] = Field(default=None, alias="schema")
    example: Optional[Any] = Field(default=None)
    examples: Dict[str, Union[Example, Reference]] = Field(default_factory=dict)

    content: Dict[str, MediaType] = Field(default_factory=dict)


class _In(str, enum.Enum):
    query = "query"
    header = "header"
    path = "path"
    cookie = "cookie"


class Parameter(ParameterBase):
    name: str = Field()
    in_: _In = Field(alias="in")

    @model_validator(mode="after")
    def validate_Parameter(cls, p: "ParameterBase"):
        assert p.in_ != "path" or p.required is True, "Parameter '%s' must be required since it is in the path" % p.name
        return p

    def value_from(self, request: "IncomingRequest") -> Optional[str]:
        """
        lookup the parameter value in the request location the parameter is declared for
        """
        if self.in_ == _In.query:
            return request.query.get(self.name)
        elif self.in_ == _In.path:
            return request.path_params.get(self.name)
        elif self.in_ == _In.header:
            return request.headers.get(self.name)
        elif self.in_ == _In.cookie:
            return request.cookies.get(self.name)
        return None


class Header(ParameterBase):
    """

    .. _HeaderObject: https://github.com/OAI/OpenAPI-Specification/blob/main/versions/3.0.3.md#header-object
    """
