import typing
from typing import Union, Annotated, Literal

from pydantic import Field, RootModel, constr

from ..base import ObjectExtended

if typing.TYPE_CHECKING:
    from ..request import IncomingRequest

AUTHORIZATION = "Authorization"


class OAuthFlow(ObjectExtended):
    """
    Configuration details for a supported OAuth Flow

    .. here: https://github.com/OAI/OpenAPI-Specification/blob/main/versions/3.0.3.md#oauth-flow-object
    """

    authorizationUrl: str | None = Field(default=None)
    tokenUrl: str | None = Field(default=None)
    refreshUrl: str | None = Field(default=None)
    scopes: dict[str, str] = Field(default_factory=dict)


class OAuthFlows(ObjectExtended):
    """
    Allows configuration of the supported OAuth Flows.

    .. here: https://github.com/OAI/OpenAPI-Specification/blob/main/versions/3.0.3.md#oauth-flows-object
    """

    implicit: OAuthFlow | None = Field(default=None)
    password: OAuthFlow | None = Field(default=None)
    clientCredentials: OAuthFlow | None = Field(default=None)
    authorizationCode: OAuthFlow | None = Field(default=None)


class _SecuritySchemes:
    class _SecurityScheme(ObjectExtended):
        type: Literal["apiKey", "http", "oauth2", "openIdConnect"]
        description: str | None = Field(default=None)

        def validate_authentication_value(self, request: "IncomingRequest") -> bool:
            """
            check the credential artifact of the scheme is present in the request

            oauth2 & openIdConnect tokens can not be verified by a mock - any Authorization header is accepted
            """
            return bool(request.headers.get(AUTHORIZATION))

    class apiKey(_SecurityScheme):
        type: Literal["apiKey"]
        in_: str = Field(alias="in")
        name: str

        def validate_authentication_value(self, request: "IncomingRequest") -> bool:
            if self.in_ == "header":
                value = request.headers.get(self.name)
            elif self.in_ == "query":
                value = request.query.get(self.name)
            elif self.in_ == "cookie":
                value = request.cookies.get(self.name)
            else:
                return False
            return bool(value)

    class http(_SecurityScheme):
        type: Literal["http"]
        scheme_: constr(to_lower=True) = Field(default=None, alias="scheme")  # type: ignore[valid-type]
        bearerFormat: str | None = Field(default=None)

        def validate_authentication_value(self, request: "IncomingRequest") -> bool:
            value = request.headers.get(AUTHORIZATION)
            if not value:
                return False
            if self.scheme_ == "bearer":
                return value[:7].lower() == "bearer "
            return True

    class oauth2(_SecurityScheme):
        type: Literal["oauth2"]
        flows: OAuthFlows

    class openIdConnect(_SecurityScheme):
        type: Literal["openIdConnect"]
        openIdConnectUrl: str


class SecurityScheme(
    RootModel[
        Annotated[
            Union[
                _SecuritySchemes.apiKey, _SecuritySchemes.http, _SecuritySchemes.oauth2, _SecuritySchemes.openIdConnect
            ],
            Field(discriminator="type"),
        ]
    ]
):
    """
    A `Security Scheme`_ defines a security scheme that can be used by the operations.

    .. _Security Scheme: https://github.com/OAI/OpenAPI-Specification/blob/main/versions/3.0.3.md#security-scheme-object
    """

    pass


class SecurityRequirement(RootModel[dict[str, list[str]]]):
    """
    A `SecurityRequirement`_ object describes security schemes for API access.

    .. _SecurityRequirement: https://github.com/OAI/OpenAPI-Specification/blob/main/versions/3.0.3.md#security-requirement-object
    """

    pass
