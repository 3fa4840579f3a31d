from typing import Any, List, Optional, Dict

from pydantic import Field

from ..base import ObjectExtended, RootBase

from .components import Components
from .info import Info, Tag
from .paths import Paths
from .security import SecurityRequirement
from .servers import Server


class Root(ObjectExtended, RootBase):
    """
    This class represents the root of the OpenAPI schema document, as defined
    in `OpenAPI 3.0`_

    .. _OpenAPI 3.0: https://github.com/OAI/OpenAPI-Specification/blob/main/versions/3.0.3.md#openapi-object
    """

    openapi: str = Field(...)
    info: Info = Field(...)
    servers: Optional[List[Server]] = Field(default_factory=list)
    paths: Paths = Field(default_factory=lambda: Paths(paths={}))
    components: Optional[Components] = Field(default_factory=Components)
    security: Optional[List[SecurityRequirement]] = Field(default=None)
    tags: Optional[List[Tag]] = Field(default_factory=list)
    externalDocs: Optional[Dict[Any, Any]] = Field(default_factory=dict)
