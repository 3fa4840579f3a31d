from .general import ExternalDocumentation, Example, Reference
from .info import Contact, License, Info, Tag
from .media import MediaType, Encoding
from .parameter import Parameter, Header
from .paths import RequestBody, Response, Operation, PathItem, Paths, Callback
from .components import Components
from .root import Root
from .schemas import Schema, Discriminator, XML
from .security import SecurityScheme, SecurityRequirement
from .servers import Server, ServerVariable
