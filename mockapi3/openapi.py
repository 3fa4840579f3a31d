import dataclasses
import logging
import re
import typing
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional, Tuple, Union, Any, cast

import httpx
import yarl

from . import v30
from . import log
from .base import HTTP_METHODS, deref
from .errors import SpecError
from .loader import Loader, NullLoader

if typing.TYPE_CHECKING:
    from .request import IncomingRequest


def resource_of(path: str) -> str:
    """
    the resource name of a path is its first segment

    /widgets/{id} -> widgets
    """
    return path.strip("/").split("/")[0]


@dataclasses.dataclass(frozen=True)
class Endpoint:
    """
    an Operation bound to its (path, method) with the parameters of the PathItem merged in
    """

    path: str
    method: str
    operation: v30.Operation
    parameters: Tuple[v30.Parameter, ...]
    resource: str

    @property
    def operationId(self) -> Optional[str]:
        return self.operation.operationId

    @property
    def requestBody(self) -> Optional[v30.RequestBody]:
        return deref(self.operation.requestBody)

    @property
    def identifier_name(self) -> Optional[str]:
        """
        the path parameter addressing a single record: 'id' or the last path parameter
        """
        names = re.findall(r"{([^{}]+)}", self.path)
        if not names:
            return None
        if "id" in names:
            return "id"
        return names[-1]

    def identifier(self, request: "IncomingRequest") -> Union[int, str, None]:
        """
        the record identifier of the request

        :return: None for collection paths, the integer id, or the raw value if it is not an integer
        """
        if (name := self.identifier_name) is None:
            return None
        value = request.path_params.get(name)
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            return value

    def __str__(self):
        return f"{self.method.upper()} {self.path}"


class OpenAPI:
    """
    The description document, parsed, resolved and indexed.

    Built once at start-up and read-only afterwards.
    """

    log = logging.getLogger("mockapi3.OpenAPI")
    _root: v30.Root

    @property
    def paths(self) -> v30.Paths:
        return self._root.paths

    @property
    def components(self) -> v30.Components:
        return self._root.components

    @property
    def info(self) -> v30.Info:
        return self._root.info

    @property
    def openapi(self) -> str:
        return self._root.openapi

    @property
    def security(self) -> Optional[List[v30.SecurityRequirement]]:
        """
        the document-wide default security requirements
        """
        return self._root.security

    @property
    def security_schemes(self) -> Dict[str, v30.SecurityScheme]:
        if self._root.components is None:
            return dict()
        return {name: deref(scheme) for name, scheme in self._root.components.securitySchemes.items()}

    @classmethod
    def load_sync(
        cls,
        url: str,
        session_factory: Callable[..., httpx.Client] = httpx.Client,
    ) -> "OpenAPI":
        """
        Create an OpenAPI object from a description document served via http/s.

        :param url: the url of the description document
        :param session_factory: used to create the session for http/s io
        """
        with session_factory() as client:
            resp = client.get(url)
        if resp.is_redirect:
            raise ValueError(f'Redirect to {resp.headers.get("Location","")}')
        resp.raise_for_status()
        return cls.loads(url, resp.text)

    @classmethod
    def load_file(
        cls,
        url: str,
        path: Union[str, Path, yarl.URL],
        loader: Loader,
    ) -> "OpenAPI":
        """
        Create an OpenAPI object from a description document file.

        :param url: the fictive url of the description document
        :param path: description document location
        :param loader: the backend to access the description document
        """
        assert loader
        if not isinstance(path, yarl.URL):
            path = yarl.URL(str(path))
        data = loader.load(path)
        return cls.loads(url, data, loader)

    @classmethod
    def loads(
        cls,
        url: str,
        data: str,
        loader: Optional[Loader] = None,
    ) -> "OpenAPI":
        """

        :param url: the url of the description document
        :param data: description document
        :param loader: the Loader used to parse the description document
        """
        if loader is None:
            loader = NullLoader()
        document = loader.parse(yarl.URL(url), data)
        return cls(url, document, loader)

    @classmethod
    def _parse_obj(cls, document: Dict[str, Any]) -> v30.Root:
        if not isinstance(document, dict):
            raise SpecError("the description document is not a mapping")
        if (version := document.get("openapi", None)) is not None:
            v = list(map(int, str(version).split(".")[:2]))
            if v[0] == 3:
                if v[1] == 0:
                    return v30.Root.model_validate(document)
                else:
                    raise SpecError(f"openapi version 3.{v[1]} not supported")
            else:
                raise SpecError(f"openapi major version {version} not supported")

        if (version := document.get("swagger", None)) is not None:
            raise SpecError(f"swagger version {version} not supported")
        else:
            raise SpecError("missing openapi field")

    def __init__(self, url: str, document: Dict[str, Any], loader: Optional[Loader] = None) -> None:
        """
        Creates a new OpenAPI document from a loaded spec file.

        :param url: the url of the description document
        :param document: The raw OpenAPI document loaded into python
        :param loader: the Loader for the description document
        """
        self._base_url: yarl.URL = yarl.URL(url)

        self.loader: Optional[Loader] = loader

        log.init()

        self._root = self._parse_obj(document)
        self._root._resolve_references()
        self._endpoints: Dict[Tuple[str, str], Endpoint] = self._init_endpoints()

    def _init_endpoints(self) -> Dict[Tuple[str, str], Endpoint]:
        endpoints = dict()
        for path, item in self.paths.items():
            if item.ref:
                raise SpecError(f"PathItem $ref {item.ref} is not supported", item)

            for method in sorted(item.model_fields_set & HTTP_METHODS):
                op = cast(v30.Operation, getattr(item, method))
                op._validate_path_parameters(item, path, method)

                # operation parameters override the path item ones (name, in)
                parameters = {(p.name, p.in_): p for p in map(deref, item.parameters)}
                parameters.update({(p.name, p.in_): p for p in map(deref, op.parameters)})

                endpoints[(path, method)] = Endpoint(
                    path=path,
                    method=method,
                    operation=op,
                    parameters=tuple(parameters.values()),
                    resource=resource_of(path),
                )
        self.log.debug(f"{len(endpoints)} endpoints in {self._base_url}")
        return endpoints

    def endpoints(self) -> Iterator[Endpoint]:
        """
        all endpoints, sorted by path & method
        """
        for key in sorted(self._endpoints.keys()):
            yield self._endpoints[key]

    def lookup(self, path: str, method: str) -> Endpoint:
        """
        the Endpoint for a path template & method

        :param path: the path template as in the description document e.g. /widgets/{id}
        :param method: the http method, case does not matter
        :raises KeyError: if there is no such operation
        """
        return self._endpoints[(path, method.lower())]
