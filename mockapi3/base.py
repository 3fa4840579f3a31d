from typing import Optional, Any, Dict
import urllib.parse

from pydantic import BaseModel, Field, RootModel, model_validator

from .errors import ReferenceResolutionError

HTTP_METHODS = frozenset(["get", "delete", "head", "options", "post", "put", "patch", "trace"])


class ObjectBase(BaseModel):
    """
    The base class for all schema objects.  Includes helpers for common schema-
    related functions.
    """

    model_config = dict(arbitrary_types_allowed=False, extra="forbid")


class ObjectExtended(ObjectBase):
    extensions: Optional[Any] = Field(default=None)

    @model_validator(mode="before")
    def validate_ObjectExtended_extensions(cls, values):
        """
        collect the specification extensions (x-…) in extensions

        https://github.com/OAI/OpenAPI-Specification/blob/main/versions/3.0.3.md#specification-extensions
        :param values:
        :return: values
        """
        if values is None:
            return None
        if not isinstance(values, dict):
            return values
        e = dict()
        rm = set()
        for k, v in values.items():
            if k.startswith("x-"):
                e[k[2:]] = v
                rm.add(k)
        if len(e):
            values = {k: v for k, v in values.items() if k not in rm}
            if "extensions" in values.keys():
                raise ValueError("extensions")
            values["extensions"] = e

        return values


class PathsBase(ObjectBase):
    paths: Dict[str, Any]
    extensions: Dict[str, Any] = Field(default_factory=dict)

    def __getitem__(self, item):
        return self.paths[item]

    def __contains__(self, item):
        return item in self.paths

    def items(self):
        return self.paths.items()

    def values(self):
        return self.paths.values()


class ReferenceBase:
    pass


def deref(node):
    """
    follow a resolved Reference to its target

    :param node: any document node, None included
    :return: the node itself unless it is a Reference
    """
    while isinstance(node, ReferenceBase):
        node = node.target
    return node


class JSONPointer:
    @staticmethod
    def decode(part: str) -> str:
        """
        https://datatracker.ietf.org/doc/html/rfc6901
        """
        part = urllib.parse.unquote(part)
        return part.replace("~1", "/").replace("~0", "~")


class RootBase:
    @staticmethod
    def resolve(root: "RootBase", obj) -> None:
        """
        walk the document tree, assign each Reference its target

        References are not followed while walking, so cyclic schema graphs terminate.
        """
        if isinstance(obj, ReferenceBase):
            obj._target = root.resolve_jr(obj)
        elif isinstance(obj, PathsBase):
            RootBase.resolve(root, obj.paths)
        elif isinstance(obj, RootModel):
            RootBase.resolve(root, obj.root)
        elif isinstance(obj, ObjectBase):
            for slot in obj.model_fields_set:
                value = getattr(obj, slot)
                if value is None or isinstance(value, (str, int, float, bool)):
                    continue
                RootBase.resolve(root, value)
        elif isinstance(obj, dict):
            for v in obj.values():
                RootBase.resolve(root, v)
        elif isinstance(obj, list):
            for item in obj:
                RootBase.resolve(root, item)

    def _resolve_references(self) -> None:
        """
        Resolves all reference objects below this object.
        """
        RootBase.resolve(self, self)

    def resolve_jr(self, value: ReferenceBase):
        """
        Resolve a local JSON Reference in this document, following chained references

        :param value: the Reference
        :return: the node referenced
        """
        url, _, jp = value.ref.partition("#")
        if url != "":
            raise ReferenceResolutionError(f"Reference {value.ref} to an external document is not supported")

        seen = {value.ref}
        node = self.resolve_jp(jp)
        while isinstance(node, ReferenceBase):
            if node.ref in seen:
                raise ReferenceResolutionError(f"Circular Reference {value.ref}")
            seen.add(node.ref)
            url, _, jp = node.ref.partition("#")
            if url != "":
                raise ReferenceResolutionError(f"Reference {node.ref} to an external document is not supported")
            node = self.resolve_jp(jp)
        return node

    def resolve_jp(self, jp: str):
        """
        Given a $ref path, follows the document tree and returns the given attribute.

        :param jp: The path down the document tree to follow
        :type jp: str /foo/bar

        :returns: The node requested
        :rtype: ObjectBase
        :raises ReferenceResolutionError: if the given path is not valid
        """
        path = jp.split("/")[1:]
        node = self

        for idx, part in enumerate(path, start=1):
            part = JSONPointer.decode(part)

            if isinstance(node, PathsBase):
                node = node.paths
            elif isinstance(node, RootModel):
                node = node.root

            if isinstance(node, dict):
                if part not in node:
                    raise ReferenceResolutionError(f"Invalid path {path[:idx]} in Reference")
                node = node.get(part)
            elif isinstance(node, list):
                try:
                    node = node[int(part)]
                except (ValueError, IndexError):
                    raise ReferenceResolutionError(f"Invalid path {path[:idx]} in Reference")
            elif isinstance(node, ObjectBase):
                name = nameof(node, part)
                if name is None:
                    raise ReferenceResolutionError(f"Invalid path {path[:idx]} in Reference")
                node = getattr(node, name)
            else:
                raise ReferenceResolutionError(f"Invalid node {node} in Reference {path[:idx]}")

        return node


def nameof(obj: ObjectBase, name: str) -> Optional[str]:
    """
    map a document key to the model attribute, honoring aliases like in/schema/$ref
    """
    for attr, info in type(obj).model_fields.items():
        if info.alias == name:
            return attr
    if name in type(obj).model_fields:
        return name
    return None
