from typing import Dict, FrozenSet, NamedTuple, Optional, Tuple, Union

from .base import deref
from .v30 import Schema, Reference


class ResolvedConstraints(NamedTuple):
    """
    the flattened view of a Schema and its compositions

    required: names in order of appearance, without duplicates
    properties: name -> Schema, References are resolved
    """

    required: Tuple[str, ...]
    properties: Dict[str, Schema]


def resolve_constraints(schema: Optional[Union[Schema, Reference]]) -> ResolvedConstraints:
    """
    flatten required & properties of a Schema

    allOf - every branch applies: required & properties are merged
    oneOf/anyOf - only one branch has to match: properties not defined yet are merged, required never

    :param schema: the Schema, a Reference to a Schema, or None
    :return: the ResolvedConstraints
    """
    return _resolve(deref(schema), frozenset())


def _resolve(schema: Optional[Schema], visiting: FrozenSet[int]) -> ResolvedConstraints:
    if schema is None or id(schema) in visiting:
        return ResolvedConstraints((), {})
    visiting = visiting | {id(schema)}

    required: Dict[str, None] = dict.fromkeys(schema.required or [])
    properties: Dict[str, Schema] = {name: deref(p) for name, p in (schema.properties or {}).items()}

    for sub in schema.allOf or []:
        r = _resolve(deref(sub), visiting)
        required.update(dict.fromkeys(r.required))
        for name, p in r.properties.items():
            properties.setdefault(name, p)

    for sub in (schema.oneOf or []) + (schema.anyOf or []):
        r = _resolve(deref(sub), visiting)
        for name, p in r.properties.items():
            properties.setdefault(name, p)

    return ResolvedConstraints(tuple(required), properties)
