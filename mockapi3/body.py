import json
import logging
import urllib.parse
from email.message import Message
from typing import Any, Dict, List, Optional, Tuple

import yaml

from .base import deref
from .constraints import resolve_constraints
from .errors import ContentTypeError, RequestBodyError, SchemaValidationError
from .loader import YAML12Loader
from .properties import validate_property
from .v30 import MediaType, RequestBody, Schema

log = logging.getLogger("mockapi3.negotiator")

YAML_MEDIA_TYPES = frozenset(["application/yaml", "application/x-yaml", "text/yaml"])
FORM_MEDIA_TYPE = "application/x-www-form-urlencoded"


def decode_content_type(value: str) -> Tuple[str, str, List[Tuple[str, str]]]:
    """
    split a Content-Type header value

    application/json; charset=utf-8 -> ('application', 'json', [('charset', 'utf-8')])
    """
    m = Message()
    m.add_header("content-type", value)
    ct, *params = m.get_params()

    type_, _, subtype = ct[0].lower().partition("/")
    return type_, subtype, params


def negotiate(content_type: str, content: Dict[str, MediaType]) -> Tuple[str, MediaType]:
    """
    match the base media type against the declared media types, exact before type/* before */*

    :raises ContentTypeError: none matches
    """
    type_, subtype, _ = decode_content_type(content_type)
    media_type = f"{type_}/{subtype}"
    declared = {k.split(";")[0].strip().lower(): (k, v) for k, v in content.items()}

    for candidate in (media_type, f"{type_}/*", "*/*"):
        if candidate in declared:
            log.debug(f"Content-Type {media_type} matches {declared[candidate][0]}")
            return media_type, declared[candidate][1]

    raise ContentTypeError(
        f"unsupported media type {media_type}, accepted: {', '.join(sorted(content.keys()))}",
        content_type,
        sorted(content.keys()),
    )


def _coerce(value: str, schema: Optional[Schema]) -> Any:
    # urlencoded data is text, convert what the schema declares as scalar
    if schema is None:
        return value
    try:
        if schema.type == "integer":
            return int(value)
        elif schema.type == "number":
            return float(value)
        elif schema.type == "boolean" and value in ("true", "false"):
            return value == "true"
    except ValueError:
        pass
    return value


def _reject_constant(value: str) -> Any:
    raise ValueError(f"{value} is not a number")


def _as_json(data: Any) -> Any:
    # the decoded body is stored and returned as json
    try:
        return json.loads(json.dumps(data, allow_nan=False))
    except (TypeError, ValueError, RecursionError) as e:
        raise ValueError(f"not representable as json: {e}") from e


def decode_body(media_type: str, body: bytes, charset: str = "utf-8", schema: Optional[Schema] = None) -> Any:
    """
    decode the body for the media type

    yaml bodies use the YAML 1.2 core schema, timestamps stay strings;
    NaN, Infinity, binary and set values are rejected

    :raises ValueError: the body can not be decoded
    :raises NotImplementedError: there is no decoder for the media type
    """
    text = body.decode(charset)
    if media_type == "application/json" or media_type.endswith("+json"):
        return json.loads(text, parse_constant=_reject_constant)
    elif media_type in YAML_MEDIA_TYPES:
        return _as_json(yaml.load(text, Loader=YAML12Loader))
    elif media_type == FORM_MEDIA_TYPE:
        properties = resolve_constraints(schema).properties
        data: Dict[str, Any] = dict()
        for name, value in urllib.parse.parse_qsl(text, keep_blank_values=True):
            p = properties.get(name)
            if p is not None and p.type == "array":
                data.setdefault(name, []).append(_coerce(value, deref(p.items)))
            else:
                data[name] = _coerce(value, p)
        return data
    raise NotImplementedError(media_type)


def violations_of(data: Any, schema: Schema) -> List[str]:
    """
    all violations of the decoded body, required fields first
    """
    schema = deref(schema)
    constraints = resolve_constraints(schema)
    if not isinstance(data, dict):
        if constraints.required or constraints.properties:
            return ["request body must be an object"]
        if (v := validate_property("body", data, schema)) is not None:
            return [v]
        return []

    violations = []
    for name in constraints.required:
        if name not in data:
            violations.append(f"request body must have required property '{name}'")

    for name, p in constraints.properties.items():
        if name not in data:
            continue
        if (v := validate_property(name, data[name], p)) is not None:
            violations.append(v)
    return violations


def validate_body(body: bytes, content_type: Optional[str], request_body: Optional[RequestBody]) -> Any:
    """
    negotiate the content type and validate the body against the schema of the media type

    :param body: the raw body
    :param content_type: the Content-Type header value, None if absent
    :param request_body: the RequestBody of the operation
    :return: the decoded body, None if it was not decoded
    :raises RequestBodyError: body required but missing, body can not be decoded
    :raises ContentTypeError: Content-Type missing or not accepted
    :raises SchemaValidationError: the body violates the schema
    """
    if request_body is None:
        return None

    if not body:
        if request_body.required:
            raise RequestBodyError("request body required")
        return None

    if not request_body.content:
        return None

    if not content_type:
        raise ContentTypeError(
            f"content type required, accepted: {', '.join(sorted(request_body.content.keys()))}",
            None,
            sorted(request_body.content.keys()),
        )

    media_type, media = negotiate(content_type, request_body.content)
    if (schema := deref(media.schema_)) is None:
        return None

    _, _, params = decode_content_type(content_type)
    charset = dict(params).get("charset", "utf-8")
    try:
        data = decode_body(media_type, body, charset, schema)
    except NotImplementedError:
        log.debug(f"no decoder for {media_type}, body not validated")
        return None
    except (ValueError, LookupError, yaml.YAMLError) as e:
        raise RequestBodyError(f"invalid body: {e}") from e

    if violations := violations_of(data, schema):
        raise SchemaValidationError("request body does not match the schema", violations)
    return data
