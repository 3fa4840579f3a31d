import json
from typing import Any, Optional

from .v30 import Schema


def _is_number(value: Any) -> bool:
    # bool is an int subclass, json true is not a number
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _enum_value(value: Any) -> str:
    return value if isinstance(value, str) else json.dumps(value)


def validate_property(name: str, value: Any, schema: Schema) -> Optional[str]:
    """
    check a decoded value against the Schema of the property

    the first failing rule is reported, presence is checked by the caller

    :param name: the property name, used in the message
    :param value: the decoded value, None for null
    :param schema: the resolved Schema of the property
    :return: the violation, None if the value is valid
    """
    if value is None:
        if schema.nullable:
            return None
        return f"property '{name}' must not be null"

    type_ = schema.type
    if type_ == "string":
        if not isinstance(value, str):
            return f"property '{name}' must be a string"
        if schema.minLength is not None and len(value) < schema.minLength:
            return f"property '{name}' must be at least {schema.minLength} characters long"
        if schema.maxLength is not None and len(value) > schema.maxLength:
            return f"property '{name}' must be at most {schema.maxLength} characters long"
        if schema.enum is not None:
            allowed = [_enum_value(i) for i in schema.enum]
            if value not in allowed:
                return f"property '{name}' must be one of {', '.join(allowed)}"
    elif type_ in ("integer", "number"):
        if not _is_number(value):
            return f"property '{name}' must be a number"
    elif type_ == "boolean":
        if not isinstance(value, bool):
            return f"property '{name}' must be a boolean"
    elif type_ == "array":
        if not isinstance(value, (list, tuple)):
            return f"property '{name}' must be an array"
        if schema.minItems is not None and len(value) < schema.minItems:
            return f"property '{name}' must have at least {schema.minItems} items"
    return None
