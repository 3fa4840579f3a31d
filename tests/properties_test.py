import pytest

from mockapi3.properties import validate_property
from mockapi3.v30 import Schema


def S(**kwargs) -> Schema:
    return Schema.model_validate(kwargs)


@pytest.mark.parametrize(
    "schema, value, violation",
    [
        (S(type="string"), None, "property 'p' must not be null"),
        (S(type="string", nullable=True), None, None),
        (S(), None, "property 'p' must not be null"),
        (S(type="string"), "abc", None),
        (S(type="string"), 5, "property 'p' must be a string"),
        (S(type="string", minLength=3), "ab", "property 'p' must be at least 3 characters long"),
        (S(type="string", minLength=3), "abc", None),
        (S(type="string", maxLength=3), "abcd", "property 'p' must be at most 3 characters long"),
        (S(type="string", enum=["red", "green"]), "red", None),
        (S(type="string", enum=["red", "green"]), "blue", "property 'p' must be one of red, green"),
        (S(type="string", enum=[1, True]), "1", None),
        (S(type="string", enum=[1, True]), "true", None),
        (S(type="string", minLength=5, enum=["red"]), "red", "property 'p' must be at least 5 characters long"),
        (S(type="integer"), 5, None),
        (S(type="integer"), 5.0, None),
        (S(type="number"), 5, None),
        (S(type="number"), 5.5, None),
        (S(type="number"), "5", "property 'p' must be a number"),
        (S(type="integer"), True, "property 'p' must be a number"),
        (S(type="boolean"), False, None),
        (S(type="boolean"), 0, "property 'p' must be a boolean"),
        (S(type="boolean"), "true", "property 'p' must be a boolean"),
        (S(type="array"), [], None),
        (S(type="array"), "abc", "property 'p' must be an array"),
        (S(type="array"), {"a": 1}, "property 'p' must be an array"),
        (S(type="array", minItems=2), [1], "property 'p' must have at least 2 items"),
        (S(type="array", minItems=2), [1, 2], None),
        (S(type="object"), {"a": 1}, None),
        (S(type="object"), "anything", None),
        (S(), 42, None),
    ],
)
def test_validate_property(schema, value, violation):
    assert validate_property("p", value, schema) == violation
