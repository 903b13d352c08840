import pytest

from core.schema import (
    EMPTY,
    ObjectSchema,
    SchemaField,
    anything,
    boolean,
    number,
    obj,
    optional,
    required,
    string,
)

TASK = obj(
    "task",
    required("task", string("Task description")),
    required("status", string("Task status")),
    optional("priority", number("1-5")),
)


def test_primitive_kinds():
    assert string().validate("x")
    assert number().validate(3)
    assert number().validate(2.5)
    assert boolean().validate(False)

    assert not string().validate(3)
    assert not boolean().validate("true")


def test_bool_is_not_a_number():
    result = number().validate(True)
    assert not result
    assert result.failures[0].reason == "expected number, got boolean"


def test_missing_required_fields_are_all_reported():
    result = TASK.validate({})
    assert not result.ok
    assert result.missing_fields() == ["task", "status"]


def test_optional_field_checked_only_when_present():
    assert TASK.validate({"task": "a", "status": "todo"})
    assert TASK.validate({"task": "a", "status": "todo", "priority": None})

    result = TASK.validate({"task": "a", "status": "todo", "priority": "high"})
    assert [(f.path, f.reason) for f in result.failures] == [("priority", "expected number, got string")]


def test_required_null_is_a_kind_mismatch():
    result = TASK.validate({"task": None, "status": "todo"})
    assert [str(f) for f in result.failures] == ["task: expected string, got null"]


def test_extra_fields_are_ignored():
    assert TASK.validate({"task": "a", "status": "todo", "assignee": "sam", "tags": [1, 2]})


def test_empty_object_accepts_any_mapping():
    assert EMPTY.validate({})
    assert EMPTY.validate({"unexpected": True})
    assert not EMPTY.validate("not an object")


def test_nested_paths_are_dotted():
    schema = obj("", required("owner", obj("", required("email", string()))))
    result = schema.validate({"owner": {"email": 42}})
    assert [f.path for f in result.failures] == ["owner.email"]

    result = schema.validate({"owner": "sam"})
    assert result.failures[0].path == "owner"
    assert result.failures[0].reason == "expected object, got string"


def test_root_failure_path():
    result = TASK.validate(["task"])
    assert result.failures[0].path == ""
    assert str(result.failures[0]) == "<root>: expected object, got array"


def test_validation_is_idempotent():
    value = {"task": 1}
    assert TASK.validate(value) == TASK.validate(value)


def test_descriptions_do_not_affect_validation():
    a = obj("one", required("x", string("first description")))
    b = obj("two", required("x", string("another description")))
    for value in ({"x": "ok"}, {"x": 1}, {}):
        assert a.validate(value) == b.validate(value)


def test_anything_accepts_everything():
    for value in (None, 1, "x", [], {"a": 1}):
        assert anything().validate(value)


def test_duplicate_field_names_rejected():
    with pytest.raises(ValueError):
        ObjectSchema(fields=(SchemaField("a", string()), SchemaField("a", number())))


def test_unknown_primitive_kind_rejected():
    from core.schema import PrimitiveSchema

    with pytest.raises(ValueError):
        PrimitiveSchema("integer")


def test_prune_drops_undeclared_and_null_optional_fields():
    pruned = TASK.prune({"task": "a", "status": "todo", "priority": None, "extra": 1})
    assert pruned == {"task": "a", "status": "todo"}


def test_to_json_schema():
    assert TASK.to_json_schema() == {
        "type": "object",
        "properties": {
            "task": {"type": "string", "description": "Task description"},
            "status": {"type": "string", "description": "Task status"},
            "priority": {"type": "number", "description": "1-5"},
        },
        "required": ["task", "status"],
        "description": "task",
    }
    assert EMPTY.is_empty
    assert not TASK.is_empty


def test_describe():
    assert TASK.validate({"task": "a", "status": "b"}).describe() == "valid"
    assert TASK.validate({"task": "a"}).describe() == "status: field is required"
