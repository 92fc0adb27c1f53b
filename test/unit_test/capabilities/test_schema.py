"""Unit tests for capability JSON-Schemas and structural validation."""

import pytest

from sparxstar_gluon.capabilities.schema import JsonSchema, parse_schema, validate
from sparxstar_gluon.errors import InvalidSchema

POST_INPUT = {
    "type": "object",
    "properties": {"post_id": {"type": "integer", "description": "The ID of the post to summarize."}},
    "required": ["post_id"],
}


class TestParseSchema:
    def test_parses_nested_object(self):
        schema = parse_schema(POST_INPUT)

        assert isinstance(schema, JsonSchema)
        assert schema.type == "object"
        assert schema.properties["post_id"]["type"] == "integer"
        assert schema.required == ["post_id"]

    def test_none_passes_through(self):
        assert parse_schema(None) is None

    def test_parsed_schema_passes_through(self):
        schema = parse_schema({"type": "integer"})
        assert parse_schema(schema) is schema

    def test_round_trips_keywords(self):
        raw = {"type": "string", "enum": ["a", "b"], "description": "letter"}

        assert parse_schema(raw).to_json_schema() == raw

    def test_published_mapping_is_a_copy(self):
        raw = {"type": "object", "properties": {"a": {"type": "string"}}}
        schema = parse_schema(raw)

        schema.to_json_schema()["properties"]["a"]["type"] = "integer"
        raw["properties"]["a"]["type"] = "boolean"

        assert schema.properties["a"]["type"] == "string"

    @pytest.mark.parametrize(
        "raw",
        [
            {},
            {"type": "object", "properties": {"note": {"type": ["string", "null"]}}},
            {"type": "object", "properties": {"x": {"description": "free-form"}}},
            {"anyOf": [{"type": "string"}, {"type": "integer"}]},
            {"type": "object", "additionalProperties": False},
        ],
    )
    def test_accepts_valid_json_schemas(self, raw):
        assert parse_schema(raw).to_json_schema() == raw

    @pytest.mark.parametrize(
        "raw",
        [
            {"type": "integerish"},
            {"type": "array", "items": {"type": "nope"}},
            {"type": "object", "required": "post_id"},
            "object",
        ],
    )
    def test_invalid_schemas_raise(self, raw):
        with pytest.raises(InvalidSchema):
            parse_schema(raw)


class TestValidate:
    def test_valid_input(self):
        assert validate(parse_schema(POST_INPUT), {"post_id": 123}) == []

    def test_missing_required_property(self):
        [violation] = validate(parse_schema(POST_INPUT), {})

        assert violation.field == "post_id"
        assert violation.message == "'post_id' is a required property"

    def test_wrong_property_type(self):
        [violation] = validate(parse_schema(POST_INPUT), {"post_id": "abc"})

        assert violation.field == "post_id"
        assert violation.message == "'abc' is not of type 'integer'"

    @pytest.mark.parametrize("value,ok", [(1, True), (1.0, True), (1.5, False), (True, False), (None, False)])
    def test_integer_rules(self, value, ok):
        assert (validate(parse_schema({"type": "integer"}), value) == []) is ok

    def test_number_accepts_integers_but_not_booleans(self):
        schema = parse_schema({"type": "number"})

        assert validate(schema, 3) == []
        assert validate(schema, 2.5) == []
        assert validate(schema, False) != []

    def test_root_type_mismatch_is_reported_at_root(self):
        [violation] = validate(parse_schema(POST_INPUT), [1, 2])

        assert violation.field == ""
        assert str(violation) == "<root>: [1, 2] is not of type 'object'"

    def test_nested_array_items(self):
        schema = parse_schema(
            {
                "type": "object",
                "properties": {"tags": {"type": "array", "items": {"type": "string"}}},
            }
        )

        [violation] = validate(schema, {"tags": ["a", 2]})

        assert violation.field == "tags[1]"

    def test_tuples_count_as_arrays(self):
        schema = parse_schema({"type": "array", "items": {"type": "integer"}})

        assert validate(schema, (1, 2)) == []

    def test_nullable_union_type(self):
        schema = parse_schema({"type": "object", "properties": {"note": {"type": ["string", "null"]}}})

        assert validate(schema, {"note": None}) == []
        assert validate(schema, {"note": "hi"}) == []
        assert [v.field for v in validate(schema, {"note": 3})] == ["note"]

    def test_untyped_property_accepts_anything(self):
        schema = parse_schema({"type": "object", "properties": {"x": {"description": "free-form"}}})

        assert validate(schema, {"x": [1, {"y": None}]}) == []

    def test_any_of(self):
        schema = parse_schema({"anyOf": [{"type": "string"}, {"type": "integer"}]})

        assert validate(schema, "a") == []
        assert validate(schema, 1) == []
        [violation] = validate(schema, 1.5)
        assert violation.field == ""

    def test_additional_properties_false(self):
        schema = parse_schema({"type": "object", "properties": {"a": {"type": "string"}}, "additionalProperties": False})

        [violation] = validate(schema, {"a": "x", "b": 1})

        assert violation.field == ""
        assert "'b' was unexpected" in violation.message

    def test_violations_are_sorted_by_field(self):
        schema = parse_schema(
            {
                "type": "object",
                "properties": {"b": {"type": "string"}, "a": {"type": "string"}},
                "required": ["c"],
            }
        )

        violations = validate(schema, {"b": 1, "a": 2})

        assert [v.field for v in violations] == ["a", "b", "c"]

    def test_extra_properties_allowed_by_default(self):
        assert validate(parse_schema(POST_INPUT), {"post_id": 1, "extra": True}) == []

    def test_no_schema_accepts_anything(self):
        assert validate(None, object()) == []
