from __future__ import annotations

"""Capability schemas and structural validation.

Capabilities publish their input and output contracts as JSON-Schema
(draft 2020-12) mappings. ``parse_schema`` checks a mapping against the
metaschema and wraps it in a frozen ``JsonSchema`` so a malformed contract
fails at registration instead of at the first call.

``validate`` runs ``jsonschema`` and flattens every error into a
``SchemaViolation`` whose ``field`` is the dotted path of the offending value.
Arrays accept tuples and objects accept any mapping, so Python callers do not
have to convert their payloads first.
"""

import copy
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Union

from jsonschema import Draft202012Validator, ValidationError, validators
from jsonschema.exceptions import SchemaError
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from sparxstar_gluon.errors import InvalidSchema
from sparxstar_gluon.schemas.base import BaseSchema


def _make_validator_class():
    type_checker = Draft202012Validator.TYPE_CHECKER
    type_checker = type_checker.redefine("array", lambda _c, inst: isinstance(inst, (list, tuple)))
    type_checker = type_checker.redefine("object", lambda _c, inst: isinstance(inst, Mapping))
    return validators.extend(Draft202012Validator, type_checker=type_checker)


_Validator = _make_validator_class()


class JsonSchema(BaseModel):
    """A published JSON-Schema contract with its compiled validator."""

    model_config = ConfigDict(frozen=True)

    definition: Dict[str, Any] = Field(default_factory=dict)

    _validator: Any = PrivateAttr(default=None)

    def model_post_init(self, __context: Any) -> None:
        self._validator = _Validator(self.definition)

    @property
    def type(self) -> Optional[Union[str, List[str]]]:
        return self.definition.get("type")

    @property
    def properties(self) -> Dict[str, Any]:
        return dict(self.definition.get("properties", {}))

    @property
    def required(self) -> List[str]:
        return list(self.definition.get("required", []))

    def iter_errors(self, value: Any) -> Iterator[ValidationError]:
        return self._validator.iter_errors(value)

    def to_json_schema(self) -> Dict[str, Any]:
        """Return the mapping published to callers."""
        return copy.deepcopy(self.definition)


class SchemaViolation(BaseSchema):
    """A single structural mismatch between a value and a schema."""

    field: str = Field(description="Dotted path to the offending value; empty for the root.")
    message: str

    def __str__(self) -> str:
        return f"{self.field or '<root>'}: {self.message}"


def parse_schema(raw: Union[Mapping[str, Any], JsonSchema, None]) -> Optional[JsonSchema]:
    """Check a JSON-Schema mapping against the draft 2020-12 metaschema.

    Raises:
        InvalidSchema: If ``raw`` is not a mapping or is not a valid schema.
    """
    if raw is None or isinstance(raw, JsonSchema):
        return raw
    if not isinstance(raw, Mapping):
        raise InvalidSchema(f"expected a mapping, got {type(raw).__name__}")
    definition = copy.deepcopy(dict(raw))
    try:
        _Validator.check_schema(definition)
    except SchemaError as e:
        raise InvalidSchema(e.message) from e
    return JsonSchema(definition=definition)


def _join(path: str, key: Union[str, int]) -> str:
    if isinstance(key, int):
        return f"{path}[{key}]"
    return f"{path}.{key}" if path else key


def format_path(path: Iterable[Any]) -> str:
    """Render a location such as ``("tags", 1, "name")`` as ``tags[1].name``."""
    out = ""
    for part in path:
        out = _join(out, part)
    return out


def _field(error: ValidationError) -> str:
    path = format_path(error.absolute_path)
    # ``required`` errors point at the parent object; name the missing property instead.
    if error.validator == "required" and isinstance(error.instance, Mapping):
        for name in error.validator_value:
            if name not in error.instance and error.message.startswith(repr(name)):
                return _join(path, name)
    return path


def validate(schema: Optional[JsonSchema], value: Any) -> List[SchemaViolation]:
    """Return every violation of ``value`` against ``schema``, sorted by field.

    An absent schema accepts anything.
    """
    if schema is None:
        return []
    violations = [SchemaViolation(field=_field(e), message=e.message) for e in schema.iter_errors(value)]
    return sorted(violations, key=lambda v: (v.field, v.message))
