"""Conversion between model objects and the persisted JSON shape."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import StrEnum
from typing import Any, TypeAlias

from pricerulepy.diagnostics.errors import InvalidDefinitionError
from pricerulepy.model.model import (
    Comparator,
    Condition,
    Connector,
    Definition,
    LiteralOperand,
    LiteralType,
    Operand,
    PriceRule,
    Variable,
    VariableOperand,
    VariableType,
    new_condition_id,
)

JsonObject: TypeAlias = dict[str, Any]
Path: TypeAlias = tuple[str | int, ...]


def operand_to_dict(operand: Operand) -> JsonObject:
    match operand:
        case VariableOperand(key=key):
            return {"kind": "variable", "key": key}
        case LiteralOperand(value=value, value_type=value_type):
            return {"kind": "literal", "value": value, "valueType": value_type.value}


def condition_to_dict(condition: Condition) -> JsonObject:
    data: JsonObject = {"id": condition.id}
    if condition.connector is not None:
        data["connector"] = condition.connector.value
    if condition.negated:
        data["negated"] = True
    data["comparator"] = condition.comparator.value
    data["left"] = operand_to_dict(condition.left)
    data["right"] = operand_to_dict(condition.right)
    return data


def variable_to_dict(variable: Variable) -> JsonObject:
    data: JsonObject = {"key": variable.key, "label": variable.label, "type": variable.type.value}
    if variable.initial_value is not None:
        data["initialValue"] = variable.initial_value
    if variable.user_input:
        data["userInput"] = True
    return data


def definition_to_dict(definition: Definition) -> JsonObject:
    return {
        "variables": [variable_to_dict(variable) for variable in definition.variables],
        "conditions": [condition_to_dict(condition) for condition in definition.conditions],
        "formula": definition.formula,
    }


def rule_to_dict(rule: PriceRule) -> JsonObject:
    data: JsonObject = {"name": rule.name}
    if rule.description is not None:
        data["description"] = rule.description
    data["definition"] = definition_to_dict(rule.definition)
    return data


def operand_from_dict(data: object, *, path: Path = ()) -> Operand:
    obj = _require_mapping(data, path)
    kind = _require_str(obj, "kind", path)
    match kind:
        case "variable":
            return VariableOperand(key=_require_str(obj, "key", path))
        case "literal":
            return LiteralOperand(
                value=_require_str(obj, "value", path),
                value_type=_require_enum(LiteralType, obj, "valueType", path),
            )
        case _:
            raise InvalidDefinitionError(f"Unknown operand kind `{kind}`.", path=(*path, "kind"))


def condition_from_dict(data: object, *, path: Path = ()) -> Condition:
    obj = _require_mapping(data, path)
    connector = obj.get("connector")
    negated = obj.get("negated", False)
    if not isinstance(negated, bool):
        raise InvalidDefinitionError("`negated` must be a boolean.", path=(*path, "negated"))
    condition_id = obj.get("id")
    if condition_id is not None and not isinstance(condition_id, str):
        raise InvalidDefinitionError("`id` must be a string.", path=(*path, "id"))
    return Condition(
        id=condition_id or new_condition_id(),
        connector=None if connector is None else _require_enum(Connector, obj, "connector", path),
        negated=negated,
        comparator=_require_enum(Comparator, obj, "comparator", path),
        left=operand_from_dict(obj.get("left"), path=(*path, "left")),
        right=operand_from_dict(obj.get("right"), path=(*path, "right")),
    )


def variable_from_dict(data: object, *, path: Path = ()) -> Variable:
    obj = _require_mapping(data, path)
    initial_value = obj.get("initialValue")
    if initial_value is not None and not isinstance(initial_value, str):
        raise InvalidDefinitionError("`initialValue` must be a string.", path=(*path, "initialValue"))
    user_input = obj.get("userInput", False)
    if not isinstance(user_input, bool):
        raise InvalidDefinitionError("`userInput` must be a boolean.", path=(*path, "userInput"))
    return Variable(
        key=_require_str(obj, "key", path),
        label=_require_str(obj, "label", path),
        type=_require_enum(VariableType, obj, "type", path),
        initial_value=initial_value,
        user_input=user_input,
    )


def definition_from_dict(data: object, *, path: Path = ()) -> Definition:
    obj = _require_mapping(data, path)
    variables = _require_list(obj, "variables", path)
    conditions = _require_list(obj, "conditions", path)
    formula = obj.get("formula", "")
    if not isinstance(formula, str):
        raise InvalidDefinitionError("`formula` must be a string.", path=(*path, "formula"))
    return Definition(
        variables=tuple(
            variable_from_dict(item, path=(*path, "variables", index)) for index, item in enumerate(variables)
        ),
        conditions=tuple(
            condition_from_dict(item, path=(*path, "conditions", index)) for index, item in enumerate(conditions)
        ),
        formula=formula,
    )


def rule_from_dict(data: object) -> PriceRule:
    obj = _require_mapping(data, ())
    description = obj.get("description")
    if description is not None and not isinstance(description, str):
        raise InvalidDefinitionError("`description` must be a string.", path=("description",))
    return PriceRule(
        name=_require_str(obj, "name", ()),
        description=description,
        definition=definition_from_dict(obj.get("definition"), path=("definition",)),
    )


def _require_mapping(data: object, path: Path) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise InvalidDefinitionError("Expected an object.", path=path)
    return data


def _require_str(obj: Mapping[str, Any], name: str, path: Path) -> str:
    value = obj.get(name)
    if not isinstance(value, str):
        raise InvalidDefinitionError(f"`{name}` must be a string.", path=(*path, name))
    return value


def _require_list(obj: Mapping[str, Any], name: str, path: Path) -> Sequence[object]:
    value = obj.get(name, [])
    if not isinstance(value, list):
        raise InvalidDefinitionError(f"`{name}` must be a list.", path=(*path, name))
    return value


def _require_enum(
    enum_type: type[StrEnum],
    obj: Mapping[str, Any],
    name: str,
    path: Path,
) -> Any:
    value = obj.get(name)
    try:
        return enum_type(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_type)
        raise InvalidDefinitionError(
            f"`{name}` must be one of {allowed}, got {value!r}.",
            path=(*path, name),
        ) from None
