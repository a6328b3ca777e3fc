"""Tree-walking evaluation of Monkey programs."""

from __future__ import annotations

from monkeylang import nodes
from monkeylang.builtins import BUILTINS, FALSE, NULL, TRUE
from monkeylang.environment import Environment
from monkeylang.objects import (
    Array,
    Boolean,
    Builtin,
    Error,
    Function,
    Hash,
    HashPair,
    Integer,
    MonkeyObject,
    Null,
    ReturnValue,
    String,
)

_HASHABLE = (Integer, Boolean, String)
_INT64_MASK = (1 << 64) - 1
_INT64_SIGN = 1 << 63


def _int64(value: int) -> int:
    """Wrap an integer to the signed 64-bit range."""
    value &= _INT64_MASK
    return value - (1 << 64) if value & _INT64_SIGN else value


def _to_boolean(value: bool) -> Boolean:
    return TRUE if value else FALSE


def is_truthy(obj: MonkeyObject | None) -> bool:
    """Return whether a value counts as true in a condition."""
    if isinstance(obj, Null):
        return False
    if isinstance(obj, Boolean):
        return obj.value
    return True


def evaluate(node: nodes.Node | None, env: Environment) -> MonkeyObject | None:
    """Evaluate a syntax tree node in ``env``; let statements yield None."""
    match node:
        case nodes.Program():
            return _eval_program(node.statements, env)
        case nodes.ExpressionStatement():
            return evaluate(node.expression, env)
        case nodes.BlockStatement():
            return _eval_block(node.statements, env)
        case nodes.ReturnStatement():
            value = evaluate(node.return_value, env)
            if isinstance(value, Error):
                return value
            return ReturnValue(value)
        case nodes.LetStatement():
            value = evaluate(node.value, env)
            if isinstance(value, Error):
                return value
            env.set(node.name.value, value)
            return None
        case nodes.IntegerLiteral():
            return Integer(node.value)
        case nodes.StringLiteral():
            return String(node.value)
        case nodes.Boolean():
            return _to_boolean(node.value)
        case nodes.Identifier():
            return _eval_identifier(node.value, env)
        case nodes.PrefixExpression():
            right = evaluate(node.right, env)
            if isinstance(right, Error):
                return right
            return _eval_prefix(node.operator, right)
        case nodes.InfixExpression():
            left = evaluate(node.left, env)
            if isinstance(left, Error):
                return left
            right = evaluate(node.right, env)
            if isinstance(right, Error):
                return right
            return _eval_infix(node.operator, left, right)
        case nodes.IfExpression():
            return _eval_if(node, env)
        case nodes.FunctionLiteral():
            return Function(node.parameters, node.body, env)
        case nodes.CallExpression():
            function = evaluate(node.function, env)
            if isinstance(function, Error):
                return function
            args = _eval_expressions(node.arguments, env)
            if isinstance(args, Error):
                return args
            return _apply_function(function, args)
        case nodes.ArrayLiteral():
            elements = _eval_expressions(node.elements, env)
            if isinstance(elements, Error):
                return elements
            return Array(elements)
        case nodes.IndexExpression():
            left = evaluate(node.left, env)
            if isinstance(left, Error):
                return left
            index = evaluate(node.index, env)
            if isinstance(index, Error):
                return index
            return _eval_index(left, index)
        case nodes.HashLiteral():
            return _eval_hash_literal(node, env)
    return None


def _eval_program(statements: list[nodes.Statement], env: Environment) -> MonkeyObject | None:
    result = None
    for statement in statements:
        result = evaluate(statement, env)
        if isinstance(result, ReturnValue):
            return result.value
        if isinstance(result, Error):
            return result
    return result


def _eval_block(statements: list[nodes.Statement], env: Environment) -> MonkeyObject | None:
    result = None
    for statement in statements:
        result = evaluate(statement, env)
        if isinstance(result, (ReturnValue, Error)):
            return result
    return result


def _eval_expressions(
    expressions: list[nodes.Expression], env: Environment
) -> list[MonkeyObject] | Error:
    values = []
    for expression in expressions:
        value = evaluate(expression, env)
        if isinstance(value, Error):
            return value
        values.append(value)
    return values


def _eval_identifier(name: str, env: Environment) -> MonkeyObject:
    if name in env:
        return env.get(name)
    if name in BUILTINS:
        return BUILTINS[name]
    return Error(f"identifier not found: {name}")


def _eval_if(node: nodes.IfExpression, env: Environment) -> MonkeyObject | None:
    condition = evaluate(node.condition, env)
    if isinstance(condition, Error):
        return condition
    if is_truthy(condition):
        return evaluate(node.consequence, env)
    if node.alternative is not None:
        return evaluate(node.alternative, env)
    return NULL


def _eval_prefix(operator: str, right: MonkeyObject) -> MonkeyObject:
    if operator == "!":
        return _to_boolean(not is_truthy(right))
    if operator == "-":
        if not isinstance(right, Integer):
            return Error(f"unknown operator: -{right.type.value}")
        return Integer(_int64(-right.value))
    return Error(f"unknown operator: {operator}{right.type.value}")


def _eval_infix(operator: str, left: MonkeyObject, right: MonkeyObject) -> MonkeyObject:
    if isinstance(left, Integer) and isinstance(right, Integer):
        return _eval_integer_infix(operator, left, right)
    if isinstance(left, String) and isinstance(right, String):
        if operator != "+":
            return Error(f"unknown operator: STRING {operator} STRING")
        return String(left.value + right.value)
    if operator == "==":
        return _to_boolean(left is right)
    if operator == "!=":
        return _to_boolean(left is not right)
    if left.type is not right.type:
        return Error(f"type mismatch: {left.type.value} {operator} {right.type.value}")
    return Error(f"unknown operator: {left.type.value} {operator} {right.type.value}")


def _truncating_div(a: int, b: int) -> int:
    if b == 0:
        raise ZeroDivisionError("integer divide by zero")
    quotient = abs(a) // abs(b)
    return -quotient if (a < 0) != (b < 0) else quotient


def _eval_integer_infix(operator: str, left: Integer, right: Integer) -> MonkeyObject:
    a, b = left.value, right.value
    match operator:
        case "+":
            return Integer(_int64(a + b))
        case "-":
            return Integer(_int64(a - b))
        case "*":
            return Integer(_int64(a * b))
        case "/":
            return Integer(_int64(_truncating_div(a, b)))
        case "<":
            return _to_boolean(a < b)
        case ">":
            return _to_boolean(a > b)
        case "==":
            return _to_boolean(a == b)
        case "!=":
            return _to_boolean(a != b)
    return Error(f"unknown operator: INTEGER {operator} INTEGER")


def _eval_index(left: MonkeyObject, index: MonkeyObject) -> MonkeyObject:
    if isinstance(left, Array) and isinstance(index, Integer):
        if 0 <= index.value < len(left.elements):
            return left.elements[index.value]
        return NULL
    if isinstance(left, Hash):
        if not isinstance(index, _HASHABLE):
            return Error(f"unusable as hash key: {index.type.value}")
        pair = left.pairs.get(index.hash_key())
        return pair.value if pair is not None else NULL
    return Error(f"index operator not supported: {left.type.value}")


def _eval_hash_literal(node: nodes.HashLiteral, env: Environment) -> MonkeyObject:
    pairs = {}
    for key_node, value_node in node.pairs:
        key = evaluate(key_node, env)
        if isinstance(key, Error):
            return key
        if not isinstance(key, _HASHABLE):
            return Error(f"unusable as hash key: {key.type.value}")
        value = evaluate(value_node, env)
        if isinstance(value, Error):
            return value
        pairs[key.hash_key()] = HashPair(key, value)
    return Hash(pairs)


def _apply_function(function: MonkeyObject, args: list[MonkeyObject]) -> MonkeyObject | None:
    if isinstance(function, Function):
        if len(args) < len(function.parameters):
            raise TypeError(
                f"function takes {len(function.parameters)} arguments, got {len(args)}"
            )
        scope = function.env.enclosed()
        for param, arg in zip(function.parameters, args):
            scope.set(param.value, arg)
        result = evaluate(function.body, scope)
        return result.value if isinstance(result, ReturnValue) else result
    if isinstance(function, Builtin):
        return function.fn(*args)
    return Error(f"not a function: {function.type.value}")