from __future__ import annotations

import ast
import math
import operator
from dataclasses import dataclass
from typing import Callable

from mathapi.core.exceptions import AppError


class EvaluationError(AppError):
    status_code = 400
    error_type = "EVALUATION_ERROR"


def _ieee(fn: Callable[..., float], *args: float) -> float:
    """Call ``fn`` mapping Python's math exceptions onto IEEE-754 results."""

    try:
        value = fn(*args)
    except OverflowError:
        return math.inf
    except ValueError:
        return math.nan
    return float(value)


def _divide(left: float, right: float) -> float:
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def _modulo(left: float, right: float) -> float:
    if right == 0:
        return math.nan
    return math.fmod(left, right)


def _round_half_away(value: float) -> float:
    if not math.isfinite(value):
        return value
    return math.copysign(math.floor(abs(value) + 0.5), value)


def _signum(value: float) -> float:
    if math.isnan(value) or value == 0:
        return value
    return math.copysign(1.0, value)


@dataclass(frozen=True)
class _Function:
    fn: Callable[..., float]
    arity: int | None  # None means one or more arguments


class ExpressionEvaluator:
    """Restricted evaluator for plain arithmetic over floats.

    ``^`` is exponentiation. Results follow IEEE-754 rules, so ``1/0`` is
    ``inf`` and ``sqrt(-1)`` is ``nan``; callers decide whether such values
    are acceptable.
    """

    _BINARY_OPERATORS: dict[type[ast.AST], Callable[[float, float], float]] = {
        ast.Add: operator.add,
        ast.Sub: operator.sub,
        ast.Mult: operator.mul,
        ast.Div: _divide,
        ast.Mod: _modulo,
        ast.Pow: math.pow,
    }

    _UNARY_OPERATORS: dict[type[ast.AST], Callable[[float], float]] = {
        ast.UAdd: operator.pos,
        ast.USub: operator.neg,
    }

    CONSTANTS: dict[str, float] = {
        "pi": math.pi,
        "e": math.e,
    }

    FUNCTIONS: dict[str, _Function] = {
        "sqrt": _Function(math.sqrt, 1),
        "abs": _Function(abs, 1),
        "exp": _Function(math.exp, 1),
        "ln": _Function(math.log, 1),
        "sin": _Function(math.sin, 1),
        "cos": _Function(math.cos, 1),
        "tan": _Function(math.tan, 1),
        "asin": _Function(math.asin, 1),
        "acos": _Function(math.acos, 1),
        "atan": _Function(math.atan, 1),
        "atan2": _Function(math.atan2, 2),
        "sinh": _Function(math.sinh, 1),
        "cosh": _Function(math.cosh, 1),
        "tanh": _Function(math.tanh, 1),
        "asinh": _Function(math.asinh, 1),
        "acosh": _Function(math.acosh, 1),
        "atanh": _Function(math.atanh, 1),
        "floor": _Function(math.floor, 1),
        "ceil": _Function(math.ceil, 1),
        "round": _Function(_round_half_away, 1),
        "signum": _Function(_signum, 1),
        "max": _Function(max, None),
        "min": _Function(min, None),
    }

    def evaluate(self, text: str) -> float:
        source = text.strip().replace("^", "**")
        if not source:
            raise EvaluationError("empty expression")

        try:
            syntax_tree = ast.parse(source, mode="eval")
        except SyntaxError as exc:
            position = f" at column {exc.offset}" if exc.offset else ""
            raise EvaluationError(f"invalid syntax{position}") from exc
        except ValueError as exc:
            raise EvaluationError("expression contains invalid characters") from exc
        except (RecursionError, MemoryError) as exc:
            raise EvaluationError("expression is nested too deeply") from exc

        try:
            return self._evaluate_node(syntax_tree.body)
        except (RecursionError, MemoryError) as exc:
            raise EvaluationError("expression is nested too deeply") from exc

    def _evaluate_node(self, node: ast.AST) -> float:
        if isinstance(node, ast.BinOp):
            operator_fn = self._BINARY_OPERATORS.get(type(node.op))
            if operator_fn is None:
                raise EvaluationError("unsupported operator in expression")
            left = self._evaluate_node(node.left)
            right = self._evaluate_node(node.right)
            return _ieee(operator_fn, left, right)

        if isinstance(node, ast.UnaryOp):
            operator_fn = self._UNARY_OPERATORS.get(type(node.op))
            if operator_fn is None:
                raise EvaluationError("unsupported unary operator in expression")
            return operator_fn(self._evaluate_node(node.operand))

        if isinstance(node, ast.Constant):
            if isinstance(node.value, bool) or not isinstance(node.value, (int, float)):
                raise EvaluationError("expression contains unsupported literals")
            return _ieee(float, node.value)

        if isinstance(node, ast.Name):
            try:
                return self.CONSTANTS[node.id]
            except KeyError:
                raise EvaluationError(f"unknown variable '{node.id}'") from None

        if isinstance(node, ast.Call):
            return self._evaluate_call(node)

        raise EvaluationError("expression contains unsupported elements")

    def _evaluate_call(self, node: ast.Call) -> float:
        if not isinstance(node.func, ast.Name) or node.keywords:
            raise EvaluationError("unsupported function call")

        name = node.func.id
        function = self.FUNCTIONS.get(name)
        if function is None:
            raise EvaluationError(f"unknown function '{name}'")

        arg_count = len(node.args)
        if function.arity is None:
            if arg_count < 1:
                raise EvaluationError(f"function '{name}' expects at least 1 argument")
        elif arg_count != function.arity:
            raise EvaluationError(
                f"function '{name}' expects {function.arity} argument(s), got {arg_count}"
            )

        args = [self._evaluate_node(arg) for arg in node.args]
        return _ieee(function.fn, *args)


_default_evaluator = ExpressionEvaluator()


def evaluate(text: str) -> float:
    return _default_evaluator.evaluate(text)
