"""Safe parsing and multi-valued evaluation of user formulas.

Purpose
-------
Turns the text a user types after ``y =`` (or ``x =``) into an immutable
syntax tree and evaluates that tree for one value of the free variable.
Nothing from the text is ever executed: the standard library ``ast`` parser
only provides the grammar (operator precedence, right-associative ``**``),
and the result is immediately converted into the small node set defined
here. Everything outside that node set is a syntax error.

Concepts and structure
----------------------
- ``parse_expression`` returns a ``ParsedExpression`` wrapping the root node.
- ``ParsedExpression.evaluate`` walks the tree. Every node yields an ordered
  tuple of candidate values; only ``pow`` (see :mod:`.power_resolver`) can
  yield more than one. Operators combine candidates left operand first, and
  each combined node keeps at most ``MAX_BRANCHES`` distinct values.
- ``FUNCTIONS`` and ``CONSTANTS`` form the fixed symbol table:
  ``sin cos tan sqrt abs log pow`` and the constants ``pi`` and ``e``.

Important gotchas
-----------------
- ``^`` is sugar for ``**``. It is single-valued real exponentiation, so a
  negative base with a fractional exponent gives no value. Use ``pow`` for
  the branching behavior.
- Unknown names are reported at evaluation time (``EvaluationError``), not
  at parse time, so a formula mentioning the dependent variable simply
  yields no points.

Examples
--------
>>> parse_expression("pow(x, 1/2)").evaluate({"x": -4.0})
(2.0, -2.0)
>>> parse_expression("2^3^2").evaluate({})
(512.0,)
"""

from __future__ import annotations

import ast
import functools
import itertools
import math
from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Optional, Tuple, Union

import sympy as sp

from .power_resolver import MAX_DENOMINATOR, RATIONAL_TOLERANCE, resolve_power

__all__ = [
    "BinaryOp",
    "Call",
    "CONSTANTS",
    "EvaluationError",
    "ExpressionError",
    "ExpressionSyntaxError",
    "FUNCTIONS",
    "MAX_BRANCHES",
    "Name",
    "Number",
    "ParsedExpression",
    "UnaryOp",
    "function_table",
    "parse_expression",
]


class ExpressionError(Exception):
    """Base class for formula parsing and evaluation failures."""


class ExpressionSyntaxError(ExpressionError, ValueError):
    """Raised when formula text cannot be turned into a syntax tree."""


class EvaluationError(ExpressionError, ArithmeticError):
    """Raised when a formula has no value at one sample point."""


# =============================================================================
# SECTION: Syntax tree [id: SyntaxTree]
# =============================================================================

@dataclass(frozen=True)
class Number:
    value: float


@dataclass(frozen=True)
class Name:
    id: str


@dataclass(frozen=True)
class UnaryOp:
    op: str
    operand: "Node"


@dataclass(frozen=True)
class BinaryOp:
    op: str
    left: "Node"
    right: "Node"


@dataclass(frozen=True)
class Call:
    func: str
    args: Tuple["Node", ...]


Node = Union[Number, Name, UnaryOp, BinaryOp, Call]

_BINARY_SYMBOLS = {
    ast.Add: "+",
    ast.Sub: "-",
    ast.Mult: "*",
    ast.Div: "/",
    ast.Pow: "^",
}
_UNARY_SYMBOLS = {ast.UAdd: "+", ast.USub: "-"}


def _convert(node: ast.AST) -> Node:
    """Translate a Python ``ast`` node into the formula node set."""
    if isinstance(node, ast.Constant):
        value = node.value
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ExpressionSyntaxError(f"Unsupported literal {value!r}")
        return Number(float(value))
    if isinstance(node, ast.Name):
        return Name(node.id)
    if isinstance(node, ast.UnaryOp):
        symbol = _UNARY_SYMBOLS.get(type(node.op))
        if symbol is None:
            raise ExpressionSyntaxError("Unsupported unary operator")
        return UnaryOp(symbol, _convert(node.operand))
    if isinstance(node, ast.BinOp):
        symbol = _BINARY_SYMBOLS.get(type(node.op))
        if symbol is None:
            raise ExpressionSyntaxError("Unsupported operator")
        return BinaryOp(symbol, _convert(node.left), _convert(node.right))
    if isinstance(node, ast.Call):
        if not isinstance(node.func, ast.Name):
            raise ExpressionSyntaxError("Only named functions can be called")
        if node.keywords:
            raise ExpressionSyntaxError("Keyword arguments are not supported")
        if any(isinstance(arg, ast.Starred) for arg in node.args):
            raise ExpressionSyntaxError("Starred arguments are not supported")
        return Call(node.func.id, tuple(_convert(arg) for arg in node.args))
    raise ExpressionSyntaxError(f"Unsupported syntax: {type(node).__name__}")


# =============================================================================
# SECTION: Symbol table [id: SymbolTable]
# =============================================================================

Values = Tuple[float, ...]


@dataclass(frozen=True)
class _Function:
    """One callable entry of the symbol table."""

    impl: Callable[..., Values]
    min_args: int
    max_args: int


def _single(fn: Callable[..., float]) -> Callable[..., Values]:
    def wrapped(*args: float) -> Values:
        return (float(fn(*args)),)

    wrapped.__name__ = getattr(fn, "__name__", "wrapped")
    return wrapped


def _log(value: float, base: float = math.e) -> Values:
    return (math.log(value) / math.log(base),)


def _caret_power(base: float, exponent: float) -> Values:
    """Single-valued real power used by ``^``/``**``."""
    if exponent == 0:
        return (1.0,)
    if base == 0 and exponent < 0:
        return ()
    if base < 0 and not float(exponent).is_integer():
        return ()
    try:
        return (math.pow(base, exponent),)
    except OverflowError:
        return ()


FUNCTIONS: Dict[str, _Function] = {
    "sin": _Function(_single(math.sin), 1, 1),
    "cos": _Function(_single(math.cos), 1, 1),
    "tan": _Function(_single(math.tan), 1, 1),
    "sqrt": _Function(_single(math.sqrt), 1, 1),
    "abs": _Function(_single(abs), 1, 1),
    "log": _Function(_log, 1, 2),
    "pow": _Function(resolve_power, 2, 2),
}

CONSTANTS: Dict[str, float] = {"pi": math.pi, "e": math.e}


def function_table(
    *,
    max_denominator: int = MAX_DENOMINATOR,
    tolerance: float = RATIONAL_TOLERANCE,
) -> Dict[str, _Function]:
    """Return ``FUNCTIONS`` with ``pow`` bound to the given rational limits."""
    if max_denominator == MAX_DENOMINATOR and tolerance == RATIONAL_TOLERANCE:
        return FUNCTIONS
    table = dict(FUNCTIONS)
    table["pow"] = _Function(
        functools.partial(resolve_power, max_denominator=max_denominator, tolerance=tolerance),
        2,
        2,
    )
    return table


MAX_BRANCHES = 2


def _distinct(values) -> Values:
    """Drop repeated candidates (first occurrence wins) and keep ``MAX_BRANCHES``."""
    kept: list = []
    for value in values:
        if value not in kept:
            kept.append(value)
            if len(kept) == MAX_BRANCHES:
                break
    return tuple(kept)


_BINARY_IMPL: Dict[str, Callable[[float, float], Values]] = {
    "+": lambda a, b: (a + b,),
    "-": lambda a, b: (a - b,),
    "*": lambda a, b: (a * b,),
    "/": lambda a, b: (a / b,),
    "^": _caret_power,
}


def _evaluate(
    node: Node,
    variables: Mapping[str, float],
    functions: Mapping[str, _Function],
) -> Values:
    if isinstance(node, Number):
        return (node.value,)
    if isinstance(node, Name):
        if node.id in variables:
            return (float(variables[node.id]),)
        if node.id in CONSTANTS:
            return (CONSTANTS[node.id],)
        if node.id in functions:
            raise EvaluationError(f"Function '{node.id}' used without arguments")
        raise EvaluationError(f"Unknown symbol '{node.id}'")
    if isinstance(node, UnaryOp):
        operand = _evaluate(node.operand, variables, functions)
        if node.op == "-":
            return tuple(-value for value in operand)
        return operand
    if isinstance(node, BinaryOp):
        left = _evaluate(node.left, variables, functions)
        right = _evaluate(node.right, variables, functions)
        apply = _BINARY_IMPL[node.op]
        return _distinct(result for a in left for b in right for result in apply(a, b))
    if isinstance(node, Call):
        entry = functions.get(node.func)
        if entry is None:
            raise EvaluationError(f"Unknown function '{node.func}'")
        if not entry.min_args <= len(node.args) <= entry.max_args:
            raise EvaluationError(
                f"{node.func}() takes {entry.min_args}..{entry.max_args} "
                f"arguments, got {len(node.args)}"
            )
        arg_values = [_evaluate(arg, variables, functions) for arg in node.args]
        return _distinct(
            result
            for combo in itertools.product(*arg_values)
            for result in entry.impl(*combo)
        )
    raise TypeError(f"Unknown node type {type(node).__name__}")


# =============================================================================
# SECTION: SymPy view [id: SympyView]
# =============================================================================

_SYMPY_CONSTANTS = {"pi": sp.pi, "e": sp.E}
_SYMPY_UNARY_FUNCTIONS = {
    "sin": sp.sin,
    "cos": sp.cos,
    "tan": sp.tan,
    "abs": sp.Abs,
}


def _sympy_number(value: float) -> sp.Expr:
    if value.is_integer():
        return sp.Integer(int(value))
    return sp.Float(value)


def _to_sympy(node: Node) -> sp.Expr:
    if isinstance(node, Number):
        return _sympy_number(node.value)
    if isinstance(node, Name):
        return _SYMPY_CONSTANTS.get(node.id, sp.Symbol(node.id))
    if isinstance(node, UnaryOp):
        operand = _to_sympy(node.operand)
        if node.op == "-":
            return sp.Mul(sp.S.NegativeOne, operand, evaluate=False)
        return operand
    if isinstance(node, BinaryOp):
        left = _to_sympy(node.left)
        right = _to_sympy(node.right)
        if node.op == "+":
            return sp.Add(left, right, evaluate=False)
        if node.op == "-":
            return sp.Add(left, sp.Mul(sp.S.NegativeOne, right, evaluate=False), evaluate=False)
        if node.op == "*":
            return sp.Mul(left, right, evaluate=False)
        if node.op == "/":
            return sp.Mul(left, sp.Pow(right, sp.S.NegativeOne, evaluate=False), evaluate=False)
        return sp.Pow(left, right, evaluate=False)

    args = [_to_sympy(arg) for arg in node.args]
    if node.func in _SYMPY_UNARY_FUNCTIONS and len(args) == 1:
        return _SYMPY_UNARY_FUNCTIONS[node.func](args[0], evaluate=False)
    if node.func == "sqrt" and len(args) == 1:
        return sp.Pow(args[0], sp.Rational(1, 2), evaluate=False)
    if node.func == "pow" and len(args) == 2:
        return sp.Pow(args[0], args[1], evaluate=False)
    if node.func == "log" and len(args) == 1:
        return sp.log(args[0], evaluate=False)
    if node.func == "log" and len(args) == 2:
        return sp.Mul(
            sp.log(args[0], evaluate=False),
            sp.Pow(sp.log(args[1], evaluate=False), sp.S.NegativeOne, evaluate=False),
            evaluate=False,
        )
    return sp.Function(node.func)(*args)


def _collect_names(node: Node, out: set) -> None:
    if isinstance(node, Name):
        out.add(node.id)
    elif isinstance(node, UnaryOp):
        _collect_names(node.operand, out)
    elif isinstance(node, BinaryOp):
        _collect_names(node.left, out)
        _collect_names(node.right, out)
    elif isinstance(node, Call):
        for arg in node.args:
            _collect_names(arg, out)


# =============================================================================
# SECTION: ParsedExpression [id: ParsedExpression]
# =============================================================================

@dataclass(frozen=True)
class ParsedExpression:
    """A parsed formula ready for repeated evaluation.

    Parameters
    ----------
    text : str
        The formula exactly as the user typed it.
    root : Node
        Root of the syntax tree.
    """

    text: str
    root: Node

    @property
    def free_names(self) -> frozenset:
        """Identifiers referenced as values (function names excluded)."""
        names: set = set()
        _collect_names(self.root, names)
        return frozenset(names)

    def evaluate(
        self,
        variables: Mapping[str, float],
        functions: Optional[Mapping[str, _Function]] = None,
    ) -> Values:
        """Evaluate the formula for one assignment of its free variable.

        Parameters
        ----------
        variables : mapping of str to float
            Values for free names, e.g. ``{"x": 1.5}``.
        functions : mapping, optional
            Symbol table override, see :func:`function_table`. Defaults to
            ``FUNCTIONS``.

        Returns
        -------
        tuple[float, ...]
            Candidate values in branch order. Usually one; empty when every
            branch is undefined; two when ``pow`` branches. Repeated values
            are merged.

        Raises
        ------
        EvaluationError
            On division by zero, math domain errors, overflow, unknown
            symbols or calls with the wrong number of arguments.
        """
        try:
            return _evaluate(self.root, variables, FUNCTIONS if functions is None else functions)
        except EvaluationError:
            raise
        except (ArithmeticError, ValueError) as exc:
            raise EvaluationError(str(exc) or type(exc).__name__) from exc

    def to_sympy(self) -> sp.Expr:
        """Return an unevaluated SymPy expression mirroring the tree."""
        return _to_sympy(self.root)

    def latex(self) -> str:
        """Render the formula as LaTeX (no simplification)."""
        return sp.latex(self.to_sympy())


def parse_expression(text: str) -> ParsedExpression:
    """Parse formula ``text`` into a :class:`ParsedExpression`.

    Raises
    ------
    ExpressionSyntaxError
        If the text is empty, malformed, or uses syntax outside the formula
        language (attribute access, comparisons, strings, keywords, ...).
    """
    if not isinstance(text, str):
        raise ExpressionSyntaxError(f"Expected formula text, got {type(text).__name__}")
    source = text.strip().replace("^", "**")
    if not source:
        raise ExpressionSyntaxError("Formula is empty")
    try:
        tree = ast.parse(source, mode="eval")
    except (SyntaxError, ValueError) as exc:
        raise ExpressionSyntaxError(f"Could not parse {text!r}: {exc}") from exc
    return ParsedExpression(text=text, root=_convert(tree.body))
