from __future__ import annotations

import math

import pytest
import sympy as sp

from equation_plotter.expression import (
    BinaryOp,
    Call,
    EvaluationError,
    ExpressionSyntaxError,
    Name,
    Number,
    function_table,
    parse_expression,
)


def _eval(text: str, **variables: float) -> tuple:
    return parse_expression(text).evaluate(variables)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("2+3*4", 14.0),
        ("(1+2)*3", 9.0),
        ("10/4", 2.5),
        ("-2^2", -4.0),
        ("2^3^2", 512.0),
        ("2**3", 8.0),
        ("+5 - -3", 8.0),
    ],
)
def test_operator_precedence_and_associativity(text: str, expected: float) -> None:
    assert _eval(text) == (expected,)


def test_constants_and_functions() -> None:
    assert _eval("pi") == (math.pi,)
    assert _eval("e") == (math.e,)
    assert _eval("sin(0) + cos(0)") == (1.0,)
    assert _eval("tan(x)", x=0.0) == (0.0,)
    assert _eval("sqrt(16)") == (4.0,)
    assert _eval("abs(-3)") == (3.0,)
    assert _eval("log(e)") == pytest.approx((1.0,))
    assert _eval("log(8, 2)") == pytest.approx((3.0,))


def test_caret_is_single_valued_real_power() -> None:
    assert _eval("x^2", x=3.0) == (9.0,)
    assert _eval("x^2", x=-3.0) == (9.0,)
    assert _eval("x^0.5", x=-4.0) == ()
    assert _eval("x^(1/3)", x=-8.0) == ()
    assert _eval("0^0") == (1.0,)
    assert _eval("0^(-1)") == ()
    assert _eval("10^400") == ()


def test_pow_fans_out_negative_even_roots() -> None:
    assert _eval("pow(x, 1/2)", x=-4.0) == (2.0, -2.0)
    assert _eval("pow(x, 1/2) + 1", x=-4.0) == (3.0, -1.0)
    assert _eval("pow(x, 1/3)", x=-8.0) == pytest.approx((-2.0,))


def test_branches_combine_left_operand_first() -> None:
    values = _eval("pow(x, 1/2) * pow(x, 1/2)", x=-4.0)
    assert values == (4.0, -4.0)


def test_repeated_branch_sums_stay_bounded() -> None:
    text = "+".join(["pow(x, 1/2)"] * 12)
    values = _eval(text, x=-4.0)
    assert values == (24.0, 20.0)
    assert len(_eval("+".join(["pow(x, 1/3)"] * 12), x=-8.0)) == 1


def test_pow_branches_flow_through_function_arguments() -> None:
    assert _eval("abs(pow(x, 1/2))", x=-9.0) == (3.0,)
    assert _eval("pow(x, 1/2) - pow(x, 1/2)", x=-4.0) == (0.0, 4.0)


def test_function_table_overrides_pow_limits() -> None:
    parsed = parse_expression("pow(x, 1/3)")
    assert parsed.evaluate({"x": -8.0}, function_table(max_denominator=2)) == ()
    assert function_table() is function_table()


@pytest.mark.parametrize(
    ("text", "variables", "match"),
    [
        ("sqrt(x)", {"x": -1.0}, None),
        ("1/x", {"x": 0.0}, None),
        ("log(0)", {}, None),
        ("foo(x)", {"x": 1.0}, "Unknown function"),
        ("q + 1", {}, "Unknown symbol"),
        ("y + 1", {"x": 1.0}, "Unknown symbol"),
        ("sin(1, 2)", {}, "arguments"),
        ("pow(2)", {}, "arguments"),
        ("sin + 1", {}, "without arguments"),
    ],
)
def test_evaluation_errors(text: str, variables: dict, match) -> None:
    with pytest.raises(EvaluationError, match=match):
        parse_expression(text).evaluate(variables)


def test_evaluation_error_is_an_arithmetic_error() -> None:
    with pytest.raises(ArithmeticError):
        _eval("1/x", x=0.0)


@pytest.mark.parametrize(
    "text",
    [
        "",
        "   ",
        "x +",
        "(x",
        "x.real",
        "x[0]",
        "'a'",
        "x < 1",
        "sin(x=1)",
        "sin(*x)",
        "lambda: 1",
        "__import__('os')",
        "True",
        "1j",
        "x if x else 1",
        "x % 2",
    ],
)
def test_syntax_errors(text: str) -> None:
    with pytest.raises(ExpressionSyntaxError):
        parse_expression(text)


def test_non_string_input_is_a_syntax_error() -> None:
    with pytest.raises(ExpressionSyntaxError):
        parse_expression(None)  # type: ignore[arg-type]


def test_syntax_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        parse_expression("x +")


def test_tree_shape() -> None:
    parsed = parse_expression("sin(x) + 2")
    assert parsed.text == "sin(x) + 2"
    assert parsed.root == BinaryOp("+", Call("sin", (Name("x"),)), Number(2.0))


def test_free_names_exclude_function_names() -> None:
    assert parse_expression("sin(x) + pi*y").free_names == frozenset({"x", "pi", "y"})
    assert parse_expression("pow(2, 3)").free_names == frozenset()


def test_to_sympy_matches_numeric_evaluation() -> None:
    x = sp.Symbol("x")
    expr = parse_expression("x^2 + sin(x) - log(x, 2)/sqrt(x)").to_sympy()
    assert expr.free_symbols == {x}
    expected = _eval("x^2 + sin(x) - log(x, 2)/sqrt(x)", x=0.5)[0]
    assert float(sp.N(expr.subs(x, 0.5))) == pytest.approx(expected)


def test_to_sympy_maps_constants() -> None:
    expr = parse_expression("pi + e").to_sympy()
    assert expr.free_symbols == set()
    assert float(sp.N(expr)) == pytest.approx(math.pi + math.e)


def test_latex_rendering() -> None:
    assert parse_expression("x^2").latex() == "x^{2}"
    assert "\\sqrt{x}" in parse_expression("sqrt(x)").latex()
    assert "\\sin" in parse_expression("sin(x)").latex()
