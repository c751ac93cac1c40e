"""Tests for gridcalc.calc expression evaluator (tokenize -> RPN -> value)."""

from __future__ import annotations

import math

import pytest

from gridcalc.calc._errors import InvalidCharacters, InvalidResult
from gridcalc.calc._evaluator import NEG, POS, evaluate, evaluate_postfix, to_postfix, tokenize


class TestTokenize:
    def test_numbers_and_operators(self) -> None:
        assert tokenize("12+3.5*(4-1)") == [12.0, "+", 3.5, "*", "(", 4.0, "-", 1.0, ")"]

    def test_leading_decimal_point(self) -> None:
        assert tokenize(".5+1") == [0.5, "+", 1.0]

    def test_unary_minus_at_start(self) -> None:
        assert tokenize("-2") == [NEG, 2.0]

    def test_unary_after_operator_and_paren(self) -> None:
        assert tokenize("3*-2") == [3.0, "*", NEG, 2.0]
        assert tokenize("(+4)") == ["(", POS, 4.0, ")"]

    def test_binary_minus_after_close_paren(self) -> None:
        assert tokenize("(1)-2") == ["(", 1.0, ")", "-", 2.0]

    def test_malformed_number(self) -> None:
        with pytest.raises(InvalidResult, match="Malformed number"):
            tokenize("1.2.3")

    def test_rejects_other_characters(self) -> None:
        with pytest.raises(InvalidCharacters):
            tokenize("2^3")


class TestToPostfix:
    def test_precedence(self) -> None:
        assert to_postfix(tokenize("1+2*3")) == [1.0, 2.0, 3.0, "*", "+"]

    def test_left_associative(self) -> None:
        assert to_postfix(tokenize("8-4-2")) == [8.0, 4.0, "-", 2.0, "-"]

    def test_parentheses(self) -> None:
        assert to_postfix(tokenize("(1+2)*3")) == [1.0, 2.0, "+", 3.0, "*"]

    def test_unbalanced_close(self) -> None:
        with pytest.raises(InvalidResult, match="Mismatched parentheses"):
            to_postfix(tokenize("1+2)"))

    def test_unbalanced_open(self) -> None:
        with pytest.raises(InvalidResult, match="Mismatched parentheses"):
            to_postfix(tokenize("(1+2"))


class TestEvaluate:
    def test_basic_arithmetic(self) -> None:
        assert evaluate("5+3") == 8.0
        assert evaluate("10-3") == 7.0
        assert evaluate("10*3") == 30.0
        assert abs(evaluate("10/3") - 10 / 3) < 1e-12

    def test_precedence_and_parens(self) -> None:
        assert evaluate("2+3*4") == 14.0
        assert evaluate("(2+3)*4") == 20.0
        assert evaluate("((2))") == 2.0

    def test_left_to_right_division(self) -> None:
        assert evaluate("16/4/2") == 2.0

    def test_unary_minus(self) -> None:
        assert evaluate("3*-2") == -6.0
        assert evaluate("-2*3") == -6.0
        assert evaluate("-(2+3)") == -5.0
        assert evaluate("2--3") == 5.0
        assert evaluate("--2") == 2.0
        assert evaluate("+4") == 4.0

    def test_division_by_zero_is_not_finite(self) -> None:
        assert evaluate("5/0") == math.inf
        assert evaluate("-5/0") == -math.inf
        assert math.isnan(evaluate("0/0"))

    def test_missing_operand(self) -> None:
        with pytest.raises(InvalidResult, match="Missing operand"):
            evaluate("5-")
        with pytest.raises(InvalidResult, match="Missing operand"):
            evaluate("*5")

    def test_adjacent_operands(self) -> None:
        with pytest.raises(InvalidResult, match="Malformed expression"):
            evaluate("2(3)")

    def test_empty_parens(self) -> None:
        with pytest.raises(InvalidResult):
            evaluate("()")

    def test_postfix_directly(self) -> None:
        assert evaluate_postfix([2.0, 3.0, "+", 4.0, "*"]) == 20.0
