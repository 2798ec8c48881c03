import pytest

from exprcalc.nodes import BinaryOp, BinaryOperator, NumberLiteral, UnaryOp, UnaryOperator
from exprcalc.parser import MAX_NESTING_DEPTH, ExpressionSyntaxError, Parser, parse
from exprcalc.scanner import LexicalError, Scanner, TokenType


def num(v: float) -> NumberLiteral:
    return NumberLiteral(v)


@pytest.mark.parametrize(
    "code, expected_tree",
    [
        pytest.param("2", num(2)),
        pytest.param("2+3", BinaryOp(num(2), BinaryOperator.ADD, num(3))),
        pytest.param(
            "2+3*4",
            BinaryOp(num(2), BinaryOperator.ADD, BinaryOp(num(3), BinaryOperator.MUL, num(4))),
        ),
        pytest.param(
            "10-2-3",
            BinaryOp(BinaryOp(num(10), BinaryOperator.SUB, num(2)), BinaryOperator.SUB, num(3)),
        ),
        pytest.param(
            "8/4/2",
            BinaryOp(BinaryOp(num(8), BinaryOperator.DIV, num(4)), BinaryOperator.DIV, num(2)),
        ),
        pytest.param(
            "(2+3)*4",
            BinaryOp(BinaryOp(num(2), BinaryOperator.ADD, num(3)), BinaryOperator.MUL, num(4)),
        ),
        pytest.param("--5", UnaryOp(UnaryOperator.NEG, UnaryOp(UnaryOperator.NEG, num(5)))),
        pytest.param("+5", UnaryOp(UnaryOperator.POS, num(5))),
        pytest.param(
            "-2*3",
            BinaryOp(UnaryOp(UnaryOperator.NEG, num(2)), BinaryOperator.MUL, num(3)),
        ),
        pytest.param(
            "2*-3",
            BinaryOp(num(2), BinaryOperator.MUL, UnaryOp(UnaryOperator.NEG, num(3))),
        ),
        pytest.param(
            "-(1+2)",
            UnaryOp(UnaryOperator.NEG, BinaryOp(num(1), BinaryOperator.ADD, num(2))),
        ),
    ],
)
def test_tree_shape(code: str, expected_tree) -> None:
    assert parse(code) == expected_tree


@pytest.mark.parametrize(
    "code, errmsg, token_type",
    [
        pytest.param("", "unexpected token in factor", TokenType.END_OF_INPUT),
        pytest.param("   ", "unexpected token in factor", TokenType.END_OF_INPUT),
        pytest.param("+", "unexpected token in factor", TokenType.END_OF_INPUT),
        pytest.param("--", "unexpected token in factor", TokenType.END_OF_INPUT),
        pytest.param("2+", "unexpected token in factor", TokenType.END_OF_INPUT),
        pytest.param("*2", "unexpected token in factor", TokenType.MULTIPLY),
        pytest.param("2**3", "unexpected token in factor", TokenType.MULTIPLY),
        pytest.param("()", "unexpected token in factor", TokenType.RPAREN),
        pytest.param("(1+2", "unexpected token", TokenType.END_OF_INPUT),
        pytest.param("((1)", "unexpected token", TokenType.END_OF_INPUT),
        pytest.param("2+3)", "unexpected token after expression", TokenType.RPAREN),
        pytest.param("1 2", "unexpected token after expression", TokenType.NUMBER),
        pytest.param("(1)(2)", "unexpected token after expression", TokenType.LPAREN),
    ],
)
def test_syntax_errors(code: str, errmsg: str, token_type: TokenType) -> None:
    with pytest.raises(ExpressionSyntaxError) as exc_info:
        parse(code)
    assert exc_info.value.errmsg == errmsg
    assert exc_info.value.token.type is token_type


def test_syntax_error_message_points_at_token() -> None:
    with pytest.raises(ExpressionSyntaxError) as exc_info:
        parse("2 + 3)")
    assert str(exc_info.value) == "\n".join(
        [
            "Syntax error: unexpected token after expression",
            "2 + 3)",
            "     ^",
        ]
    )


def test_syntax_error_at_end_of_input_points_past_code() -> None:
    with pytest.raises(ExpressionSyntaxError) as exc_info:
        parse("1 +")
    assert exc_info.value.error_char_idx == 3
    assert str(exc_info.value).endswith("\n   ^")


@pytest.mark.parametrize("code", ["1.2.3", "2@3", "(1 + #)", "1 + 2 $"])
def test_lexical_errors_propagate(code: str) -> None:
    with pytest.raises(LexicalError):
        parse(code)


def test_lexical_error_in_first_token_is_raised_on_construction() -> None:
    with pytest.raises(LexicalError):
        Parser(Scanner("@"))


def test_parse_can_only_be_called_once() -> None:
    parser = Parser(Scanner("1+1"))
    assert parser.parse() == BinaryOp(num(1), BinaryOperator.ADD, num(1))
    with pytest.raises(RuntimeError):
        parser.parse()


def test_eat_mismatch() -> None:
    parser = Parser(Scanner("1"))
    with pytest.raises(ExpressionSyntaxError) as exc_info:
        parser.eat(TokenType.LPAREN)
    assert exc_info.value.errmsg == "unexpected token"


def test_parses_are_independent() -> None:
    first = parse("1+2")
    second = parse("1+2")
    assert first == second
    assert first is not second


def test_long_flat_sum() -> None:
    root = parse("+".join(["1"] * 5000))
    assert root.evaluate() == 5000.0


def test_long_unary_chain() -> None:
    assert parse("-" * 1000 + "1").evaluate() == 1.0
    assert parse("-" * 1001 + "1").evaluate() == -1.0


def test_nesting_limit() -> None:
    code = "(" * MAX_NESTING_DEPTH + "1" + ")" * MAX_NESTING_DEPTH
    assert parse(code).evaluate() == 1.0


@pytest.mark.parametrize(
    "code",
    [
        pytest.param("(" * 1000 + "1" + ")" * 1000, id="parentheses"),
        pytest.param("-(" * 1000 + "1" + ")" * 1000, id="signed-parentheses"),
        pytest.param("(" * 1000, id="unclosed"),
    ],
)
def test_too_deeply_nested(code: str) -> None:
    with pytest.raises(ExpressionSyntaxError) as exc_info:
        parse(code)
    assert exc_info.value.errmsg == "expression nested too deeply"
    assert exc_info.value.token.type is TokenType.LPAREN
