from dataclasses import dataclass
from typing import NoReturn

from exprcalc.nodes import BinaryOp, BinaryOperator, Node, NumberLiteral, UnaryOp, UnaryOperator
from exprcalc.scanner import Scanner, Token, TokenType
from exprcalc.utils import point_at


@dataclass
class ExpressionSyntaxError(Exception):
    errmsg: str
    code: str
    error_char_idx: int
    token: Token

    def __str__(self) -> str:
        return "\n".join([f"Syntax error: {self.errmsg}", point_at(self.code, self.error_char_idx)])


TERM_OPERATORS = {
    TokenType.PLUS: BinaryOperator.ADD,
    TokenType.MINUS: BinaryOperator.SUB,
}

FACTOR_OPERATORS = {
    TokenType.MULTIPLY: BinaryOperator.MUL,
    TokenType.DIVIDE: BinaryOperator.DIV,
}

UNARY_OPERATORS = {
    TokenType.PLUS: UnaryOperator.POS,
    TokenType.MINUS: UnaryOperator.NEG,
}

# each level of parentheses costs four frames of recursion
MAX_NESTING_DEPTH = 100


class Parser:
    """Recursive descent parser over the tokens of a `Scanner`.

    Grammar, from the lowest precedence to the highest:

        expression := term (('+' | '-') term)*
        term       := factor (('*' | '/') factor)*
        factor     := ('+' | '-') factor | NUMBER | '(' expression ')'

    Binary operators are left-associative, unary signs nest to the right.
    Parentheses deeper than `MAX_NESTING_DEPTH` are rejected.
    """

    def __init__(self, scanner: Scanner) -> None:
        self.scanner = scanner
        self.current_token = scanner.next_token()
        self._parsed = False
        self._nesting_depth = 0

    def parse(self) -> Node:
        if self._parsed:
            raise RuntimeError("Parser.parse() can only be called once")
        self._parsed = True

        node = self.expression()
        if self.current_token.type is not TokenType.END_OF_INPUT:
            self._error("unexpected token after expression")
        return node

    def eat(self, token_type: TokenType) -> Token:
        token = self.current_token
        if token.type is not token_type:
            self._error("unexpected token")
        self.current_token = self.scanner.next_token()
        return token

    def expression(self) -> Node:
        node = self.term()
        while self.current_token.type in TERM_OPERATORS:
            operator = TERM_OPERATORS[self.eat(self.current_token.type).type]
            node = BinaryOp(left=node, operator=operator, right=self.term())
        return node

    def term(self) -> Node:
        node = self.factor()
        while self.current_token.type in FACTOR_OPERATORS:
            operator = FACTOR_OPERATORS[self.eat(self.current_token.type).type]
            node = BinaryOp(left=node, operator=operator, right=self.factor())
        return node

    def factor(self) -> Node:
        # a chain of signs is folded in a loop, innermost sign applied first
        signs: list[UnaryOperator] = []
        while self.current_token.type in UNARY_OPERATORS:
            signs.append(UNARY_OPERATORS[self.eat(self.current_token.type).type])

        node = self._primary()
        for operator in reversed(signs):
            node = UnaryOp(operator=operator, operand=node)
        return node

    def _primary(self) -> Node:
        token = self.current_token
        if token.type is TokenType.NUMBER:
            self.eat(TokenType.NUMBER)
            return NumberLiteral(token.value)
        elif token.type is TokenType.LPAREN:
            if self._nesting_depth >= MAX_NESTING_DEPTH:
                self._error("expression nested too deeply")
            self.eat(TokenType.LPAREN)
            self._nesting_depth += 1
            node = self.expression()
            self._nesting_depth -= 1
            self.eat(TokenType.RPAREN)
            return node
        else:
            self._error("unexpected token in factor")

    def _error(self, errmsg: str) -> NoReturn:
        raise ExpressionSyntaxError(
            errmsg,
            code=self.scanner.code,
            error_char_idx=self.current_token.pos,
            token=self.current_token,
        )


def parse(code: str) -> Node:
    return Parser(Scanner(code)).parse()
