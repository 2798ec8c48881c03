import enum
import string
from dataclasses import dataclass
from typing import Iterator

from exprcalc.utils import PrintableEnum, point_at


@dataclass
class LexicalError(Exception):
    errmsg: str
    code: str
    error_char_idx: int

    def __str__(self) -> str:
        return "\n".join([f"Lexical error: {self.errmsg}", point_at(self.code, self.error_char_idx)])


class TokenType(PrintableEnum):
    NUMBER = enum.auto()
    PLUS = enum.auto()
    MINUS = enum.auto()
    MULTIPLY = enum.auto()
    DIVIDE = enum.auto()
    LPAREN = enum.auto()
    RPAREN = enum.auto()
    END_OF_INPUT = enum.auto()
    INVALID = enum.auto()  # never produced by Scanner, bad characters raise LexicalError


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: float = 0.0
    pos: int = 0

    def __str__(self) -> str:
        if self.type is TokenType.NUMBER:
            return f"<{self.type}>{self.value:g}"
        return f"<{self.type}>"


SINGLE_CHAR_TOKENS = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MULTIPLY,
    "/": TokenType.DIVIDE,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
}


def _is_valid_in_number(s: str) -> bool:
    return s in string.digits or s == "."


class Scanner:
    """Produces tokens from `code` one at a time, on demand.

    Once the end of the code is reached every further call to `next_token`
    returns an END_OF_INPUT token.
    """

    def __init__(self, code: str) -> None:
        self.code = code
        self.pos = 0

    def next_token(self) -> Token:
        self._skip_whitespace()
        if self.pos >= len(self.code):
            return Token(type=TokenType.END_OF_INPUT, pos=len(self.code))

        char = self.code[self.pos]
        if _is_valid_in_number(char):
            return self._number()
        elif char in SINGLE_CHAR_TOKENS:
            self.pos += 1
            return Token(type=SINGLE_CHAR_TOKENS[char], pos=self.pos - 1)
        else:
            raise LexicalError(f"invalid character {char!r}", code=self.code, error_char_idx=self.pos)

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            yield token
            if token.type is TokenType.END_OF_INPUT:
                return

    def _skip_whitespace(self) -> None:
        while self.pos < len(self.code) and self.code[self.pos].isspace():
            self.pos += 1

    def _number(self) -> Token:
        start = self.pos
        seen_dot = False
        while self.pos < len(self.code) and _is_valid_in_number(self.code[self.pos]):
            if self.code[self.pos] == ".":
                if seen_dot:
                    raise LexicalError("invalid number format", code=self.code, error_char_idx=self.pos)
                seen_dot = True
            self.pos += 1

        lexeme = self.code[start : self.pos]
        if lexeme == ".":
            raise LexicalError("invalid number format", code=self.code, error_char_idx=start)
        return Token(type=TokenType.NUMBER, value=float(lexeme), pos=start)


def tokenize(code: str) -> list[Token]:
    return list(Scanner(code))
