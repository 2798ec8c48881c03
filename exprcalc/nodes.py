import math
import sys
from dataclasses import dataclass
from typing import Callable, Iterator, Optional, TextIO, cast

from exprcalc.utils import PrintableEnum

INDENT_STEP = 2


@dataclass
class CalcRuntimeError(Exception):
    errmsg: str

    def __str__(self) -> str:
        return f"Runtime error: {self.errmsg}"


class _Node:
    def evaluate(self) -> float:
        return evaluate(cast(Node, self))

    def lines(self, indent: int = 0) -> Iterator[str]:
        return iter_lines(cast(Node, self), indent)

    def print(self, indent: int = 0, file: Optional[TextIO] = None) -> None:
        out = file if file is not None else sys.stdout
        for line in self.lines(indent):
            out.write(line + "\n")


class UnaryOperator(PrintableEnum):
    POS = "+"
    NEG = "-"


class BinaryOperator(PrintableEnum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"


@dataclass(frozen=True)
class NumberLiteral(_Node):
    value: float


@dataclass(frozen=True)
class UnaryOp(_Node):
    operator: UnaryOperator
    operand: "Node"


@dataclass(frozen=True)
class BinaryOp(_Node):
    left: "Node"
    operator: BinaryOperator
    right: "Node"


Node = NumberLiteral | UnaryOp | BinaryOp


def _divide(a: float, b: float) -> float:
    # float division by zero follows IEEE-754 instead of raising
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


BINARY_IMPLS: dict[BinaryOperator, Callable[[float, float], float]] = {
    BinaryOperator.ADD: lambda a, b: a + b,
    BinaryOperator.SUB: lambda a, b: a - b,
    BinaryOperator.MUL: lambda a, b: a * b,
    BinaryOperator.DIV: _divide,
}

UNARY_IMPLS: dict[UnaryOperator, Callable[[float], float]] = {
    UnaryOperator.POS: lambda a: a,
    UnaryOperator.NEG: lambda a: -a,
}


def evaluate(node: Node) -> float:
    """Evaluates the tree rooted at `node` in post-order.

    An explicit stack is used instead of recursion, so trees of any depth are
    evaluated. Each stack entry is a node and whether its operands have
    already been pushed onto `values`.
    """
    values: list[float] = []
    stack: list[tuple[Node, bool]] = [(node, False)]
    while stack:
        current, operands_ready = stack.pop()
        if isinstance(current, NumberLiteral):
            values.append(current.value)
        elif isinstance(current, UnaryOp):
            unary_impl = UNARY_IMPLS.get(current.operator)
            if unary_impl is None:
                raise CalcRuntimeError(f"unknown unary operator {current.operator!r}")
            if operands_ready:
                values.append(unary_impl(values.pop()))
            else:
                stack.append((current, True))
                stack.append((current.operand, False))
        elif isinstance(current, BinaryOp):
            binary_impl = BINARY_IMPLS.get(current.operator)
            if binary_impl is None:
                raise CalcRuntimeError(f"unknown binary operator {current.operator!r}")
            if operands_ready:
                right = values.pop()
                left = values.pop()
                values.append(binary_impl(left, right))
            else:
                stack.append((current, True))
                stack.append((current.right, False))
                stack.append((current.left, False))
        else:
            raise CalcRuntimeError(f"unexpected node {current!r}")
    return values.pop()


def iter_lines(node: Node, indent: int = 0) -> Iterator[str]:
    """Lazily yields the indented tree dump of `node`, one line per node.

    Children are placed `INDENT_STEP` spaces deeper than their parent, left
    operand before right.
    """
    stack: list[tuple[Node, int]] = [(node, indent)]
    while stack:
        current, depth = stack.pop()
        pad = " " * depth
        if isinstance(current, NumberLiteral):
            yield f"{pad}Number({current.value:g})"
        elif isinstance(current, UnaryOp):
            yield f"{pad}UnaryOp({current.operator.value})"
            stack.append((current.operand, depth + INDENT_STEP))
        elif isinstance(current, BinaryOp):
            yield f"{pad}BinaryOp({current.operator.value})"
            stack.append((current.right, depth + INDENT_STEP))
            stack.append((current.left, depth + INDENT_STEP))
        else:
            raise TypeError(f"Unexpected node type: {current!r}")


def dump(node: Node, indent: int = 0) -> str:
    return "\n".join(iter_lines(node, indent))
