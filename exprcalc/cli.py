"""
Command-line front end.

Parses and evaluates each expression argument independently, printing the
tree dump and the value, or the error for that expression.
"""

import logging
from typing import List, Optional

import typer

from exprcalc.parser import ExpressionSyntaxError, parse
from exprcalc.scanner import LexicalError, tokenize

logger = logging.getLogger(__name__)

app = typer.Typer(help="Parse and evaluate arithmetic expressions", add_completion=False)


# options go before the expressions, which may start with a sign ("-5", "--5")
@app.command(context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False})
def main(
    expressions: Optional[List[str]] = typer.Argument(None, help="Expressions to evaluate, one per argument"),
    indent: int = typer.Option(4, "--indent", min=0, help="Indentation of the tree dump"),
    no_tree: bool = typer.Option(False, "--no-tree", help="Print only the evaluated value"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        force=True,
    )

    failed = 0
    for code in expressions or []:
        try:
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("tokens of %r: %s", code, " ".join(str(t) for t in tokenize(code)))
            root = parse(code)
        except (LexicalError, ExpressionSyntaxError) as e:
            typer.echo(str(e), err=True)
            failed += 1
            continue

        value = root.evaluate()
        logger.debug("%r evaluated to %r", code, value)
        if not no_tree:
            typer.echo(f"parse({code}):")
            for line in root.lines(indent):
                typer.echo(line)
        typer.echo(f"eval({code})={value:g}")

    if failed:
        logger.debug("%d of %d expressions failed", failed, len(expressions or []))
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
