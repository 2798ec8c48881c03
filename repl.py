from exprcalc.parser import ExpressionSyntaxError, parse
from exprcalc.scanner import LexicalError


if __name__ == "__main__":
    while True:
        try:
            code = input("> ")
        except EOFError:
            break

        if not code.strip():
            continue

        try:
            root = parse(code)
        except (LexicalError, ExpressionSyntaxError) as e:
            print(e)
            continue

        print(root.evaluate())
