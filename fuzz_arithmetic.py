import math
import random
import re
import string
import warnings

from exprcalc.parser import parse


def eval_py(code: str) -> float | str:
    try:
        return eval(code)
    except Exception as e:
        return str(e)


def eval_my(code: str) -> float | str:
    try:
        return parse(code).evaluate()
    except Exception as e:
        return str(e)


def generate_number() -> str:
    digits = "".join(random.choices(string.digits, k=random.randint(1, 3)))
    fraction = "".join(random.choices(string.digits, k=random.randint(1, 2)))
    return random.choice([digits, f"{digits}.", f".{fraction}", f"{digits}.{fraction}"])


def generate_expression(depth: int = 0) -> str:
    roll = random.random()
    if depth > 3 or roll < 0.35:
        return generate_number()
    elif roll < 0.5:
        return random.choice("+-") + generate_expression(depth + 1)
    elif roll < 0.65:
        return f"({generate_expression(depth + 1)})"
    else:
        sep = random.choice(["", " "])
        return sep.join([generate_expression(depth + 1), random.choice("+-*/"), generate_expression(depth + 1)])


def mutate(code: str) -> str:
    """Inserts or deletes one character, so that malformed input is fuzzed too"""
    i = random.randrange(len(code) + 1)
    if random.random() < 0.5:
        return code[:i] + random.choice(string.digits + ".()+-*/ ") + code[i:]
    return code[:i] + code[i + 1 :]


if __name__ == "__main__":
    warnings.filterwarnings("ignore")

    while True:
        code = generate_expression()
        if random.random() < 0.3:
            code = mutate(code)

        if re.findall(r"\*\s*\*", code):
            continue  # avoid generating powers (10**4)

        if re.findall(r"/\s*/", code):
            continue  # avoid generating int devision (10 // 3)

        res_py = eval_py(code)
        res_my = eval_my(code)
        if isinstance(res_py, (int, float)) and isinstance(res_my, float) and math.isclose(res_my, float(res_py)):
            continue
        if isinstance(res_py, str) and isinstance(res_my, str):
            continue
        if isinstance(res_py, str) and res_py.startswith("leading zeros in decimal integer literals are not permitted"):
            continue
        if isinstance(res_py, str) and "division by zero" in res_py and isinstance(res_my, float):
            continue  # python raises, we follow IEEE-754
        print(f"{code!r}\npy: {res_py}\nmy: {res_my}\n\n")
