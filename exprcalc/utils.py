import enum


class PrintableEnum(enum.Enum):
    def __str__(self) -> str:
        return self.name

    __repr__ = __str__


def point_at(code: str, idx: int, context: int = 10) -> str:
    """Two lines: a window of `code` around `idx` and a caret under `idx`"""
    start = max(0, idx - context)
    end = min(len(code), idx + context)
    ellipsis_pre = start > 0
    ellipsis_post = end < len(code)
    window = ("..." if ellipsis_pre else "") + code[start:end] + ("..." if ellipsis_post else "")
    caret = " " * (idx - start + (3 if ellipsis_pre else 0)) + "^"
    return "\n".join([window, caret])
