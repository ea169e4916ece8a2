from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, List, Optional


def _build_context(lines: List[str], line_no_1: int, column_1: int, *, context: int = 2) -> str:
    idx = min(max(1, line_no_1), max(1, len(lines)))
    start = max(1, idx - context)
    end = min(len(lines), idx + context)

    out: List[str] = []
    for i in range(start, end + 1):
        prefix = '>' if i == idx else ' '
        out.append(f"{prefix} {i:4d} | {lines[i - 1]}")
        if i == idx:
            out.append(f"  {'':4s} | {' ' * max(0, column_1 - 1)}^")
    return "\n".join(out)


def _hint_for(kind: str) -> Optional[str]:
    if kind == 'UnmatchedClose':
        return "Remove the extra ']' or add a matching '[' before it."
    if kind == 'UnmatchedOpen':
        return "Every '[' needs a ']' later in the program. Check nested loops."
    return None


@dataclass
class BFASMError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class LexError(BFASMError):
    line: int
    column: int
    offset: int
    context: str

    kind: ClassVar[str] = 'LexError'


@dataclass
class UnmatchedCloseError(LexError):
    kind: ClassVar[str] = 'UnmatchedClose'


@dataclass
class UnmatchedOpenError(LexError):
    count: int = 1

    kind: ClassVar[str] = 'UnmatchedOpen'


@dataclass
class GeneratorIntegrityError(BFASMError):
    """Raised when a backend meets IR whose loops do not balance.

    The lexer guarantees balance, so this always points at a bug in the
    translator rather than at the user's program.
    """

    index: int


def make_lex_error(cls, *, message: str, source: str, line: int, column: int, offset: int, **extra) -> LexError:
    lines = source.split('\n')
    ctx = _build_context(lines, line, column)
    hint = _hint_for(cls.kind)
    hint_block = f"\nHint: {hint}" if hint else ""
    return cls(
        message=f"{cls.kind}: {message} (line {line}, column {column})\n{ctx}{hint_block}",
        line=line,
        column=column,
        offset=offset,
        context=ctx,
        **extra,
    )


def make_integrity_error(*, message: str, index: int) -> GeneratorIntegrityError:
    return GeneratorIntegrityError(
        message=f"GeneratorIntegrityViolation: {message} (instruction {index}); this is a bug in bfasm, not in the program",
        index=index,
    )
