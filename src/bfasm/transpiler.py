from __future__ import annotations

from typing import Iterable, List

from .errors import make_integrity_error
from .ir import TAPE_SIZE, Instruction, OpKind
from .lexer import lex

PROLOGUE = f"""#include <stdio.h>

#define TAPE_SIZE {TAPE_SIZE}

static unsigned char tape[TAPE_SIZE];

int main(void)
{{
    size_t p = 0;
    int c, i;

"""

EPILOGUE = """
    fflush(stdout);
    return 0;
}
"""


def _input_stmt() -> str:
    return "c = getchar(); tape[p] = c == EOF ? 0 : (unsigned char)c;"


def _repeat(stmt: str, amount: int) -> str:
    if amount == 1:
        return stmt
    return f"for (i = 0; i < {amount}; i++) {{ {stmt} }}"


def transpile(instructions: Iterable[Instruction]) -> str:
    """Re-emit IR as C source, turning jump pairs back into ``while`` loops.

    Cells are ``unsigned char`` so ``+=``/``-=`` wrap at 256 through the
    usual conversion; the pointer wraps modulo ``TAPE_SIZE``.
    """
    out: List[str] = [PROLOGUE]
    depth = 1
    index = -1

    def line(text: str) -> None:
        out.append("    " * depth + text + "\n")

    for index, ins in enumerate(instructions):
        kind, amount = ins.kind, ins.amount
        if kind == OpKind.ADD:
            line(f"tape[p] += {amount};")
        elif kind == OpKind.SUBTRACT:
            line(f"tape[p] -= {amount};")
        elif kind == OpKind.MOVE_RIGHT:
            step = amount % TAPE_SIZE
            if step:
                line(f"p = (p + {step}) % TAPE_SIZE;")
        elif kind == OpKind.MOVE_LEFT:
            step = amount % TAPE_SIZE
            if step:
                line(f"p = (p + TAPE_SIZE - {step}) % TAPE_SIZE;")
        elif kind == OpKind.OUTPUT:
            line(_repeat("putchar(tape[p]);", amount))
        elif kind == OpKind.INPUT:
            line(_repeat(_input_stmt(), amount))
        elif kind == OpKind.JUMP_IF_ZERO:
            line("while (tape[p]) {")
            depth += 1
        elif kind == OpKind.JUMP_IF_NOT_ZERO:
            if depth == 1:
                raise make_integrity_error(message="loop close with no open loop", index=index)
            depth -= 1
            line("}")
        else:
            raise ValueError(f"Unknown instruction kind: {kind!r}")

    if depth != 1:
        raise make_integrity_error(message=f"{depth - 1} loop(s) never closed", index=index)

    out.append(EPILOGUE)
    return ''.join(out)


def transpile_source(source: str) -> str:
    return transpile(lex(source))
