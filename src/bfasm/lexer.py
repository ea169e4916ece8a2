from __future__ import annotations

from typing import List, Tuple

from .errors import UnmatchedCloseError, UnmatchedOpenError, make_lex_error
from .ir import LOOP_CLOSE, LOOP_OPEN, SYMBOLS, Instruction, OpKind
from .scanner import EOF, Scanner


class RunLengthLexer:
    """
    Compresses a Brainfuck program into IR.

    - Runs of ``+ - < > . ,`` become one instruction carrying the run length
    - ``[``/``]`` become jump instructions whose amounts give the distance
      to their partner (see ``Instruction``)

    Bracket matching uses an explicit stack of IR positions, so nesting depth
    is only bounded by memory.
    """

    def __init__(self, source: str):
        self.source = source
        self.scanner = Scanner(source)

    def lex(self) -> List[Instruction]:
        scanner = self.scanner
        out: List[Instruction] = []
        # (IR position, offset, line, column) of each pending '['
        stack: List[Tuple[int, int, int, int]] = []

        while scanner.current != EOF:
            ch = scanner.current

            if ch == LOOP_OPEN:
                stack.append((len(out), scanner.offset, scanner.line, scanner.column))
                out.append(Instruction(OpKind.JUMP_IF_ZERO, 0))
                scanner.advance()
                continue

            if ch == LOOP_CLOSE:
                if not stack:
                    raise make_lex_error(
                        UnmatchedCloseError,
                        message="']' has no matching '['",
                        source=self.source,
                        line=scanner.line,
                        column=scanner.column,
                        offset=scanner.offset,
                    )
                pos = stack.pop()[0]
                diff = len(out) - pos
                out.append(Instruction(OpKind.JUMP_IF_NOT_ZERO, diff - 1))
                out[pos] = Instruction(OpKind.JUMP_IF_ZERO, diff + 1)
                scanner.advance()
                continue

            kind = SYMBOLS[ch]
            amount = 0
            while scanner.current == ch:
                amount += 1
                scanner.advance()
            out.append(Instruction(kind, amount))

        if stack:
            _, offset, line, column = stack[0]
            count = len(stack)
            raise make_lex_error(
                UnmatchedOpenError,
                message=f"{count} unclosed '[' at end of input, first one here",
                source=self.source,
                line=line,
                column=column,
                offset=offset,
                count=count,
            )

        return out


def lex(source: str) -> List[Instruction]:
    return RunLengthLexer(source).lex()
