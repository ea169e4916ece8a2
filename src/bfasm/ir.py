from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Iterable

TAPE_SIZE = 30000


class OpKind(IntEnum):
    ADD = 0
    SUBTRACT = 1
    MOVE_LEFT = 2
    MOVE_RIGHT = 3
    OUTPUT = 4
    INPUT = 5
    JUMP_IF_ZERO = 6
    JUMP_IF_NOT_ZERO = 7

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def is_jump(self) -> bool:
        return self in (OpKind.JUMP_IF_ZERO, OpKind.JUMP_IF_NOT_ZERO)


_LABELS = {
    OpKind.ADD: 'Add',
    OpKind.SUBTRACT: 'Subtract',
    OpKind.MOVE_LEFT: 'MoveLeft',
    OpKind.MOVE_RIGHT: 'MoveRight',
    OpKind.OUTPUT: 'Output',
    OpKind.INPUT: 'Input',
    OpKind.JUMP_IF_ZERO: 'JumpIfZero',
    OpKind.JUMP_IF_NOT_ZERO: 'JumpIfNotZero',
}

# Symbols that collapse into a single instruction per run.
SYMBOLS: Dict[str, OpKind] = {
    '+': OpKind.ADD,
    '-': OpKind.SUBTRACT,
    '<': OpKind.MOVE_LEFT,
    '>': OpKind.MOVE_RIGHT,
    '.': OpKind.OUTPUT,
    ',': OpKind.INPUT,
}

LOOP_OPEN = '['
LOOP_CLOSE = ']'
ALPHABET = frozenset(SYMBOLS) | {LOOP_OPEN, LOOP_CLOSE}


@dataclass(frozen=True)
class Instruction:
    """
    One IR unit.

    For run kinds, ``amount`` is the number of identical symbols merged.
    For jumps it is a distance in IR slots:

    - JumpIfZero at ``i``: matching close sits at ``i + amount - 1``,
      so a zero cell continues at ``i + amount`` (one past the close).
    - JumpIfNotZero at ``j``: matching open sits at ``j - amount - 1``,
      so a non-zero cell continues at ``j - amount`` (first body slot).
    """

    kind: OpKind
    amount: int

    def __str__(self) -> str:
        return f"{self.kind.label}({self.amount})"


def format_ir(instructions: Iterable[Instruction]) -> str:
    return ' '.join(str(ins) for ins in instructions)
