from __future__ import annotations

import io
import sys
from dataclasses import dataclass
from typing import BinaryIO, Iterable, Optional

import numpy as np
from numba import njit

from .ir import TAPE_SIZE, Instruction, OpKind
from .lexer import lex

_ADD = int(OpKind.ADD)
_SUBTRACT = int(OpKind.SUBTRACT)
_MOVE_LEFT = int(OpKind.MOVE_LEFT)
_MOVE_RIGHT = int(OpKind.MOVE_RIGHT)
_OUTPUT = int(OpKind.OUTPUT)
_INPUT = int(OpKind.INPUT)
_JUMP_IF_ZERO = int(OpKind.JUMP_IF_ZERO)
_JUMP_IF_NOT_ZERO = int(OpKind.JUMP_IF_NOT_ZERO)

STOP_OUTPUT = 1
STOP_INPUT = 2
STOP_END = 3


@njit(cache=True)
def run_until_io(ops, amounts, memory, pc, pointer):
    """
    JIT-compiled IR loop.

    Runs until the next Output/Input instruction (left for the caller, which
    owns the streams) or the end of the program.

    Returns:
        tuple: (pc, pointer, stop_reason)
    """
    mem_len = memory.shape[0]
    prog_len = ops.shape[0]

    while pc < prog_len:
        op = ops[pc]
        amount = amounts[pc]

        if op == _ADD:
            memory[pointer] = (memory[pointer] + amount) & 255
        elif op == _SUBTRACT:
            memory[pointer] = (memory[pointer] - amount) & 255
        elif op == _MOVE_RIGHT:
            pointer = (pointer + amount) % mem_len
        elif op == _MOVE_LEFT:
            pointer = (pointer - amount) % mem_len
        elif op == _OUTPUT:
            return pc, pointer, STOP_OUTPUT
        elif op == _INPUT:
            return pc, pointer, STOP_INPUT
        elif op == _JUMP_IF_ZERO:
            if memory[pointer] == 0:
                pc += amount
                continue
        elif op == _JUMP_IF_NOT_ZERO:
            if memory[pointer] != 0:
                pc -= amount
                continue

        pc += 1

    return pc, pointer, STOP_END


@dataclass(frozen=True)
class ExecutionResult:
    memory: np.ndarray
    pointer: int
    output: bytes


class Interpreter:
    """Runs IR against a wrap-around byte tape."""

    def __init__(self, tape_size: int = TAPE_SIZE):
        if tape_size <= 0:
            raise ValueError("tape_size must be positive")
        self.tape_size = tape_size
        self.reset()

    def reset(self) -> None:
        self.memory = np.zeros(self.tape_size, dtype=np.uint8)
        self.pointer = 0
        self.pc = 0
        self.ops = np.array([], dtype=np.int64)
        self.amounts = np.array([], dtype=np.int64)

    def load(self, instructions: Iterable[Instruction]) -> None:
        instructions = list(instructions)
        self.pc = 0
        self.ops = np.array([int(ins.kind) for ins in instructions], dtype=np.int64)
        self.amounts = np.array([ins.amount for ins in instructions], dtype=np.int64)

    def load_source(self, source: str) -> None:
        self.load(lex(source))

    def run(self, stdin: Optional[BinaryIO] = None, stdout: Optional[BinaryIO] = None) -> None:
        if stdin is None:
            stdin = sys.stdin.buffer
        if stdout is None:
            stdout = sys.stdout.buffer

        while True:
            pc, pointer, stop_reason = run_until_io(
                self.ops, self.amounts, self.memory, self.pc, self.pointer
            )
            self.pc = int(pc)
            self.pointer = int(pointer)

            if stop_reason == STOP_OUTPUT:
                count = int(self.amounts[self.pc])
                stdout.write(bytes([int(self.memory[self.pointer])]) * count)
                self.pc += 1
            elif stop_reason == STOP_INPUT:
                # a prompt written before the read has to be visible
                stdout.flush()
                for _ in range(int(self.amounts[self.pc])):
                    data = stdin.read(1)
                    self.memory[self.pointer] = data[0] if data else 0
                self.pc += 1
            else:
                break

        stdout.flush()


def run_instructions(
    instructions: Iterable[Instruction],
    *,
    stdin: Optional[BinaryIO] = None,
    stdout: Optional[BinaryIO] = None,
    memory: Optional[np.ndarray] = None,
    tape_size: int = TAPE_SIZE,
) -> ExecutionResult:
    """
    Execute IR and capture what it wrote.

    ``memory`` seeds the tape (copied, zero-padded to ``tape_size``).
    Output still goes to ``stdout`` when given; the bytes are returned either
    way.
    """
    interp = Interpreter(tape_size)
    if memory is not None:
        seed = np.asarray(memory, dtype=np.uint8)[:tape_size]
        interp.memory[:len(seed)] = seed
    interp.load(instructions)

    sink = io.BytesIO()
    interp.run(stdin=stdin if stdin is not None else io.BytesIO(b""), stdout=sink)
    out = sink.getvalue()
    if stdout is not None:
        stdout.write(out)
        stdout.flush()
    return ExecutionResult(memory=interp.memory, pointer=interp.pointer, output=out)


def run_source(source: str, **kwargs) -> ExecutionResult:
    return run_instructions(lex(source), **kwargs)
