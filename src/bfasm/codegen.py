from __future__ import annotations

from typing import Iterable

from .errors import make_integrity_error
from .ir import TAPE_SIZE, Instruction, OpKind
from .state import GeneratorState

HEADER = """format ELF64 executable 3
SYS_read equ 0
SYS_write equ 1
SYS_exit equ 60

stdin equ 0
stdout equ 1

segment readable executable
entry main

write:
    mov rax, SYS_write
    mov rdi, stdout
    mov rsi, r8
    mov rdx, 1
    syscall
    ret

; end of input leaves 0 in read_temp, so the cell reads as 0
read:
    mov byte [read_temp], 0
    mov rax, SYS_read
    mov rdi, stdin
    mov rsi, read_temp
    mov rdx, 1
    syscall
    mov al, byte [read_temp]
    mov byte [r8], al
    ret

main:
    lea r8, [tape]
"""

FOOTER = f"""
    mov rax, SYS_exit
    mov rdi, 0
    syscall

segment readable writeable
tape: rb {TAPE_SIZE}
read_temp: rb 1
"""


class AssemblyGenerator:
    """
    FASM (x86-64 Linux) code generator.

    Register layout:
    - r8 holds the address of the current tape cell for the whole program
    - rax/rdi/rsi/rdx are scratch for the write/read syscall routines

    Loops get a label pair ``loop_start_K``/``loop_end_K`` where K comes from a
    counter that only ever grows, so labels stay unique across the flat
    label namespace of the emitted unit.
    """

    def __init__(self, *, trace: bool = False):
        self.state = GeneratorState(is_tracing=trace)

    def generate(self, instructions: Iterable[Instruction]) -> str:
        state = self.state
        state.reset()
        state.emit(HEADER)

        index = -1
        for index, ins in enumerate(instructions):
            self._emit_instruction(index, ins)

        if state.label_stack:
            raise make_integrity_error(
                message=f"{len(state.label_stack)} loop label(s) never closed",
                index=index,
            )

        state.emit(FOOTER)
        return ''.join(state.lines)

    def _emit_instruction(self, index: int, ins: Instruction) -> None:
        state = self.state
        kind, amount = ins.kind, ins.amount

        if kind == OpKind.ADD:
            self._emit_step('byte [r8]', amount, 'inc', 'add')
        elif kind == OpKind.SUBTRACT:
            self._emit_step('byte [r8]', amount, 'dec', 'sub')
        elif kind == OpKind.MOVE_RIGHT:
            self._emit_step('r8', amount, 'inc', 'add')
        elif kind == OpKind.MOVE_LEFT:
            self._emit_step('r8', amount, 'dec', 'sub')
        elif kind == OpKind.OUTPUT:
            for _ in range(amount):
                state.emit("    call write\n")
        elif kind == OpKind.INPUT:
            for _ in range(amount):
                state.emit("    call read\n")
        elif kind == OpKind.JUMP_IF_ZERO:
            label = state.open_loop()
            state.emit("    cmp byte [r8], 0\n")
            state.emit(f"    je loop_end_{label}\n")
            state.emit(f"loop_start_{label}:\n")
            state.add_trace(f"{index}: open loop {label}")
        elif kind == OpKind.JUMP_IF_NOT_ZERO:
            if not state.label_stack:
                raise make_integrity_error(message="loop close with no open loop label", index=index)
            label = state.label_stack.pop()
            state.emit("    cmp byte [r8], 0\n")
            state.emit(f"    jne loop_start_{label}\n")
            state.emit(f"loop_end_{label}:\n")
            state.add_trace(f"{index}: close loop {label}")
        else:
            raise ValueError(f"Unknown instruction kind: {kind!r}")

    def _emit_step(self, operand: str, amount: int, single: str, general: str) -> None:
        # amount 1 uses the one-operand inc/dec form
        if amount == 1:
            self.state.emit(f"    {single} {operand}\n")
        else:
            self.state.emit(f"    {general} {operand}, {amount}\n")


def generate(instructions: Iterable[Instruction], *, trace: bool = False) -> str:
    return AssemblyGenerator(trace=trace).generate(instructions)

