#!/usr/bin/env python3
"""
C transpiler backend.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from bfasm.errors import GeneratorIntegrityError, UnmatchedOpenError
from bfasm.ir import TAPE_SIZE, Instruction, OpKind
from bfasm.transpiler import transpile, transpile_source


def _body(c_src):
    lines = c_src.split("\n")
    start = lines.index("    int c, i;") + 2
    end = lines.index("    fflush(stdout);") - 1
    return lines[start:end]


def test_prologue_and_epilogue():
    c_src = transpile([])
    assert c_src.startswith("#include <stdio.h>")
    assert f"#define TAPE_SIZE {TAPE_SIZE}" in c_src
    assert "static unsigned char tape[TAPE_SIZE];" in c_src
    assert c_src.rstrip().endswith("}")


def test_add_then_output():
    assert _body(transpile_source("+++.")) == [
        "    tape[p] += 3;",
        "    putchar(tape[p]);",
    ]


def test_moves_wrap_around_tape():
    assert _body(transpile_source(">><")) == [
        "    p = (p + 2) % TAPE_SIZE;",
        "    p = (p + TAPE_SIZE - 1) % TAPE_SIZE;",
    ]
    assert _body(transpile_source(">" * (TAPE_SIZE + 1))) == ["    p = (p + 1) % TAPE_SIZE;"]


def test_repeated_io_keeps_run_length():
    body = _body(transpile_source("..,"))
    assert body[0] == "    for (i = 0; i < 2; i++) { putchar(tape[p]); }"
    assert body[1] == "    c = getchar(); tape[p] = c == EOF ? 0 : (unsigned char)c;"


def test_loops_become_while_blocks():
    assert _body(transpile_source("[[-]>]")) == [
        "    while (tape[p]) {",
        "        while (tape[p]) {",
        "            tape[p] -= 1;",
        "        }",
        "        p = (p + 1) % TAPE_SIZE;",
        "    }",
    ]
    assert "goto" not in transpile_source("[[-]>]")


def test_malformed_source_is_rejected():
    with pytest.raises(UnmatchedOpenError):
        transpile_source("[")


@pytest.mark.parametrize("ir", [
    [Instruction(OpKind.JUMP_IF_NOT_ZERO, 0)],
    [Instruction(OpKind.JUMP_IF_ZERO, 2)],
])
def test_unbalanced_ir_is_integrity_violation(ir):
    with pytest.raises(GeneratorIntegrityError):
        transpile(ir)
