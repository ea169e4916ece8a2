#!/usr/bin/env python3
"""
Public API and backend selection.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import io

import pytest

from bfasm import (
    AssemblyBackend,
    CBackend,
    CompileOptions,
    InterpreterBackend,
    UnmatchedCloseError,
    compile_file,
    compile_string,
    get_backend,
    lex,
    run_string,
)
from bfasm.ir import Instruction, OpKind


def test_compile_string_defaults_to_assembly():
    result = compile_string("+++.")
    assert result.backend == "asm"
    assert result.instructions == (Instruction(OpKind.ADD, 3), Instruction(OpKind.OUTPUT, 1))
    assert result.output.count("add byte [r8], 3") == 1
    assert result.output.count("call write") == 1


def test_compile_string_c_backend():
    result = compile_string("+[-]", options=CompileOptions(backend="c"))
    assert result.backend == "c"
    assert result.output.startswith("#include <stdio.h>")
    assert "while (tape[p]) {" in result.output


def test_compile_string_trace():
    result = compile_string("[]", options=CompileOptions(trace=True))
    assert result.trace == ("0: open loop 0", "1: close loop 0")
    assert compile_string("[]").trace == ()


def test_malformed_source_produces_nothing():
    with pytest.raises(UnmatchedCloseError):
        compile_string("]")


def test_run_backend_is_not_an_artifact():
    with pytest.raises(ValueError):
        compile_string("+", options=CompileOptions(backend="run"))


def test_unknown_backend():
    with pytest.raises(ValueError):
        get_backend("llvm")


def test_compile_file(tmp_path):
    src = tmp_path / "prog.bf"
    src.write_text("add three ++ + then print .\n", encoding="utf-8")
    assert compile_file(src).instructions == (Instruction(OpKind.ADD, 3), Instruction(OpKind.OUTPUT, 1))


def test_run_string():
    assert run_string("+" * 72 + ".+.").output == b"HI"


def test_backends_share_one_front_end():
    ir = lex("++[>+<-]>.")
    assert isinstance(get_backend("asm"), AssemblyBackend)
    assert isinstance(get_backend("c"), CBackend)
    assert "call write" in get_backend("asm").process(ir)
    assert "putchar(tape[p]);" in get_backend("c").process(ir)

    out = io.BytesIO()
    backend = get_backend("run")
    assert isinstance(backend, InterpreterBackend)
    assert backend.process(ir, stdin=io.BytesIO(), stdout=out) is None
    assert out.getvalue() == b"\x02"


def test_build_commands():
    assert AssemblyBackend().build_command("out.asm", "out") == ["fasm", "out.asm", "out"]
    assert CBackend().build_command("out.c", "out") == ["cc", "-O2", "-o", "out", "out.c"]
    assert InterpreterBackend().build_command("x", "y") is None


def test_trace_flag_reaches_generator():
    backend = AssemblyBackend(trace=True)
    assert backend.tracing
    backend.process(lex("[]"))
    assert backend.trace == ["0: open loop 0", "1: close loop 0"]
    assert AssemblyBackend().trace == []
