#!/usr/bin/env python3
"""
Execute IR in-process with the JIT interpreter.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import io

import pytest

from bfasm.interpreter import Interpreter, run_instructions, run_source
from bfasm.ir import TAPE_SIZE
from bfasm.lexer import lex

HELLO_WORLD = (
    "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]"
    ">>.>---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++."
)


def test_hello_world():
    assert run_source(HELLO_WORLD).output == b"Hello World!\n"


def test_single_character():
    assert run_source("+" * 65 + ".").output == b"A"


def test_output_run_repeats_cell():
    assert run_source("+" * 66 + "...").output == b"BBB"


def test_cell_wraps_up_past_255():
    result = run_source("+" * 255 + "." + "+" + ".")
    assert result.output == b"\xff\x00"
    assert result.memory[0] == 0


def test_cell_wraps_down_past_zero():
    assert run_source("-.").output == b"\xff"


@pytest.mark.parametrize("start", [1, 7, 128, 255])
def test_clear_loop_terminates_at_zero(start):
    result = run_instructions(lex("[-]"), memory=[start])
    assert result.memory[0] == 0


def test_loop_skipped_on_zero_cell():
    assert run_source("[+++.]+.").output == b"\x01"


def test_pointer_wraps_around_tape():
    assert run_source("<").pointer == TAPE_SIZE - 1
    assert run_instructions(lex(">>>"), tape_size=2).pointer == 1
    result = run_instructions(lex("<+"), tape_size=4)
    assert list(result.memory) == [0, 0, 0, 1]


def test_input_echo():
    assert run_source(",.,.", stdin=io.BytesIO(b"hi")).output == b"hi"


def test_input_run_reads_one_byte_per_repeat():
    result = run_source(",,.", stdin=io.BytesIO(b"xy"))
    assert result.output == b"y"


def test_end_of_input_stores_zero():
    result = run_instructions(lex(","), memory=[5], stdin=io.BytesIO(b""))
    assert result.memory[0] == 0


def test_output_also_goes_to_stream():
    buf = io.BytesIO()
    result = run_source("+.", stdout=buf)
    assert buf.getvalue() == b"\x01"
    assert result.output == b"\x01"


def test_interpreter_object():
    interp = Interpreter(tape_size=16)
    interp.load_source("+>++")
    interp.run(stdin=io.BytesIO(), stdout=io.BytesIO())
    assert list(interp.memory[:2]) == [1, 2]
    assert interp.pointer == 1

    interp.reset()
    assert not interp.memory.any()
    assert interp.pointer == 0


def test_tape_size_must_be_positive():
    with pytest.raises(ValueError):
        Interpreter(tape_size=0)


class _SnoopingInput(io.BytesIO):
    """Records what the program had written by the time it asked for input."""

    def __init__(self, data, sink):
        super().__init__(data)
        self.sink = sink
        self.seen = []

    def read(self, size=-1):
        self.seen.append(self.sink.getvalue())
        return super().read(size)


def test_prompt_is_flushed_before_reading():
    sink = io.BytesIO()
    stdout = io.BufferedWriter(sink)
    stdin = _SnoopingInput(b"x", sink)
    interp = Interpreter(tape_size=8)
    interp.load_source("+" * 63 + ".,.")
    interp.run(stdin=stdin, stdout=stdout)
    assert stdin.seen == [b"?"]
    assert sink.getvalue() == b"?x"
