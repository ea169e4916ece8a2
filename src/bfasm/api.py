from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional, Tuple

from .backends import get_backend
from .interpreter import ExecutionResult, run_instructions
from .ir import Instruction
from .lexer import lex


@dataclass(frozen=True)
class CompileOptions:
    backend: str = 'asm'
    trace: bool = False


@dataclass(frozen=True)
class CompileResult:
    instructions: Tuple[Instruction, ...]
    output: str
    backend: str
    trace: Tuple[str, ...] = ()


def compile_string(source: str, *, options: Optional[CompileOptions] = None) -> CompileResult:
    opts = options or CompileOptions()
    if opts.backend == 'run':
        raise ValueError("The 'run' backend produces no artifact; use run_string()")
    backend = get_backend(opts.backend, trace=opts.trace)
    instructions = lex(source)
    output = backend.process(instructions)
    return CompileResult(
        instructions=tuple(instructions),
        output=output,
        backend=backend.name,
        trace=tuple(backend.trace),
    )


def compile_file(path: str | Path, *, options: Optional[CompileOptions] = None, encoding: str = "utf-8") -> CompileResult:
    p = Path(path)
    return compile_string(p.read_text(encoding=encoding), options=options)


def run_string(source: str, *, stdin: Optional[BinaryIO] = None, stdout: Optional[BinaryIO] = None) -> ExecutionResult:
    return run_instructions(lex(source), stdin=stdin, stdout=stdout)
