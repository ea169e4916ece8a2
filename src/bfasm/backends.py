from __future__ import annotations

from typing import BinaryIO, Dict, List, Optional, Sequence

from .codegen import AssemblyGenerator
from .interpreter import Interpreter
from .ir import Instruction
from .transpiler import transpile


class Backend:
    """Consumes IR and produces either artifact text or a side effect.

    Artifact backends also know the external toolchain command that turns
    their text into an executable; running it is left to the caller.
    """

    name = ''
    extension = ''

    def __init__(self, *, trace: bool = False):
        self.tracing = trace

    @property
    def trace(self) -> List[str]:
        return []

    def process(self, instructions: Sequence[Instruction], **kwargs) -> Optional[str]:
        raise NotImplementedError

    def build_command(self, source_path: str, output_path: str) -> Optional[List[str]]:
        return None


class AssemblyBackend(Backend):
    name = 'asm'
    extension = '.asm'

    def __init__(self, *, trace: bool = False):
        super().__init__(trace=trace)
        self.generator = AssemblyGenerator(trace=self.tracing)

    @property
    def trace(self) -> List[str]:
        return list(self.generator.state.trace)

    def process(self, instructions: Sequence[Instruction], **kwargs) -> str:
        return self.generator.generate(instructions)

    def build_command(self, source_path: str, output_path: str) -> List[str]:
        return ['fasm', source_path, output_path]


class CBackend(Backend):
    name = 'c'
    extension = '.c'

    def process(self, instructions: Sequence[Instruction], **kwargs) -> str:
        return transpile(instructions)

    def build_command(self, source_path: str, output_path: str) -> List[str]:
        return ['cc', '-O2', '-o', output_path, source_path]


class InterpreterBackend(Backend):
    name = 'run'

    def __init__(self, tape_size: Optional[int] = None, *, trace: bool = False):
        super().__init__(trace=trace)
        self.interpreter = Interpreter() if tape_size is None else Interpreter(tape_size)

    def process(
        self,
        instructions: Sequence[Instruction],
        *,
        stdin: Optional[BinaryIO] = None,
        stdout: Optional[BinaryIO] = None,
        **kwargs,
    ) -> None:
        self.interpreter.reset()
        self.interpreter.load(instructions)
        self.interpreter.run(stdin=stdin, stdout=stdout)
        return None


BACKENDS: Dict[str, type] = {
    AssemblyBackend.name: AssemblyBackend,
    CBackend.name: CBackend,
    InterpreterBackend.name: InterpreterBackend,
}


def get_backend(name: str, **kwargs) -> Backend:
    cls = BACKENDS.get(name)
    if cls is None:
        raise ValueError(f"Unknown backend '{name}' (expected one of: {', '.join(sorted(BACKENDS))})")
    return cls(**kwargs)
