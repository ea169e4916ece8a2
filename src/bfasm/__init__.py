from .api import CompileOptions, CompileResult, compile_file, compile_string, run_string
from .backends import AssemblyBackend, Backend, CBackend, InterpreterBackend, get_backend
from .codegen import AssemblyGenerator, generate
from .errors import BFASMError, GeneratorIntegrityError, LexError, UnmatchedCloseError, UnmatchedOpenError
from .interpreter import ExecutionResult, Interpreter, run_instructions, run_source
from .ir import TAPE_SIZE, Instruction, OpKind, format_ir
from .lexer import RunLengthLexer, lex
from .scanner import EOF, Scanner
from .transpiler import transpile, transpile_source

__version__ = '0.1.0'

__all__ = [
    'AssemblyBackend',
    'AssemblyGenerator',
    'Backend',
    'BFASMError',
    'CBackend',
    'CompileOptions',
    'CompileResult',
    'EOF',
    'ExecutionResult',
    'GeneratorIntegrityError',
    'Instruction',
    'Interpreter',
    'InterpreterBackend',
    'LexError',
    'OpKind',
    'RunLengthLexer',
    'Scanner',
    'TAPE_SIZE',
    'UnmatchedCloseError',
    'UnmatchedOpenError',
    'compile_file',
    'compile_string',
    'format_ir',
    'generate',
    'get_backend',
    'lex',
    'run_instructions',
    'run_source',
    'run_string',
    'transpile',
    'transpile_source',
]
