from __future__ import annotations

import argparse
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

from .backends import BACKENDS, Backend, get_backend
from .errors import GeneratorIntegrityError, LexError
from .ir import format_ir
from .lexer import lex

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERNAL = 3


def _discard(backend: Backend, artifact: str) -> None:
    # a stale artifact from an earlier run must not survive a failed one
    if backend.extension:
        Path(artifact).unlink(missing_ok=True)


def _build(backend: Backend, source_path: str, output_path: str) -> int:
    cmd = backend.build_command(source_path, output_path)
    if cmd is None:
        return EXIT_OK
    try:
        result = subprocess.run(cmd)
    except FileNotFoundError:
        print(f"Build failed: '{cmd[0]}' not found on PATH", file=sys.stderr)
        return EXIT_FAILURE
    if result.returncode != 0:
        print(f"Build failed: {' '.join(cmd)} exited with status {result.returncode}", file=sys.stderr)
        return EXIT_FAILURE
    print(f"Built {output_path}", file=sys.stderr)
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="bfasm",
        description="Brainfuck compiler: FASM x86-64 assembly, C source, or direct interpretation.",
    )
    parser.add_argument("file", metavar="FILE", help="path to the brainfuck source file")
    parser.add_argument("-o", dest="output", default="output",
                        help="name used for the generated file and executable (no extension)")
    parser.add_argument("-b", "--backend", choices=sorted(BACKENDS), default="asm",
                        help="asm (default), c, or run to interpret directly")
    parser.add_argument("--assemble", action="store_true",
                        help="invoke fasm / cc on the generated file")
    parser.add_argument("--dump-ir", action="store_true", help="print the IR to stderr")
    parser.add_argument("--trace", action="store_true", help="print code generation trace to stderr")
    args = parser.parse_args(argv)

    try:
        source = Path(args.file).read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        print(f"Couldn't read {args.file}: {e}", file=sys.stderr)
        return EXIT_FAILURE

    backend = get_backend(args.backend, trace=args.trace)
    artifact = args.output + backend.extension
    try:
        instructions = lex(source)
        if args.dump_ir:
            print(format_ir(instructions), file=sys.stderr)
        text = backend.process(instructions)
    except LexError as e:
        print(e, file=sys.stderr)
        _discard(backend, artifact)
        return EXIT_FAILURE
    except GeneratorIntegrityError as e:
        print(f"Internal error: {e}", file=sys.stderr)
        _discard(backend, artifact)
        return EXIT_INTERNAL

    for line in backend.trace:
        print(line, file=sys.stderr)

    if text is None:
        return EXIT_OK

    Path(artifact).write_text(text, encoding="utf-8")
    print(f"Wrote {artifact}", file=sys.stderr)

    if not args.assemble:
        return EXIT_OK
    return _build(backend, artifact, args.output)


if __name__ == "__main__":
    raise SystemExit(main())
