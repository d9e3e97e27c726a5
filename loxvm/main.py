"""Command-line entry point: run a script file or an interactive prompt."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, Sequence, TextIO

from loxvm.vm import VM, InterpretResult

EX_USAGE = 64
EX_DATAERR = 65
EX_SOFTWARE = 70
EX_IOERR = 74

_LINE_LIMIT = 1023


def run_file(vm: VM, path: str) -> int:
    """Interpret the file at *path* and return the process exit status."""
    try:
        data = Path(path).read_bytes()
    except OSError:
        sys.stderr.write(f'Could not open file "{path}".\n')
        return EX_IOERR
    try:
        source = data.decode("utf-8")
    except UnicodeDecodeError:
        sys.stderr.write(f'Could not read file "{path}".\n')
        return EX_IOERR

    result = vm.interpret(source)
    if result is InterpretResult.COMPILE_ERROR:
        return EX_DATAERR
    if result is InterpretResult.RUNTIME_ERROR:
        return EX_SOFTWARE
    return 0


def repl(vm: VM, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> None:
    """Read lines from *stdin* and interpret each until end of input."""
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    while True:
        stdout.write("> ")
        stdout.flush()
        line = stdin.readline(_LINE_LIMIT)
        if not line:
            stdout.write("\n")
            break
        vm.interpret(line)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the interpreter with command-line arguments *argv*."""
    args = list(sys.argv[1:] if argv is None else argv)
    vm = VM()
    if not args:
        repl(vm)
    elif len(args) == 1:
        return run_file(vm, args[0])
    else:
        sys.stderr.write("Usage: loxc [path]\n")
        return EX_USAGE
    return 0


if __name__ == "__main__":
    sys.exit(main())