# loxvm

A small bytecode compiler and stack-based virtual machine for Lox
expressions. Source text is scanned into tokens, compiled by a Pratt
parser into a chunk of bytecode, and then executed by the VM, which
prints the value of the expression.

The compiler accepts a single expression made of number literals,
parentheses, unary minus, and the binary operators `+`, `-`, `*` and
`/`, with the usual precedence. Numbers are floating point and are
printed in `%g` style; division by zero gives an infinity or `nan`.

By default the VM also prints the compiled listing of each chunk and a
trace of the stack before every instruction.

## Installing

    pip install .

## Running

Start an interactive prompt:

    loxvm

Each line you type (up to 1023 characters) is compiled and run. End the
session with end-of-file (Ctrl-D, or Ctrl-Z then Enter on Windows).

Run a file:

    loxvm path/to/script.lox

The file must be UTF-8 text holding one expression. Exit codes:

| Code | Meaning                                  |
|------|------------------------------------------|
| 0    | success                                  |
| 64   | more than one command-line argument      |
| 65   | compile error                            |
| 70   | runtime error                            |
| 74   | the file could not be opened or decoded  |

Compile errors are written to standard error in the form
`[line: N] Error at '<lexeme>': <message>`.

## Using it from Python

    import io
    from loxvm.vm import VM, InterpretResult

    out = io.StringIO()
    vm = VM(stdout=out, trace=False)
    result = vm.interpret("(1 + 2) * -3")
    assert result is InterpretResult.OK
    assert out.getvalue() == "-9\n"

`VM(stdout=None, stderr=None, trace=True)` writes results to `stdout`
and diagnostics to `stderr` (the process streams when not given).
`VM.run(chunk)` executes an already compiled chunk; `VM.push` and
`VM.pop` work on its value stack.

Lower-level pieces:

- `loxvm.scanner.scan_tokens(source)` yields `Token` objects (kind,
  lexeme, line), ending with an `EOF` token; `Scanner.scan_token()`
  returns them one at a time.
- `loxvm.compiler.compile_source(source, listing=None)` returns a
  compiled `Chunk`, writing its disassembly to the `listing` stream if one
  is given, or raises `CompileError`, whose `messages` attribute lists the
  reported errors.
- `loxvm.chunk.Chunk` holds `code`, `lines` and `constants`;
  `loxvm.chunk.OpCode` names the instructions.
- `loxvm.debug.disassemble_chunk(chunk, name)` returns a readable
  listing of a chunk as a string, and
  `loxvm.debug.disassemble_instruction(chunk, offset)` returns the text
  of one instruction together with the offset of the next.
- `loxvm.value.format_value(value)` renders a value as the VM prints it.

## What it does not do

This is the expression stage of the language only. There are no
statements, variables, functions, classes or strings. The scanner
recognises keywords, string literals and the comparison operators, but
the compiler rejects anything other than the arithmetic listed above
(including `true`, `false` and `nil`) with "Expected expression.".
Identifiers may not contain upper-case letters other than `Z`.

## Running the tests

    pip install .[test]
    pytest