"""Parser for the Karel language.

This module turns raw source texts into the normalized form the
interpreter executes, in two stages:

1. **Preprocessing**: every physical line of every source is cut at the
   first `#`, trimmed, and dropped if nothing is left. The surviving
   lines form one flat sequence, numbered from zero, in source order.

2. **Indexing**: a single pass records the position of every `def` line
   under the procedure's name. The entry point is the procedure named
   `main`.

Blocks are not parsed here; the interpreter locates them while it runs.
For tooling there is also `parse_outline`, which checks the block
structure of a whole normalized program with a Lark grammar and returns
its outline tree.
"""

from __future__ import annotations

import re
from typing import Dict, Iterable, List, Optional

from lark import Lark, Transformer
from lark.exceptions import UnexpectedEOF, UnexpectedInput, VisitError

from .ast import Block, Instruction, Node, Outline, Procedure
from .errors import (
    KarelSyntaxError, NotANumber, NotDefined, NotEnoughArguments,
    UnexpectedEndOfFile, WrongBlockEnd,
)
from .types import (
    BlockKind, COMMANDS, Command, InstructionLine, PREDICATES, Program, TERMINATORS,
)


COMMENT_MARKER = '#'

COUNT_PATTERN = re.compile(r'[0-9]+')


def preprocess(sources: Iterable[str]) -> List[InstructionLine]:
    """Normalize source texts into one sequence of instruction lines.

    Each physical line is handled on its own: everything from the first
    comment marker on is removed, surrounding whitespace is trimmed, and
    empty results are discarded. Line numbers of the original files are
    not kept; errors later quote the normalized text instead.
    """
    lines: List[InstructionLine] = []
    for source in sources:
        for raw in source.split('\n'):
            comment = raw.find(COMMENT_MARKER)
            if comment != -1:
                raw = raw[:comment]
            text = raw.strip()
            if text:
                lines.append(InstructionLine(text, len(lines)))
    return lines


def index_methods(lines: Iterable[InstructionLine]) -> Dict[str, int]:
    """Map every procedure name to the position of its `def` line.

    A later definition of the same name replaces the earlier one.
    """
    methods: Dict[str, int] = {}
    for line in lines:
        tokens = line.tokens
        if len(tokens) > 1 and tokens[0] == Command.DEF.value:
            name = line.text[len(Command.DEF.value):].strip()
            methods[name] = line.position
    return methods


def parse_program(sources: Iterable[str]) -> Program:
    """Preprocess the given source texts and index their procedures."""
    lines = preprocess(sources)
    return Program(lines, index_methods(lines))


def parse_count(text: str) -> Optional[int]:
    """Parse a `repeat` count; None unless it is a plain decimal number."""
    if COUNT_PATTERN.fullmatch(text) is None:
        return None
    return int(text)


KAREL_GRAMMAR = r"""
    start: procedure*

    procedure: DEF ARG _NL body ENDDEF _NL

    body: statement*

    ?statement: procedure
              | if_block
              | while_block
              | repeat_block
              | instruction _NL

    if_block: IF ARG _NL body ENDIF _NL
    while_block: WHILE ARG _NL body ENDWHILE _NL
    repeat_block: REPEAT ARG _NL body ENDREPEAT _NL

    instruction: PRIMITIVE
               | DIE
               | CALL ARG

    // Keywords must be whole tokens
    DEF: /def(?!\S)/
    ENDDEF: /enddef(?!\S)/
    IF: /if(?!\S)/
    ENDIF: /endif(?!\S)/
    WHILE: /while(?!\S)/
    ENDWHILE: /endwhile(?!\S)/
    REPEAT: /repeat(?!\S)/
    ENDREPEAT: /endrepeat(?!\S)/
    CALL: /call(?!\S)/
    DIE: /die(?!\S)/
    PRIMITIVE: /(move|turn-left|take|put)(?!\S)/
    ARG: /\S+/

    _NL: /\n+/
    SPACE: /[^\S\n]+/
    %ignore SPACE
"""


KAREL_PARSER = Lark(
    KAREL_GRAMMAR,
    parser='lalr',
    maybe_placeholders=False,
)


class OutlineTransformer(Transformer):
    """Transforms the parse tree of a normalized program into an Outline."""

    def __init__(self, program: Program):
        super().__init__()
        self.program = program

    def line_of(self, token) -> str:
        return self.program[token.line - 1].text

    def start(self, items):
        return Outline(procedures=list(items))

    def body(self, items) -> List[Node]:
        return list(items)

    def procedure(self, items):
        opener, name, body, end = items
        return Procedure(str(name), opener.line - 1, end.line - 1, body)

    def predicate_block(self, kind: BlockKind, items):
        opener, predicate, body, end = items
        if str(predicate) not in PREDICATES:
            raise NotDefined(self.line_of(opener))
        return Block(kind, str(predicate), opener.line - 1, end.line - 1, body)

    def if_block(self, items):
        return self.predicate_block(BlockKind.IF, items)

    def while_block(self, items):
        return self.predicate_block(BlockKind.WHILE, items)

    def repeat_block(self, items):
        opener, count, body, end = items
        if parse_count(str(count)) is None:
            raise NotANumber(self.line_of(opener))
        return Block(BlockKind.REPEAT, str(count), opener.line - 1, end.line - 1, body)

    def instruction(self, items):
        keyword = items[0]
        argument = str(items[1]) if len(items) > 1 else None
        return Instruction(COMMANDS[str(keyword)], argument, keyword.line - 1)


TERMINATOR_WORDS = frozenset(command.value for command in TERMINATORS)


def translate_parse_error(program: Program, error: UnexpectedInput) -> KarelSyntaxError:
    """Express a Lark parse failure in terms of Karel's syntax errors."""
    last = program[len(program) - 1].text if len(program) else ''
    if isinstance(error, UnexpectedEOF):
        return UnexpectedEndOfFile(last)
    token = getattr(error, 'token', None)
    if token is not None and token.type == '$END':
        return UnexpectedEndOfFile(last)
    line_no = getattr(error, 'line', -1)
    if isinstance(line_no, int) and 0 < line_no <= len(program):
        line = program[line_no - 1].text
    else:
        line = ''
    if token is not None:
        if str(token) in TERMINATOR_WORDS:
            return WrongBlockEnd(line)
        if token.type == '_NL':
            return NotEnoughArguments(line)
    return NotDefined(line)


def parse_outline(program: Program) -> Outline:
    """Check the block structure of a whole program and return its outline.

    Unlike the interpreter, which only looks at code it reaches, this
    rejects a structural error anywhere in the program.
    """
    try:
        tree = KAREL_PARSER.parse(program.text())
    except UnexpectedInput as e:
        raise translate_parse_error(program, e) from e
    try:
        return OutlineTransformer(program).transform(tree)
    except VisitError as e:
        raise e.orig_exc from None
