"""Interpreter for the Karel language.

The interpreter executes the normalized instruction sequence directly.
It keeps a program counter and a call stack and never builds a syntax
tree: a block is entered with the counter on its opening line
(`def`, `if`, `while` or `repeat`) and ends at the first line carrying
its own terminator. Open blocks are kept on an explicit frame stack, so
nesting and recursion in a Karel program never grow the Python stack.
Loops rewind the counter to the opening line, and calls jump to the
callee's `def` line and come back through the call stack.

All effects go through the environment's `action` and `query` methods.
Any failure ends the whole run.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from .environment import Environment
from .errors import (
    ActionError, QueryError, KarelError,
    NoEntryPointDefined, RuntimeActionError, RuntimeQueryError,
    MethodNotDefined, NotDefined, WrongBlockEnd, UnexpectedEndOfFile,
    NotANumber, NotEnoughArguments, CallDepthExceeded, ExecutionCancelled,
)
from .parser import parse_count, parse_program
from .types import (
    Action, BLOCK_KINDS, BlockKind, Command, InstructionLine, PREDICATES,
    PRIMITIVE_ACTIONS, Program, Query, TERMINATORS,
)


DEFAULT_MAX_CALL_DEPTH = 128


@dataclass
class Frame:
    """An open block.

    `running` records whether the body was entered to be executed, as
    opposed to only scanned; `skip` may still be switched on by `die`.
    """
    opener: InstructionLine
    kind: BlockKind
    skip: bool
    running: bool
    remaining: int = 0              # further `repeat` passes
    procedure: Optional[str] = None  # set when entered through `call`


class Interpreter:
    """Core interpreter that executes a normalized Karel program."""
    def __init__(self, sources: Iterable[str], environment: Environment,
                 debug_level: int = 0, debug_file: Optional[str] = 'debug.txt',
                 max_call_depth: int = DEFAULT_MAX_CALL_DEPTH):
        self.program: Program = parse_program(sources)
        self.environment = environment
        self.pointer: Optional[int] = self.program.entry_point
        self.call_stack: List[int] = []
        self.frames: List[Frame] = []
        self.max_call_depth = max_call_depth
        self.cancelled = False
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w') if debug_level > 0 and debug_file else None

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    # Public API
    def run(self) -> None:
        """Execute `main` to completion or to the first error."""
        entry = self.program.entry_point
        try:
            if entry is None:
                raise NoEntryPointDefined()
            self.pointer = entry
            self.call_stack = []
            self.frames = []
            self.cancelled = False
            self.debug(f"run main at line {entry}")
            self.run_block(False)
            self.debug("run finished")
        except KarelError as e:
            self.debug(f"run failed: {e}")
            raise
        finally:
            self.pointer = None
            if self.debug_fp:
                self.debug_fp.close()
                self.debug_fp = None

    def cancel(self) -> None:
        """Ask a running program to stop at its next primitive."""
        self.cancelled = True

    def current_line(self) -> InstructionLine:
        if self.pointer is None or self.pointer >= len(self.program):
            raise UnexpectedEndOfFile()
        return self.program[self.pointer]

    def run_block(self, skip: bool) -> None:
        """Run the block whose opening line is under the counter.

        With `skip` set, the block is only scanned: the counter is moved
        past the matching terminator and nothing is executed. On return
        the counter points at the line after the terminator.
        """
        base = len(self.frames)
        self.open_block(skip)
        while len(self.frames) > base:
            self.step()

    def open_block(self, skip: bool, remaining: int = 0,
                   procedure: Optional[str] = None) -> None:
        opener = self.current_line()
        kind = BLOCK_KINDS.get(opener.command)
        if kind is None:
            raise NotDefined(opener.text)
        if self.debug_level >= 3:
            self.debug(f"{'skip' if skip else 'enter'} {kind.value} block at line {opener.position}")
        self.frames.append(Frame(opener, kind, skip, not skip, remaining, procedure))
        self.pointer += 1

    def step(self) -> None:
        """Advance the innermost open block by one line."""
        frame = self.frames[-1]
        if self.pointer >= len(self.program):
            raise UnexpectedEndOfFile(frame.opener.text)
        line = self.program[self.pointer]
        command = line.command
        if command is frame.kind.terminator:
            self.close_block(frame, line)
            return
        if command in TERMINATORS:
            raise WrongBlockEnd(line.text)
        if frame.skip:
            if command in BLOCK_KINDS:
                self.open_block(True)
            else:
                self.pointer += 1
            return
        if command is Command.DIE:
            # The rest of the block is passed over
            frame.skip = True
            self.pointer += 1
            return
        self.execute(line, command)

    def close_block(self, frame: Frame, end: InstructionLine) -> None:
        self.frames.pop()
        self.pointer = end.position + 1
        if self.debug_level >= 3:
            self.debug(f"leave {frame.kind.value} block at line {end.position}")
        if not frame.running:
            return
        if frame.kind is BlockKind.WHILE:
            # Back to the `while` line, which checks its predicate again
            self.pointer = frame.opener.position
        elif frame.kind is BlockKind.REPEAT and frame.remaining > 0:
            self.pointer = frame.opener.position
            self.open_block(False, remaining=frame.remaining - 1)
        elif frame.procedure is not None:
            self.pointer = self.call_stack.pop()
            if self.debug_level >= 1:
                self.debug(f"return from {frame.procedure} to line {self.pointer}")

    def execute(self, line: InstructionLine, command: Optional[Command]) -> None:
        """Execute one line.

        Primitives leave the counter on the next line; block openers push
        a frame for their body.
        """
        if self.debug_level >= 3:
            self.debug(f"line {line.position}: {line.text}")
        if command in PRIMITIVE_ACTIONS:
            if self.cancelled:
                raise ExecutionCancelled(line.text)
            self.perform(PRIMITIVE_ACTIONS[command])
            self.pointer += 1
            return
        if command is Command.IF or command is Command.WHILE:
            result = self.evaluate(line)
            self.open_block(not result)
            return
        if command is Command.REPEAT:
            if line.argument is None:
                raise NotEnoughArguments(line.text)
            count = parse_count(line.argument)
            if count is None:
                raise NotANumber(line.text)
            if count == 0:
                self.open_block(True)
            else:
                self.open_block(False, remaining=count - 1)
            return
        if command is Command.CALL:
            self.call(line)
            return
        if command is Command.DEF:
            # A definition met in straight-line code is not executed
            self.open_block(True)
            return
        raise NotDefined(line.text)

    def call(self, line: InstructionLine) -> None:
        name = line.argument
        if name is None:
            raise NotEnoughArguments(line.text)
        if name not in self.program.methods:
            raise MethodNotDefined(name)
        if len(self.call_stack) >= self.max_call_depth:
            raise CallDepthExceeded(line.text)
        self.call_stack.append(self.pointer + 1)
        self.pointer = self.program.methods[name]
        if self.debug_level >= 1:
            self.debug(f"call {name} (depth {len(self.call_stack)})")
        self.open_block(False, procedure=name)

    def evaluate(self, line: InstructionLine) -> bool:
        """Evaluate the sensor predicate of an `if` or `while` line."""
        predicate = line.argument
        if predicate is None:
            raise NotEnoughArguments(line.text)
        query = PREDICATES.get(predicate)
        if query is None:
            raise NotDefined(line.text)
        return self.ask(query)

    def perform(self, action: Action) -> None:
        try:
            self.environment.action(action)
        except ActionError as e:
            raise RuntimeActionError(e) from e
        if self.debug_level >= 2:
            self.debug(f"action {action.value}")

    def ask(self, query: Query) -> bool:
        try:
            result = bool(self.environment.query(query))
        except QueryError as e:
            raise RuntimeQueryError(e) from e
        if self.debug_level >= 2:
            self.debug(f"query {query!r} -> {result}")
        return result


def run_program(sources: Iterable[str], environment: Environment, debug_level: int = 0) -> Interpreter:
    """Convenience function to build an interpreter over source texts and run it."""
    interpreter = Interpreter(sources, environment, debug_level=debug_level)
    interpreter.run()
    return interpreter


def load_program(paths: Sequence[str], environment: Environment, debug_level: int = 0,
                 max_call_depth: int = DEFAULT_MAX_CALL_DEPTH) -> Interpreter:
    """Read Karel source files, in order, and return an interpreter over them."""
    sources = [Path(path).read_text(encoding='utf-8') for path in paths]
    return Interpreter(sources, environment, debug_level=debug_level,
                       max_call_depth=max_call_depth)
