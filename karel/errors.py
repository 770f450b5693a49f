class ActionError(Exception):
    """Raised by an environment when it cannot perform an action."""


class QueryError(Exception):
    """Raised by an environment when it cannot answer a query."""


class KarelError(Exception):
    """Base exception for every failure that ends a Karel run."""
    def __init__(self, detail: str = ''):
        message = type(self).__name__
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.detail = detail


class NoEntryPointDefined(KarelError):
    """No procedure named `main` was found."""


class RuntimeActionError(KarelError):
    """Wraps an environment's ActionError."""
    def __init__(self, error: ActionError):
        super().__init__(str(error))
        self.error = error


class RuntimeQueryError(KarelError):
    """Wraps an environment's QueryError."""
    def __init__(self, error: QueryError):
        super().__init__(str(error))
        self.error = error


class KarelSyntaxError(KarelError):
    """Structural failure. `line` is the text of the offending line."""
    def __init__(self, line: str = ''):
        super().__init__(line)
        self.line = line


class MethodNotDefined(KarelSyntaxError):
    """A called procedure has no `def`."""


class NotDefined(KarelSyntaxError):
    """Unknown command, predicate or block opener."""


class WrongBlockEnd(KarelSyntaxError):
    """A terminator that does not belong to the enclosing block,
    e.g. `endwhile` closing an `if`."""


class UnexpectedEndOfFile(KarelSyntaxError):
    """Input ended before a block was closed."""


class NotANumber(KarelSyntaxError):
    """A `repeat` count is not a non-negative integer."""


class NotEnoughArguments(KarelSyntaxError):
    """`if`/`while` without a predicate, `repeat` without a count,
    or `call` without a name."""


class CallDepthExceeded(KarelError):
    """Procedure calls nested deeper than the interpreter allows."""


class ExecutionCancelled(KarelError):
    """The run was stopped through `Interpreter.cancel()`."""
