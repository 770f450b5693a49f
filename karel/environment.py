from typing import Any, List
from karel.errors import ActionError, QueryError
from karel.types import Action, Query


class Environment:
    """Interface to the simulated agent and its world.

    The interpreter talks to an environment exclusively through `action`
    and `query`, one call at a time. Implementations report failures by
    raising ActionError or QueryError; the interpreter wraps and
    propagates them.
    """

    def action(self, kind: Action) -> None:
        raise ActionError(f'action {kind.value} not supported')

    def query(self, kind: Query) -> bool:
        raise QueryError(f'query {kind!r} not supported')


class RecordingEnvironment(Environment):
    """Wraps another environment and keeps a log of every call made to it."""
    def __init__(self, inner: Environment):
        self.inner = inner
        self.calls: List[Any] = []

    def action(self, kind: Action) -> None:
        self.calls.append(kind)
        self.inner.action(kind)

    def query(self, kind: Query) -> bool:
        self.calls.append(kind)
        return self.inner.query(kind)
