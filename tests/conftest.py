from pathlib import Path

import pytest

from karel.environment import Environment
from karel.errors import ActionError, QueryError


EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


class ScriptedEnvironment(Environment):
    """Replays predicate answers and records every call it receives.

    `answers` maps a Query to either a single bool or a list of bools
    consumed in order. Unknown queries answer False. `on_call`, when
    set, is invoked before every call with the call itself.
    """
    def __init__(self, answers=None, failing_actions=(), failing_queries=()):
        self.answers = dict(answers or {})
        self.failing_actions = set(failing_actions)
        self.failing_queries = set(failing_queries)
        self.calls = []
        self.on_call = None

    def action(self, kind):
        if self.on_call:
            self.on_call(kind)
        self.calls.append(kind)
        if kind in self.failing_actions:
            raise ActionError(f'cannot {kind.value}')

    def query(self, kind):
        if self.on_call:
            self.on_call(kind)
        self.calls.append(kind)
        if kind in self.failing_queries:
            raise QueryError(f'cannot answer {kind!r}')
        answer = self.answers.get(kind, False)
        if isinstance(answer, list):
            return answer.pop(0) if answer else False
        return answer


@pytest.fixture
def scripted():
    return ScriptedEnvironment


@pytest.fixture
def example():
    """Return a reader for files in the examples directory."""
    def read(name):
        return (EXAMPLES / name).read_text(encoding='utf-8')
    return read
