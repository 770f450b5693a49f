# Karel language package
# This package provides an interpreter for the Karel robot command language.
from .interpreter import run_program, load_program, Interpreter
from .errors import KarelError, ActionError, QueryError
from .environment import Environment
from .world import World

__all__ = [
    'run_program',
    'load_program',
    'Interpreter',
    'KarelError',
    'ActionError',
    'QueryError',
    'Environment',
    'World',
]
