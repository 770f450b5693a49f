from karel.interpreter import Interpreter
from karel.types import Direction
from karel.world import World


def test_program_3_uses_procedures_from_a_second_source(example):
    sources = [example('program_3_lib.kl'), example('program_3.kl')]
    world = World(6, 6)
    interp = Interpreter(sources, world)
    assert set(interp.program.methods) == {'turn-right', 'climb-step', 'main'}
    interp.run()
    assert world.position == (4, 4)
    assert world.facing is Direction.NORTH
    assert world.beepers == {(2, 2): 1, (3, 3): 1, (4, 4): 1}
