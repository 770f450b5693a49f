from karel.environment import RecordingEnvironment
from karel.interpreter import Interpreter
from karel.types import Action, Query
from karel.world import World

from conftest import EXAMPLES


def test_program_4_gathers_a_trail_recursively(example):
    source = example('program_4.kl')
    world = World.load(str(EXAMPLES / 'program_4.world.json'))
    env = RecordingEnvironment(world)
    interp = Interpreter([source], env)
    depths = []
    original = env.inner.action

    def track(kind):
        depths.append(len(interp.call_stack))
        original(kind)
    env.inner.action = track

    interp.run()
    assert world.position == (4, 1)
    assert world.beepers == {(4, 1): 3}
    assert world.bag == 0
    assert env.calls == [
        Query.item_here(), Action.REMOVE_ITEM, Action.MOVE,
        Query.item_here(), Action.REMOVE_ITEM, Action.MOVE,
        Query.item_here(), Action.REMOVE_ITEM, Action.MOVE,
        Query.item_here(),
        Action.PLACE_ITEM, Action.PLACE_ITEM, Action.PLACE_ITEM,
    ]
    # Each put happens after returning one level further up
    assert depths[-3:] == [3, 2, 1]
