import pytest

from karel.errors import ActionError, QueryError
from karel.types import Action, Direction, Query
from karel.world import World


def test_move_and_turn():
    world = World(3, 3)
    world.action(Action.MOVE)
    assert world.position == (2, 1)
    world.action(Action.TURN_LEFT)
    assert world.facing is Direction.NORTH
    world.action(Action.MOVE)
    assert world.position == (2, 2)
    assert world.history == [Action.MOVE, Action.TURN_LEFT, Action.MOVE]


def test_border_is_a_wall():
    world = World(2, 1)
    world.action(Action.MOVE)
    assert world.query(Query.wall_in_front())
    with pytest.raises(ActionError):
        world.action(Action.MOVE)
    assert world.position == (2, 1)
    assert world.history == [Action.MOVE]


def test_inner_walls_block_both_sides():
    world = World(3, 1, walls=[(1, 1, Direction.EAST)])
    assert world.query(Query.wall_in_front())
    world = World(3, 1, x=2, facing=Direction.WEST, walls=[(1, 1, Direction.EAST)])
    assert world.query(Query.wall_in_front())


def test_take_and_put_with_limited_bag():
    world = World(2, 2, beepers={(1, 1): 2}, bag=0)
    assert world.query(Query.item_here())
    world.action(Action.REMOVE_ITEM)
    world.action(Action.REMOVE_ITEM)
    assert not world.query(Query.item_here())
    assert world.bag == 2
    with pytest.raises(ActionError):
        world.action(Action.REMOVE_ITEM)
    world.action(Action.PLACE_ITEM)
    world.action(Action.PLACE_ITEM)
    with pytest.raises(ActionError):
        world.action(Action.PLACE_ITEM)
    assert world.beepers == {(1, 1): 2}


def test_facing_queries():
    world = World(1, 1, facing=Direction.SOUTH)
    assert world.query(Query.facing(Direction.SOUTH))
    assert not world.query(Query.facing(Direction.NORTH))


def test_unknown_query():
    with pytest.raises(QueryError):
        World(1, 1).query(Query('Smell'))


def test_render():
    world = World(3, 2, x=2, y=2, facing=Direction.WEST, beepers={(1, 1): 3, (3, 1): 12})
    assert world.render() == '. < .\n3 . *'


def test_from_obj():
    world = World.from_obj({
        'width': 4,
        'height': 3,
        'robot': {'x': 2, 'y': 3, 'facing': 'S', 'bag': 5},
        'beepers': [{'x': 1, 'y': 1, 'count': 2}, {'x': 1, 'y': 1}],
        'walls': [{'x': 2, 'y': 2, 'side': 'north'}],
    })
    assert (world.width, world.height) == (4, 3)
    assert world.position == (2, 3)
    assert world.facing is Direction.SOUTH
    assert world.bag == 5
    assert world.beepers == {(1, 1): 3}
    assert world.query(Query.wall_in_front())


@pytest.mark.parametrize('obj', [
    {'height': 3},
    {'width': 2, 'height': 2, 'robot': {'x': 5}},
    {'width': 2, 'height': 2, 'robot': {'facing': 'up'}},
    {'width': 2, 'height': 2, 'beepers': [{'y': 1}]},
    [],
])
def test_invalid_descriptions(obj):
    with pytest.raises(ValueError):
        World.from_obj(obj)
