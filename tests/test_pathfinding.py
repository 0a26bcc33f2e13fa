import pytest

from skirmish.core.types import Cell
from skirmish.scenarios import create_path_scenario
from skirmish.world.grid import chebyshev_distance, manhattan_distance
from skirmish.world.pathfinding import (
    GridPathfinder,
    OpenSet,
    PathNode,
    find_path,
    hop_distance,
    should_replan,
)


def _assert_walkable(path, start, obstacles=()):
    previous = Cell(*start)
    for cell in path:
        assert manhattan_distance(previous, cell) == 1
        assert cell not in obstacles
        previous = cell


@pytest.mark.parametrize("heuristic", [chebyshev_distance, manhattan_distance])
def test_open_grid_path_has_manhattan_length(heuristic):
    path = find_path((0, 0), (4, 3), 6, 5, heuristic=heuristic)
    assert len(path) == manhattan_distance((0, 0), (4, 3))
    assert path[-1] == Cell(4, 3)
    assert Cell(0, 0) not in path
    _assert_walkable(path, (0, 0))


def test_documented_map_shortest_path():
    world = create_path_scenario()
    footman, townhall = world.units
    path = find_path(footman.pos, townhall.pos, world.width, world.height, world.obstacles)
    assert path == [
        (1, 0), (2, 0), (3, 0), (3, 1), (3, 2), (2, 2), (1, 2), (0, 2),
    ]
    assert hop_distance(footman.pos, townhall.pos, world.width, world.height, world.obstacles) == 8


def test_start_equals_goal_is_empty():
    assert find_path((2, 2), (2, 2), 5, 5) == []
    assert hop_distance((2, 2), (2, 2), 5, 5) == 0


def test_unreachable_goal_returns_empty_path():
    wall = [(1, 0), (1, 1), (1, 2)]
    assert find_path((0, 0), (2, 2), 3, 3, wall) == []
    assert hop_distance((0, 0), (2, 2), 3, 3, wall) == 0


def test_blocker_closing_the_only_gap_removes_the_path():
    world = create_path_scenario()
    assert find_path((0, 0), (0, 2), 5, 3, world.obstacles, blocker=(3, 1)) == []


def test_path_routes_around_blocker():
    path = find_path((0, 0), (4, 0), 5, 5, blocker=(2, 0))
    assert Cell(2, 0) not in path
    assert len(path) == 6
    _assert_walkable(path, (0, 0))


def test_open_set_pops_lowest_f_and_supports_update():
    open_set = OpenSet()
    open_set.push(PathNode(Cell(0, 0), 0, 5))
    open_set.push(PathNode(Cell(1, 0), 1, 3))
    open_set.push(PathNode(Cell(2, 0), 2, 9))
    assert len(open_set) == 3
    assert Cell(2, 0) in open_set

    open_set.update(PathNode(Cell(2, 0), 1, 1))
    assert len(open_set) == 3
    assert open_set.get(Cell(2, 0)).g == 1

    assert open_set.pop().cell == Cell(2, 0)
    assert open_set.pop().cell == Cell(1, 0)
    assert open_set.pop().cell == Cell(0, 0)
    assert len(open_set) == 0
    with pytest.raises(IndexError):
        open_set.pop()


def test_open_set_rejects_duplicate_push():
    open_set = OpenSet()
    open_set.push(PathNode(Cell(0, 0), 0, 1))
    with pytest.raises(KeyError):
        open_set.push(PathNode(Cell(0, 0), 0, 1))


def test_open_set_ties_pop_in_insertion_order():
    open_set = OpenSet()
    for x in range(3):
        open_set.push(PathNode(Cell(x, 0), 0, 4))
    assert [open_set.pop().cell.x for _ in range(3)] == [0, 1, 2]


def test_should_replan_when_blocker_on_path_and_close():
    path = [Cell(1, 0), Cell(2, 0), Cell(3, 0), Cell(4, 0), Cell(5, 0)]
    assert should_replan(path, (0, 0), (3, 0))
    assert should_replan(path, (0, 0), (1, 0))


def test_should_not_replan_when_blocker_far_or_off_path():
    path = [Cell(1, 0), Cell(2, 0), Cell(3, 0), Cell(4, 0), Cell(5, 0)]
    assert not should_replan(path, (0, 0), (5, 0))
    assert not should_replan(path, (0, 0), (2, 1))
    assert not should_replan(path, (0, 0), None)
    assert not should_replan([], (0, 0), (1, 0))


def test_grid_pathfinder_memoizes_and_copies_results():
    pathfinder = GridPathfinder(5, 3, create_path_scenario().obstacles)
    first = pathfinder.find_path((0, 0), (0, 2))
    first.clear()
    assert len(pathfinder.find_path((0, 0), (0, 2))) == 8
    assert pathfinder.distance((0, 0), (0, 2)) == 8
    assert pathfinder.distance((0, 0), (0, 2), blocker=(3, 1)) == 0

    pathfinder.clear_cache()
    assert pathfinder.distance((0, 0), (4, 0)) == 4


def test_grid_pathfinder_heuristic_by_name():
    assert GridPathfinder(4, 4, heuristic="manhattan").distance((0, 0), (3, 3)) == 6
    with pytest.raises(ValueError):
        GridPathfinder(4, 4, heuristic="euclid")
