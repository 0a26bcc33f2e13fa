import pytest

from agents import (
    AGENT_REGISTRY,
    AgentSpec,
    BaseAgent,
    MinimaxAgent,
    PathingAgent,
    RandomAgent,
    create_agent_from_spec,
    resolve_agent_class,
)
from skirmish.core.actions import Action
from skirmish.core.errors import ConfigurationError
from skirmish.core.types import ActionType, Cell, MoveDir, Side
from skirmish.model.state import CombatSnapshot
from skirmish.scenarios import FOOTMAN, TOWNHALL, create_path_scenario, create_skirmish_scenario
from skirmish.world.snapshot import UnitView, WorldSnapshot


def _world(width, height, units, obstacles=()):
    return WorldSnapshot(width=width, height=height, units=tuple(units), obstacles=tuple(obstacles))


def _footman(uid, player, x, y):
    return UnitView(id=uid, player=player, x=x, y=y, **FOOTMAN)


def _townhall(uid, player, x, y):
    return UnitView(id=uid, player=player, x=x, y=y, **TOWNHALL)


# ----------------------------------------------------------------------
# Registry / spec / factory
# ----------------------------------------------------------------------
def test_registry_keys():
    assert resolve_agent_class("minimax") is MinimaxAgent
    assert resolve_agent_class("astar") is PathingAgent
    assert resolve_agent_class("random") is RandomAgent
    assert {"minimax", "astar", "random"} <= set(AGENT_REGISTRY)


def test_resolve_by_import_path():
    assert resolve_agent_class("agents.random_agent.RandomAgent") is RandomAgent
    with pytest.raises(TypeError):
        resolve_agent_class("skirmish.core.types.Cell")
    with pytest.raises(ValueError):
        resolve_agent_class("no-such-agent")


def test_agent_spec_roundtrip():
    spec = AgentSpec(type="random", player=1, name="Red", init_params={"seed": 3})
    assert AgentSpec.from_dict(spec.to_dict()) == spec
    assert spec.with_player(0).player == 0
    with pytest.raises(ValueError):
        AgentSpec.from_dict({"type": "random"})


def test_factory_builds_named_agent():
    agent = create_agent_from_spec(AgentSpec(type="random", player=1, name="Red", init_params={"seed": 3}))
    assert isinstance(agent, RandomAgent)
    assert agent.player == 1
    assert str(agent) == "Red (player 1)"


def test_factory_surfaces_missing_plies(no_plies_env):
    with pytest.raises(ConfigurationError):
        create_agent_from_spec(AgentSpec(type="minimax", player=0))


# ----------------------------------------------------------------------
# Minimax agent
# ----------------------------------------------------------------------
def test_minimax_agent_requires_valid_plies(no_plies_env):
    with pytest.raises(ConfigurationError):
        MinimaxAgent(player=0)
    with pytest.raises(ConfigurationError):
        MinimaxAgent(player=0, plies="deep")


def test_minimax_agent_returns_actions_for_own_units():
    world = create_skirmish_scenario()
    agent = MinimaxAgent(player=0, plies=2)
    agent.on_episode_start(world)
    joint = agent.on_turn(world)

    assert joint
    assert set(joint) <= {1, 2}
    assert all(isinstance(action, Action) for action in joint.values())
    assert agent.on_turn(world) == joint
    assert agent.turns_searched == 2


def test_minimax_agent_plays_the_enemy_side():
    world = create_skirmish_scenario()
    joint = MinimaxAgent(player=1, plies=1).on_turn(world)
    assert set(joint) <= {3, 4}


def test_minimax_agent_with_nothing_to_do_returns_empty():
    world = _world(3, 1, [_footman(1, 0, 0, 0), _townhall(2, 1, 2, 0)], obstacles=[(1, 0)])
    agent = MinimaxAgent(player=0, plies=2)
    assert agent.on_turn(world) == {}
    assert agent.last_result is None


def test_minimax_agent_attacks_adjacent_enemy():
    world = _world(3, 1, [_footman(1, 0, 0, 0), _townhall(2, 1, 1, 0)])
    assert MinimaxAgent(player=0, plies=1).on_turn(world) == {1: Action.attack(2)}


def test_minimax_agent_iterative_deepening():
    agent = MinimaxAgent(player=0, plies=3, time_budget=30.0)
    joint = agent.on_turn(create_skirmish_scenario())
    assert set(joint) <= {1, 2}


# ----------------------------------------------------------------------
# Pathing agent
# ----------------------------------------------------------------------
def test_pathing_agent_plans_documented_route():
    world = create_path_scenario()
    agent = PathingAgent(player=0)
    agent.on_episode_start(world)

    assert agent.path == [(1, 0), (2, 0), (3, 0), (3, 1), (3, 2), (2, 2), (1, 2)]
    assert agent.on_turn(world) == {1: Action.move(MoveDir.RIGHT)}


def test_pathing_agent_attacks_when_adjacent():
    world = _world(3, 1, [_footman(1, 0, 0, 0), _townhall(2, 1, 1, 0)])
    agent = PathingAgent(player=0)
    agent.on_episode_start(world)
    assert agent.path == []
    assert agent.on_turn(world) == {1: Action.attack(2)}


def test_pathing_agent_follows_path_as_unit_advances():
    world = create_path_scenario()
    agent = PathingAgent(player=0)
    agent.on_episode_start(world)

    moved = _world(5, 3, [_footman(1, 0, 1, 0), _townhall(2, 1, 0, 2)], world.obstacles)
    assert agent.on_turn(moved) == {1: Action.move(MoveDir.RIGHT)}
    assert agent.path[0] == Cell(2, 0)


def test_pathing_agent_replans_around_close_blocker():
    start = _world(5, 5, [_footman(1, 0, 0, 0), _townhall(2, 1, 4, 0), _footman(3, 1, 4, 4)])
    agent = PathingAgent(player=0)
    agent.on_episode_start(start)
    assert agent.path == [(1, 0), (2, 0), (3, 0)]

    blocked = _world(5, 5, [_footman(1, 0, 0, 0), _townhall(2, 1, 4, 0), _footman(3, 1, 2, 0)])
    joint = agent.on_turn(blocked)

    assert agent.replans == 1
    assert Cell(2, 0) not in agent.path
    assert len(agent.path) == 5
    assert joint[1].type == ActionType.MOVE


def test_pathing_agent_replans_once_when_blocker_seals_corridor():
    wall = [(0, 1), (1, 1), (2, 1), (3, 1)]
    start = _world(5, 2, [_footman(1, 0, 0, 0), _townhall(2, 1, 4, 0), _footman(3, 1, 4, 1)], wall)
    agent = PathingAgent(player=0)
    agent.on_episode_start(start)
    assert agent.path == [(1, 0), (2, 0), (3, 0)]

    sealed = _world(5, 2, [_footman(1, 0, 0, 0), _townhall(2, 1, 4, 0), _footman(3, 1, 2, 0)], wall)
    assert agent.on_turn(sealed) == {}
    assert agent.replans == 1
    assert agent.path == []

    # still stranded next turn: one fresh attempt per turn
    assert agent.on_turn(sealed) == {}
    assert agent.replans == 2


def test_pathing_agent_ignores_distant_blocker():
    start = _world(8, 3, [_footman(1, 0, 0, 0), _townhall(2, 1, 7, 0), _footman(3, 1, 5, 2)])
    agent = PathingAgent(player=0)
    agent.on_episode_start(start)
    planned = list(agent.path)

    far = _world(8, 3, [_footman(1, 0, 0, 0), _townhall(2, 1, 7, 0), _footman(3, 1, 5, 0)])
    assert agent.on_turn(far) == {1: Action.move(MoveDir.RIGHT)}
    assert agent.replans == 0
    assert agent.path == planned


def test_pathing_agent_without_townhall_does_nothing():
    world = _world(4, 4, [_footman(1, 0, 0, 0), _footman(2, 1, 3, 3)])
    agent = PathingAgent(player=0)
    agent.on_episode_start(world)
    assert agent.on_turn(world) == {}


def test_pathing_agent_without_footman_does_nothing():
    world = _world(4, 4, [_townhall(1, 0, 0, 0), _townhall(2, 1, 3, 3)])
    agent = PathingAgent(player=0)
    agent.on_episode_start(world)
    assert agent.on_turn(world) == {}


def test_pathing_agent_resets_between_episodes():
    agent = PathingAgent(player=0)
    agent.on_episode_start(create_path_scenario())
    agent.on_turn(create_path_scenario())
    agent.on_episode_start(create_path_scenario())
    assert agent.replans == 0
    assert agent.total_execution_time == 0.0
    assert len(agent.path) == 7


# ----------------------------------------------------------------------
# Random agent
# ----------------------------------------------------------------------
def test_random_agent_is_seeded_and_legal():
    world = create_skirmish_scenario()
    first = RandomAgent(player=0, seed=7).on_turn(world)
    second = RandomAgent(player=0, seed=7).on_turn(world)
    assert first == second

    snapshot = CombatSnapshot.from_world(world, 0)
    for unit_id, action in first.items():
        assert action in snapshot.legal_actions(snapshot.get_unit(unit_id))
        assert snapshot.get_unit(unit_id).side == Side.FRIENDLY


def test_base_agent_is_abstract():
    with pytest.raises(TypeError):
        BaseAgent(player=0)
