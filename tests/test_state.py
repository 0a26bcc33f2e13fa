import pytest

from skirmish.core.actions import Action
from skirmish.core.types import Cell, MoveDir, Side, UnitKind
from skirmish.model.state import CombatSnapshot, SearchNode, generate_children
from skirmish.scenarios import create_skirmish_scenario


def test_from_world_splits_sides():
    snapshot = CombatSnapshot.from_world(create_skirmish_scenario(), player=0)
    assert [u.id for u in snapshot.friendly] == [1, 2]
    assert [u.id for u in snapshot.enemy] == [3, 4]
    assert snapshot.to_move == Side.FRIENDLY
    assert Cell(3, 2) in snapshot.obstacles
    assert snapshot.get_unit(3).kind == UnitKind.RANGED

    mirrored = CombatSnapshot.from_world(create_skirmish_scenario(), player=1)
    assert [u.id for u in mirrored.friendly] == [3, 4]


def test_create_rejects_two_live_units_on_one_cell(friendly, enemy):
    with pytest.raises(ValueError):
        CombatSnapshot.create([friendly(1, 0, 0)], [enemy(2, 0, 0)], width=3, height=3)
    # a dead unit may share a cell
    CombatSnapshot.create([friendly(1, 0, 0)], [enemy(2, 0, 0, hp=0)], width=3, height=3)


def test_attack_is_forced_against_first_enemy_in_reach(friendly, enemy):
    snapshot = CombatSnapshot.create(
        [friendly(1, 1, 1)],
        [enemy(10, 2, 1), enemy(11, 1, 2)],
        width=4,
        height=4,
    )
    assert snapshot.legal_actions(snapshot.get_unit(1)) == [Action.attack(10)]


def test_diagonal_enemy_is_not_in_reach(friendly, enemy):
    snapshot = CombatSnapshot.create([friendly(1, 1, 1)], [enemy(2, 2, 2)], width=4, height=4)
    actions = snapshot.legal_actions(snapshot.get_unit(1))
    assert [a.direction for a in actions] == [MoveDir.UP, MoveDir.DOWN, MoveDir.LEFT, MoveDir.RIGHT]


def test_ranged_reach_requires_alignment(friendly, enemy):
    archer = friendly(1, 0, 0, attack_range=3, kind=UnitKind.RANGED)
    snapshot = CombatSnapshot.create([archer], [enemy(2, 3, 0), enemy(3, 1, 1)], width=5, height=5)
    assert snapshot.legal_actions(archer) == [Action.attack(2)]


def test_moves_exclude_bounds_obstacles_and_units(friendly, enemy):
    snapshot = CombatSnapshot.create(
        [friendly(1, 0, 0), friendly(2, 0, 1)],
        [enemy(3, 2, 2)],
        width=3,
        height=3,
        obstacles=[(1, 0)],
    )
    assert snapshot.legal_actions(snapshot.get_unit(1)) == []


def test_structures_and_zero_damage_units_never_attack_or_move(friendly, enemy):
    townhall = enemy(2, 1, 0, hp=1200, damage=0, kind=UnitKind.STRUCTURE)
    snapshot = CombatSnapshot.create([friendly(1, 0, 0)], [townhall], width=3, height=1)
    assert snapshot.legal_actions(townhall) == []
    assert generate_children(snapshot, Side.ENEMY) == []


def test_unit_without_actions_holds_position(friendly, enemy):
    snapshot = CombatSnapshot.create(
        [friendly(1, 0, 0), friendly(2, 0, 1), friendly(3, 3, 3)],
        [enemy(4, 5, 5)],
        width=6,
        height=6,
        obstacles=[(1, 0)],
    )
    children = generate_children(snapshot, Side.FRIENDLY)
    # unit 1 is boxed in; units 2 and 3 have 2 and 4 moves
    assert len(children) == 2 * 4
    for child in children:
        assert 1 not in child.action
        assert child.snapshot.get_unit(1).pos == Cell(0, 0)


def test_no_children_when_side_cannot_act(friendly, enemy):
    snapshot = CombatSnapshot.create(
        [friendly(1, 0, 0, hp=0)],
        [enemy(2, 2, 0)],
        width=3,
        height=1,
    )
    assert generate_children(snapshot, Side.FRIENDLY) == []


def test_joint_moves_onto_one_cell_are_dropped_unless_stacking(friendly):
    snapshot = CombatSnapshot.create([friendly(1, 0, 0), friendly(2, 2, 0)], [], width=3, height=1)
    assert generate_children(snapshot, Side.FRIENDLY) == []

    stacked = generate_children(snapshot, Side.FRIENDLY, allow_stacking=True)
    assert len(stacked) == 1
    assert stacked[0].action == {1: Action.move(MoveDir.RIGHT), 2: Action.move(MoveDir.LEFT)}


def test_children_are_generated_in_unit_then_direction_order(friendly, enemy):
    snapshot = CombatSnapshot.create([friendly(1, 1, 1)], [enemy(2, 4, 4)], width=5, height=5)
    children = generate_children(snapshot)
    assert [c.action[1].direction for c in children] == list(MoveDir)
    assert all(c.snapshot.to_move == Side.ENEMY for c in children)


def test_apply_attack_clamps_hp_and_keeps_dead_units(friendly, enemy):
    snapshot = CombatSnapshot.create([friendly(1, 0, 0, damage=30)], [enemy(2, 1, 0, hp=20)], width=3, height=1)
    child = snapshot.apply({1: Action.attack(2)})

    assert child.get_unit(2).hp == 0
    assert not child.get_unit(2).alive
    assert len(child.enemy) == 1
    assert child.live_units(Side.ENEMY) == []
    assert child.is_over()
    assert Cell(1, 0) not in child.occupied_cells()
    # parent untouched
    assert snapshot.get_unit(2).hp == 20
    assert snapshot.to_move == Side.FRIENDLY and child.to_move == Side.ENEMY


def test_dead_units_are_ignored_by_move_generation(friendly, enemy):
    snapshot = CombatSnapshot.create(
        [friendly(1, 0, 0), friendly(5, 0, 1, hp=0)],
        [enemy(2, 1, 0, hp=0), enemy(3, 4, 4)],
        width=5,
        height=5,
    )
    actions = snapshot.legal_actions(snapshot.get_unit(1))
    # the dead enemy is neither a target nor an obstacle, nor is the dead friendly
    assert [a.direction for a in actions] == [MoveDir.UP, MoveDir.RIGHT]
    assert snapshot.legal_actions(snapshot.get_unit(5)) == []
    assert all(5 not in c.action for c in generate_children(snapshot))


def test_apply_rejects_unknown_units(friendly, enemy):
    snapshot = CombatSnapshot.create([friendly(1, 0, 0)], [enemy(2, 2, 0)], width=3, height=1)
    with pytest.raises(ValueError):
        snapshot.apply({9: Action.move(MoveDir.RIGHT)})
    with pytest.raises(ValueError):
        snapshot.apply({1: Action.attack(9)})


def test_render_marks_units_and_obstacles():
    snapshot = CombatSnapshot.from_world(create_skirmish_scenario(), player=0)
    rows = snapshot.render().splitlines()
    assert len(rows) == 6
    assert rows[0] == ".......a"
    assert rows[-1] == ".......a"
    assert rows[1] == "F......."
    assert rows[2] == "...##..."


def test_search_node_root_has_empty_action(friendly):
    snapshot = CombatSnapshot.create([friendly(1, 0, 0)], [], width=2, height=2)
    assert SearchNode.root(snapshot).action == {}
