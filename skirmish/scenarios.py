"""
Scenario presets.

Each preset returns a fresh WorldSnapshot. Player 0 is the friendly
player of the shipped agents; player 1 is the opponent.
"""

from __future__ import annotations

from typing import Callable, Dict

from .world.snapshot import UnitView, WorldSnapshot

FOOTMAN = dict(hp=160, basic_attack=8, attack_range=1, unit_type="Footman")
ARCHER = dict(hp=50, basic_attack=6, attack_range=1, unit_type="Archer")
TOWNHALL = dict(hp=1200, basic_attack=0, attack_range=1, unit_type="TownHall")


def create_path_scenario() -> WorldSnapshot:
    """
    The small pathfinding map (y = 2 is the top row)::

        H . . . .
        # # # . #
        F . . . .

    Footman at (0, 0), townhall at (0, 2), obstacles on row 1 except (3, 1).
    """
    return WorldSnapshot(
        width=5,
        height=3,
        units=(
            UnitView(id=1, player=0, x=0, y=0, **FOOTMAN),
            UnitView(id=2, player=1, x=0, y=2, **TOWNHALL),
        ),
        obstacles=((0, 1), (1, 1), (2, 1), (4, 1)),
    )


def create_dynamic_path_scenario() -> WorldSnapshot:
    """A longer corridor map where an enemy footman can block the route."""
    obstacles = tuple((x, 3) for x in range(0, 8)) + tuple((x, 6) for x in range(2, 10))
    return WorldSnapshot(
        width=10,
        height=10,
        units=(
            UnitView(id=1, player=0, x=0, y=0, **FOOTMAN),
            UnitView(id=2, player=1, x=1, y=9, **TOWNHALL),
            UnitView(id=3, player=1, x=9, y=4, **FOOTMAN),
        ),
        obstacles=obstacles,
    )


def create_skirmish_scenario() -> WorldSnapshot:
    """Two footmen against two archers around a pair of walls."""
    return WorldSnapshot(
        width=8,
        height=6,
        units=(
            UnitView(id=1, player=0, x=0, y=1, **FOOTMAN),
            UnitView(id=2, player=0, x=0, y=4, **FOOTMAN),
            UnitView(id=3, player=1, x=7, y=0, **ARCHER),
            UnitView(id=4, player=1, x=7, y=5, **ARCHER),
        ),
        obstacles=((3, 2), (3, 3), (4, 2), (4, 3)),
    )


SCENARIOS: Dict[str, Callable[[], WorldSnapshot]] = {
    "path": create_path_scenario,
    "dynamic-path": create_dynamic_path_scenario,
    "skirmish": create_skirmish_scenario,
}


def load_scenario(name: str) -> WorldSnapshot:
    """
    Raises:
        ValueError: For an unknown preset name
    """
    try:
        factory = SCENARIOS[name]
    except KeyError:
        raise ValueError(f"Unknown scenario '{name}', expected one of {sorted(SCENARIOS)}") from None
    return factory()
