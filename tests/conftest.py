from pathlib import Path
import logging
import sys

# Add repository root to sys.path so tests can import local modules without installation.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from skirmish.config import PLIES_ENV_VAR
from skirmish.core.types import Cell, Side, UnitKind
from skirmish.model.unit import UnitStat


@pytest.fixture
def make_unit():
    """Factory for UnitStat with footman-like defaults."""
    def _make(uid, side, x, y, hp=160, damage=8, attack_range=1, kind=UnitKind.MELEE):
        return UnitStat(uid, side, Cell(x, y), hp, damage, attack_range, kind)
    return _make


@pytest.fixture
def friendly(make_unit):
    def _make(uid, x, y, **kwargs):
        return make_unit(uid, Side.FRIENDLY, x, y, **kwargs)
    return _make


@pytest.fixture
def enemy(make_unit):
    def _make(uid, x, y, **kwargs):
        return make_unit(uid, Side.ENEMY, x, y, **kwargs)
    return _make


@pytest.fixture
def no_plies_env(monkeypatch, tmp_path):
    """Run from an empty directory with $SKIRMISH_PLIES unset."""
    monkeypatch.chdir(tmp_path)
    # set-then-delete so that monkeypatch also removes any value a .env load adds
    monkeypatch.setenv(PLIES_ENV_VAR, "unset")
    monkeypatch.delenv(PLIES_ENV_VAR)
    return tmp_path


@pytest.fixture
def restore_logging():
    """Undo configure_logging() calls made by a test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            handler.close()
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
