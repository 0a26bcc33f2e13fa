import pytest

from skirmish.config import PLIES_ENV_VAR, SearchSettings, build_settings, load_settings
from skirmish.core.errors import ConfigurationError
from skirmish.model.evaluation import EvaluationWeights


def test_missing_depth_is_fatal():
    with pytest.raises(ConfigurationError, match="You must specify the number of plies"):
        build_settings(depth=None)


@pytest.mark.parametrize("bad", ["abc", "", "2.5", 2.5, 0, -1, True])
def test_invalid_depth_is_fatal(bad):
    with pytest.raises(ConfigurationError):
        build_settings(depth=bad)


def test_numeric_string_depth_is_accepted():
    assert build_settings(depth="3").depth == 3
    assert build_settings(depth=" 2 ").depth == 2


def test_configuration_error_is_a_value_error():
    with pytest.raises(ValueError):
        build_settings(depth="many")


def test_unknown_setting_is_rejected():
    with pytest.raises(ConfigurationError):
        build_settings(depth=2, bogus=1)


def test_weights_follow_settings():
    settings = build_settings(depth=2, hp_weight=2.0, distance_weight=-1.0, force_weight=10.0)
    assert settings.weights == EvaluationWeights(hp=2.0, distance=-1.0, force=10.0)
    assert SearchSettings(depth=1).weights == EvaluationWeights()


def test_positive_distance_weight_is_rejected():
    with pytest.raises(ConfigurationError):
        build_settings(depth=2, distance_weight=1.0)


def test_plies_from_environment(no_plies_env, monkeypatch):
    monkeypatch.setenv(PLIES_ENV_VAR, "4")
    assert load_settings().depth == 4


def test_plies_from_dotenv_file(no_plies_env):
    (no_plies_env / ".env").write_text(f"{PLIES_ENV_VAR}=2\n")
    assert load_settings().depth == 2


def test_explicit_plies_win_over_environment(no_plies_env, monkeypatch):
    monkeypatch.setenv(PLIES_ENV_VAR, "4")
    assert load_settings(1).depth == 1


def test_plies_missing_everywhere(no_plies_env):
    with pytest.raises(ConfigurationError):
        load_settings()


def test_overrides_pass_through(no_plies_env):
    settings = load_settings(2, allow_stacking=True, heuristic="manhattan", time_budget=0.5)
    assert settings.allow_stacking
    assert settings.heuristic == "manhattan"
    assert settings.time_budget == 0.5
