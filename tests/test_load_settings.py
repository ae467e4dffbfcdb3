import pytest

from prereqs.config import DEFAULT_MAX_ROUNDS, load_settings


def test_defaults(monkeypatch_env):
    settings = load_settings()
    assert settings.max_rounds == DEFAULT_MAX_ROUNDS
    assert settings.rank_exam_scores
    assert settings.equivalents_path is None


def test_from_environment(monkeypatch_env):
    monkeypatch_env.setenv("MINIMIZE_MAX_ROUNDS", "7")
    monkeypatch_env.setenv("RANK_EXAM_SCORES", "false")
    monkeypatch_env.setenv("EQUIVALENTS_PATH", "equivalents.json")

    settings = load_settings()
    assert settings.max_rounds == 7
    assert not settings.rank_exam_scores
    assert settings.equivalents_path == "equivalents.json"


def test_non_integer_rounds(monkeypatch_env):
    monkeypatch_env.setenv("MINIMIZE_MAX_ROUNDS", "many")
    with pytest.raises(ValueError, match="must be an integer"):
        load_settings()


def test_non_positive_rounds(monkeypatch_env):
    monkeypatch_env.setenv("MINIMIZE_MAX_ROUNDS", "0")
    with pytest.raises(ValueError, match="positive"):
        load_settings()
