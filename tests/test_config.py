from pathlib import Path

import pytest
from pydantic import ValidationError

from campusnav.config import Settings


def test_defaults():
    settings = Settings()

    assert settings.api_prefix == "/api"
    assert settings.walking_speed_m_per_min == pytest.approx(83.33)
    assert settings.alternative_similarity_threshold == pytest.approx(0.7)
    assert settings.composition_similarity_threshold == pytest.approx(0.6)
    assert settings.max_search_iterations is None
    assert settings.graph_file.is_absolute()


def test_origins_accept_comma_separated_values():
    settings = Settings(frontend_allowed_origins="https://a.example, https://b.example")
    assert settings.frontend_allowed_origins == ("https://a.example", "https://b.example")


def test_origins_accept_a_single_value():
    settings = Settings(frontend_allowed_origins=" https://a.example ")
    assert settings.frontend_allowed_origins == ("https://a.example",)


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    monkeypatch.setenv("CAMPUSNAV_FRONTEND_ALLOWED_ORIGINS", '["https://campus.example"]')
    monkeypatch.setenv("CAMPUSNAV_MAX_SEARCH_ITERATIONS", "500")
    monkeypatch.setenv("CAMPUSNAV_GRAPH_FILE", str(tmp_path / "graph.json"))

    settings = Settings()

    assert settings.frontend_allowed_origins == ("https://campus.example",)
    assert settings.max_search_iterations == 500
    assert settings.graph_file == (tmp_path / "graph.json").resolve()


@pytest.mark.parametrize(
    "overrides",
    [
        {"walking_speed_m_per_min": 0},
        {"alternative_similarity_threshold": 1.5},
        {"max_allocation_iterations": 0},
        {"log_level": "VERBOSE"},
    ],
)
def test_invalid_values(overrides):
    with pytest.raises(ValidationError):
        Settings(**overrides)
