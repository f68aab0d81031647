from __future__ import annotations

from pathlib import Path

import pytest

from jobshield.config import load_profile, load_scoring_config, scoring_from_dict
from jobshield.models import DEFAULT_SCORING


def test_scoring_overrides_merge_with_defaults() -> None:
    config = scoring_from_dict({"severity_weights": {"medium": 12}, "apply_now_min_match": 90})
    assert config.severity_weights == {"critical": 40, "high": 25, "medium": 12, "low": 5}
    assert config.apply_now_min_match == 90
    assert config.consider_min_match == DEFAULT_SCORING.consider_min_match


@pytest.mark.parametrize(
    "data",
    [
        {"unknown_setting": 1},
        {"severity_weights": {"severe": 10}},
        {"severity_weights": {"low": -1}},
        {"apply_now_min_match": 30},
        {"salary_high_multiple": 1.5},
        {"severity_weights": {"low": 50, "critical": 10}},
        {"severity_weights": {"medium": 30}},
        {"severity_weights": 10},
        {"severity_weights": {"high": "lots"}},
        {"apply_now_min_match": "high"},
        {"apply_now_min_match": True},
        {"consider_min_match": 12.5},
        {"max_quick_wins": -1},
        {"apply_now_min_match": 120},
    ],
)
def test_invalid_scoring_settings_are_rejected(data: dict) -> None:
    with pytest.raises(ValueError):
        scoring_from_dict(data)


def test_tier_ordered_weights_keep_score_monotonic() -> None:
    config = scoring_from_dict({"severity_weights": {"critical": 100, "high": 100, "low": 0}})
    weights = [config.severity_weights[tier] for tier in ("low", "medium", "high", "critical")]
    assert weights == sorted(weights)


def test_whole_float_values_are_accepted_for_integer_settings() -> None:
    config = scoring_from_dict({"max_quick_wins": 2.0, "salary_medium_multiple": 2})
    assert config.max_quick_wins == 2
    assert isinstance(config.max_quick_wins, int)
    assert config.salary_medium_multiple == 2.0


def test_load_scoring_config_from_file(tmp_path: Path) -> None:
    path = tmp_path / "scoring.yaml"
    path.write_text("severity_weights:\n  low: 0\nconsider_min_match: 50\n", encoding="utf-8")
    config = load_scoring_config(path)
    assert config.severity_weights["low"] == 0
    assert config.consider_min_match == 50


def test_load_scoring_config_from_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "tuned.yaml"
    path.write_text("max_quick_wins: 1\n", encoding="utf-8")
    monkeypatch.setenv("JOBSHIELD_SCORING_PATH", str(path))
    assert load_scoring_config().max_quick_wins == 1


def test_default_scoring_file_matches_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("JOBSHIELD_SCORING_PATH", raising=False)
    assert load_scoring_config() == DEFAULT_SCORING


def test_explicit_missing_scoring_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_scoring_config(tmp_path / "missing.yaml")


def test_scoring_file_must_be_a_mapping(tmp_path: Path) -> None:
    path = tmp_path / "scoring.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_scoring_config(path)


def test_load_profile_nested_layout(tmp_path: Path) -> None:
    path = tmp_path / "profile.yaml"
    path.write_text(
        "profile:\n"
        "  years_experience: 4\n"
        "  skills: [Excel, Data Entry]\n"
        "locations: [Orlando, Remote]\n",
        encoding="utf-8",
    )
    profile = load_profile(path)
    assert profile.skills == ["Excel", "Data Entry"]
    assert profile.experience_years == 4
    assert profile.location == "Orlando"


def test_load_profile_flat_layout(tmp_path: Path) -> None:
    path = tmp_path / "profile.yaml"
    path.write_text("skills:\n  - Python\nexperience_years: nope\n", encoding="utf-8")
    profile = load_profile(path)
    assert profile.skills == ["Python"]
    assert profile.experience_years is None
