"""Load profile, scoring and env configuration."""
from __future__ import annotations

import os
from dataclasses import fields, replace
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from jobshield.log import get_logger
from jobshield.models import DEFAULT_SCORING, SEVERITY_RANK, ScoringConfig, UserProfile

log = get_logger(__name__)

load_dotenv()

ROOT_DIR: Path = Path(__file__).resolve().parent.parent
CONFIG_DIR: Path = ROOT_DIR / "config"
PROFILE_PATH: Path = CONFIG_DIR / "profile.yaml"
SCORING_PATH: Path = CONFIG_DIR / "scoring.yaml"
REPORTS_DIR: Path = ROOT_DIR / "reports"


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def _read_yaml(path: Path) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path.name}: expected a mapping at top level, got {type(data).__name__}")
    return data


def load_profile(path: Path | str | None = None) -> UserProfile:
    profile_path = Path(path) if path else PROFILE_PATH
    data = _read_yaml(profile_path)
    profile = UserProfile.from_profile(data)
    log.debug("Loaded profile %s (%d skills)", profile_path.name, len(profile.skills))
    return profile


def _number(name: str, value: Any, *, integer: bool) -> int | float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number, got {value!r}")
    if integer and value != int(value):
        raise ValueError(f"{name} must be a whole number, got {value!r}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value!r}")
    return int(value) if integer else float(value)


def _severity_weights(value: Any) -> dict[str, int]:
    if value is None:
        value = {}
    if not isinstance(value, dict):
        raise ValueError(f"severity_weights must be a mapping of tier to weight, got {value!r}")
    weights = dict(DEFAULT_SCORING.severity_weights)
    for tier, weight in value.items():
        if tier not in SEVERITY_RANK:
            raise ValueError(f"Unknown severity tier in severity_weights: {tier!r}")
        weights[tier] = _number(f"severity_weights.{tier}", weight, integer=True)
    by_rank = [weights[tier] for tier in sorted(SEVERITY_RANK, key=SEVERITY_RANK.get, reverse=True)]
    if by_rank != sorted(by_rank, reverse=True):
        raise ValueError("severity_weights must satisfy critical >= high >= medium >= low")
    return weights


def scoring_from_dict(data: dict[str, Any]) -> ScoringConfig:
    """Overlay *data* on the defaults, validating types, tiers and verdict cutoffs."""
    known = {f.name for f in fields(ScoringConfig)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown scoring settings: {', '.join(sorted(unknown))}")

    overrides: dict[str, Any] = {}
    for name, value in data.items():
        if name == "severity_weights":
            overrides[name] = _severity_weights(value)
        else:
            default = getattr(DEFAULT_SCORING, name)
            overrides[name] = _number(name, value, integer=isinstance(default, int))

    config = replace(DEFAULT_SCORING, **overrides)
    for name in ("apply_now_min_match", "strong_consider_min_match", "consider_min_match", "default_match_percentage"):
        if getattr(config, name) > 100:
            raise ValueError(f"{name} is a percentage and must be <= 100")
    if not (config.apply_now_min_match >= config.strong_consider_min_match >= config.consider_min_match):
        raise ValueError("Verdict cutoffs must satisfy apply_now >= strong_consider >= consider")
    if config.salary_high_multiple < config.salary_medium_multiple:
        raise ValueError("salary_high_multiple must be >= salary_medium_multiple")
    return config


def load_scoring_config(path: Path | str | None = None) -> ScoringConfig:
    """Scoring constants from YAML; defaults when no file is present."""
    scoring_path = Path(path or get_env("JOBSHIELD_SCORING_PATH") or SCORING_PATH)
    if not scoring_path.exists():
        if path:
            raise FileNotFoundError(scoring_path)
        log.debug("No scoring config at %s — using defaults", scoring_path)
        return DEFAULT_SCORING
    config = scoring_from_dict(_read_yaml(scoring_path))
    log.info("Loaded scoring config → %s", scoring_path.name)
    return config
