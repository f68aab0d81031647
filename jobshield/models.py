"""Data models for job postings, scam checks and fit analysis."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Literal, Mapping

Severity = Literal["critical", "high", "medium", "low"]
Recommendation = Literal["APPLY_NOW", "CONSIDER", "SKIP"]

# Higher rank = more urgent risk
SEVERITY_RANK: dict[str, int] = {"low": 0, "medium": 1, "high": 2, "critical": 3}


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return "\n".join(_text(v) for v in value if v is not None)
    return str(value)


def parse_salary(value: Any) -> float | None:
    """Coerce a salary bound; anything unparseable or non-positive is absent."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.replace(",", "").replace("$", "").strip()
        if not value:
            return None
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return None
    return amount if amount > 0 else None


@dataclass(frozen=True)
class JobPosting:
    title: str | None = None
    company: str | None = None
    company_website: str | None = None
    description: str | None = None
    requirements: str | list[str] | None = None
    salary_min: float | None = None
    salary_max: float | None = None
    contact_email: str | None = None
    location_address: str | None = None
    employment_type: str | None = None
    apply_url: str | None = None
    id: str | None = None
    external_id: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> JobPosting:
        """Build a posting from a DB row / JSON object, ignoring unknown keys."""
        if not isinstance(data, Mapping):
            raise TypeError(f"expected a mapping, got {type(data).__name__}")
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            if key not in known or value is None:
                continue
            if key in ("salary_min", "salary_max"):
                kwargs[key] = parse_salary(value)
            elif key == "requirements" and isinstance(value, (list, tuple)):
                kwargs[key] = [_text(v) for v in value if v is not None]
            else:
                kwargs[key] = _text(value)
        return cls(**kwargs)

    @property
    def requirements_text(self) -> str:
        return _text(self.requirements)

    def field_text(self, name: str) -> str:
        """Field value as a stripped string ("" when missing)."""
        if name == "requirements":
            return self.requirements_text.strip()
        return _text(getattr(self, name)).strip()


@dataclass(frozen=True)
class ScamFlag:
    id: str
    rule: str
    severity: Severity
    matched: str | bool
    description: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ScamCheckResult:
    severity: Severity
    flags: tuple[ScamFlag, ...]
    safe: bool
    message: str
    score: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "severity": self.severity,
            "flags": [f.to_dict() for f in self.flags],
            "safe": self.safe,
            "message": self.message,
            "score": self.score,
        }


@dataclass
class UserProfile:
    skills: list[str] = field(default_factory=list)
    experience_years: int | None = None
    education: str | None = None
    location: str | None = None

    @classmethod
    def from_profile(cls, data: Mapping[str, Any] | None) -> UserProfile:
        """Read the profile.yaml layout (nested ``profile:`` block or flat keys)."""
        data = data or {}
        inner = data.get("profile") or {}
        skills = inner.get("skills") or data.get("skills") or []
        years = inner.get("years_experience", data.get("years_experience", data.get("experience_years")))
        try:
            years = int(years) if years not in (None, "") else None
        except (TypeError, ValueError):
            years = None
        locations = data.get("locations") or []
        return cls(
            skills=[str(s) for s in skills if s],
            experience_years=years,
            education=inner.get("education") or data.get("education"),
            location=data.get("location") or (locations[0] if locations else None),
        )


@dataclass(frozen=True)
class QualificationMatch:
    match_percentage: int
    matched_skills: list[str]
    missing_skills: list[str]
    experience_gap: int | None
    total_required: int
    total_matched: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "matchPercentage": self.match_percentage,
            "matchedSkills": list(self.matched_skills),
            "missingSkills": list(self.missing_skills),
            "experienceGap": self.experience_gap,
            "totalRequired": self.total_required,
            "totalMatched": self.total_matched,
        }


@dataclass(frozen=True)
class QuickWin:
    action: str
    impact: str
    time_estimate: str
    type: Literal["add_skill", "reframe", "learn"]

    def to_dict(self) -> dict[str, Any]:
        return {
            "action": self.action,
            "impact": self.impact,
            "timeEstimate": self.time_estimate,
            "type": self.type,
        }


@dataclass(frozen=True)
class SafetyResult:
    status: Literal["safe", "caution", "warning", "danger"]
    severity: Literal["LOW", "MEDIUM", "HIGH", "CRITICAL"]
    flags: list[str]
    message: str
    score: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "severity": self.severity,
            "flags": list(self.flags),
            "message": self.message,
            "scamScore": self.score,
        }


@dataclass(frozen=True)
class Verdict:
    recommendation: Recommendation
    reason: str
    confidence: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class JobAnalysis:
    scam_check: ScamCheckResult
    safety: SafetyResult
    qualification: QualificationMatch | None
    quick_wins: tuple[QuickWin, ...]
    verdict: Verdict

    @property
    def recommendation(self) -> Recommendation:
        return self.verdict.recommendation

    @property
    def quick_win(self) -> QuickWin | None:
        return self.quick_wins[0] if self.quick_wins else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "safety": self.safety.to_dict(),
            "scamCheck": self.scam_check.to_dict(),
            "qualification": self.qualification.to_dict() if self.qualification else None,
            "quickWin": self.quick_win.to_dict() if self.quick_win else None,
            "quickWins": [q.to_dict() for q in self.quick_wins],
            "verdict": self.verdict.to_dict(),
        }


@dataclass(frozen=True)
class ScoringConfig:
    """Tunable constants for scam scoring and fit verdicts."""

    severity_weights: Mapping[str, int] = field(
        default_factory=lambda: {"critical": 40, "high": 25, "medium": 10, "low": 5}
    )
    # Offered salary / title median
    salary_high_multiple: float = 2.5
    salary_medium_multiple: float = 2.0
    # Description word counts
    vague_description_words: int = 50
    very_vague_description_words: int = 25
    min_requirements_chars: int = 20
    # Fit percentage cutoffs
    apply_now_min_match: int = 80
    strong_consider_min_match: int = 60
    consider_min_match: int = 40
    default_match_percentage: int = 85
    max_quick_wins: int = 3


DEFAULT_SCORING = ScoringConfig()
