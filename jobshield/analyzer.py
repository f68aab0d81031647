"""
Job Analyzer: decide whether a job is worth applying to.

Pipeline: Scam Shield gate → requirement extraction → skill match →
quick wins → APPLY_NOW / CONSIDER / SKIP verdict.

Only a critical scam result forces SKIP. A high one does not: it drops the
fit verdict by one tier, so a strong match on a risky posting still shows
up as CONSIDER with the safety concern in the reason. Medium results keep
the verdict and add a reminder to verify the employer.
"""
from __future__ import annotations

from typing import Any, Mapping

from jobshield.log import get_logger
from jobshield.models import (
    DEFAULT_SCORING,
    JobAnalysis,
    JobPosting,
    QualificationMatch,
    QuickWin,
    Recommendation,
    SafetyResult,
    ScamCheckResult,
    ScoringConfig,
    UserProfile,
    Verdict,
)
from jobshield.scam_shield import as_job_posting, check_job_for_scams
from jobshield.skills import (
    extract_requirements,
    find_related_skill,
    is_quickly_learnable,
    match_skills,
    required_experience_years,
)

log = get_logger(__name__)

_STATUS_BY_SEVERITY: dict[str, str] = {
    "low": "safe",
    "medium": "caution",
    "high": "warning",
    "critical": "danger",
}

_DOWNGRADE: dict[str, Recommendation] = {
    "APPLY_NOW": "CONSIDER",
    "CONSIDER": "SKIP",
    "SKIP": "SKIP",
}


def to_safety_result(scam: ScamCheckResult) -> SafetyResult:
    return SafetyResult(
        status=_STATUS_BY_SEVERITY[scam.severity],  # type: ignore[arg-type]
        severity=scam.severity.upper(),  # type: ignore[arg-type]
        flags=[f.description for f in scam.flags],
        message=scam.message,
        score=scam.score,
    )


def check_safety(job: JobPosting | Mapping[str, Any], config: ScoringConfig | None = None) -> SafetyResult:
    return to_safety_result(check_job_for_scams(job, config))


def generate_quick_wins(
    qualification: QualificationMatch,
    user_skills: list[str],
    limit: int = 3,
) -> list[QuickWin]:
    """Concrete actions for the top missing skills, most important first."""
    if qualification.total_required > 0:
        impact = f"+{round(100 / qualification.total_required)}% match"
    else:
        impact = "+5% match"

    wins: list[QuickWin] = []
    for missing in qualification.missing_skills[:limit]:
        related = find_related_skill(missing, user_skills)
        if related:
            wins.append(QuickWin(
                action=f'Highlight your {related} experience as "{missing}"',
                impact=impact,
                time_estimate="3 min",
                type="reframe",
            ))
        elif is_quickly_learnable(missing):
            wins.append(QuickWin(
                action=f"Watch a quick tutorial on {missing} basics",
                impact=impact,
                time_estimate="5 min",
                type="learn",
            ))
        else:
            wins.append(QuickWin(
                action=f'Add "{missing}" to your skills section if applicable',
                impact=impact,
                time_estimate="2 min",
                type="add_skill",
            ))
    return wins


def verdict_from_fit(match_percentage: int, config: ScoringConfig | None = None) -> Verdict:
    """Verdict on qualification fit alone (no safety signal)."""
    config = config or DEFAULT_SCORING
    if match_percentage >= config.apply_now_min_match:
        return Verdict("APPLY_NOW", "You're a strong match for this role. Apply with confidence!", 90)
    if match_percentage >= config.strong_consider_min_match:
        return Verdict("CONSIDER", "You meet most requirements. Use the quick win to boost your chances.", 75)
    if match_percentage >= config.consider_min_match:
        return Verdict("CONSIDER", "This is a stretch role. Emphasize transferable skills if you apply.", 60)
    return Verdict(
        "SKIP",
        "You may not meet enough requirements. Consider similar roles that better match your skills.",
        70,
    )


def calculate_verdict(
    scam: ScamCheckResult,
    qualification: QualificationMatch | None,
    config: ScoringConfig | None = None,
) -> Verdict:
    """Combine safety and fit. Critical always skips; high drops one tier."""
    if scam.severity == "critical" or qualification is None:
        return Verdict("SKIP", scam.message, 95)

    fit = verdict_from_fit(qualification.match_percentage, config)

    if scam.severity == "high":
        downgraded = _DOWNGRADE[fit.recommendation]
        return Verdict(
            downgraded,
            f"This job has safety concerns. {scam.message}",
            max(fit.confidence - 15, 50),
        )
    if scam.severity == "medium":
        return Verdict(
            fit.recommendation,
            f"{fit.reason} Verify the employer before applying.",
            fit.confidence - 5,
        )
    return fit


def analyze_job_fit(
    job: JobPosting | Mapping[str, Any],
    user_profile: UserProfile | None = None,
    config: ScoringConfig | None = None,
) -> JobAnalysis:
    """Safety gate, then qualification fit, then a verdict. Pure."""
    posting = as_job_posting(job)
    profile = user_profile or UserProfile()
    config = config or DEFAULT_SCORING

    scam = check_job_for_scams(posting, config)
    safety = to_safety_result(scam)

    if scam.severity == "critical":
        log.info("Skipping fit analysis for %r: blocked by scam check", posting.title or posting.id)
        return JobAnalysis(
            scam_check=scam,
            safety=safety,
            qualification=None,
            quick_wins=(),
            verdict=calculate_verdict(scam, None, config),
        )

    qualification = match_skills(
        extract_requirements(posting),
        profile.skills,
        experience_years=profile.experience_years,
        required_years=required_experience_years(posting),
        config=config,
    )
    quick_wins = generate_quick_wins(qualification, profile.skills, limit=config.max_quick_wins)
    verdict = calculate_verdict(scam, qualification, config)

    log.debug(
        "Analyzed %r: %s (match %d%%, scam %s)",
        posting.title, verdict.recommendation, qualification.match_percentage, scam.severity,
    )
    return JobAnalysis(
        scam_check=scam,
        safety=safety,
        qualification=qualification,
        quick_wins=tuple(quick_wins),
        verdict=verdict,
    )


def quick_analyze(job: JobPosting | Mapping[str, Any]) -> JobAnalysis:
    """Analysis without a user profile (no skills)."""
    return analyze_job_fit(job, UserProfile())
