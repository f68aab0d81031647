"""
Scam Shield: deterministic job scam detection.

Pattern matching and heuristics only (no network, no model calls), so a
posting scores in well under 10ms and the same posting always scores the
same way.

Severity levels:
  - critical: auto-block, don't show the job
  - high: show warning, require confirmation to view
  - medium: show warning badge
  - low: safe, show green badge
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping, TypeVar

from jobshield.log import get_logger
from jobshield.models import (
    DEFAULT_SCORING,
    SEVERITY_RANK,
    JobPosting,
    ScamCheckResult,
    ScamFlag,
    ScoringConfig,
    Severity,
)
from jobshield.rules import RULES, scan_text

log = get_logger(__name__)

J = TypeVar("J", JobPosting, Mapping[str, Any])


def as_job_posting(job: JobPosting | Mapping[str, Any]) -> JobPosting:
    if isinstance(job, JobPosting):
        return job
    if isinstance(job, Mapping):
        return JobPosting.from_dict(job)
    raise TypeError(f"expected JobPosting or mapping, got {type(job).__name__}")


def check_job_for_scams(
    job: JobPosting | Mapping[str, Any],
    config: ScoringConfig | None = None,
) -> ScamCheckResult:
    """Run every rule against *job* and aggregate the flags."""
    posting = as_job_posting(job)
    config = config or DEFAULT_SCORING
    text = scan_text(posting)

    flags: list[ScamFlag] = []
    for rule in RULES:
        flag = rule(posting, config, text)
        if flag is not None:
            flags.append(flag)

    severity = calculate_severity(flags)
    if flags:
        log.debug(
            "Scam check %r: %s (%s)",
            posting.title or posting.id or "untitled",
            severity,
            ", ".join(f.id for f in flags),
        )
    return ScamCheckResult(
        severity=severity,
        flags=tuple(flags),
        safe=severity == "low",
        message=generate_message(severity, flags),
        score=calculate_score(flags, config),
    )


def calculate_severity(flags: Iterable[ScamFlag]) -> Severity:
    severity: Severity = "low"
    for flag in flags:
        if SEVERITY_RANK[flag.severity] > SEVERITY_RANK[severity]:
            severity = flag.severity
    return severity


def calculate_score(flags: Iterable[ScamFlag], config: ScoringConfig | None = None) -> int:
    """Suspicion score 0-100: per-tier weights summed and clamped."""
    weights = (config or DEFAULT_SCORING).severity_weights
    score = sum(weights.get(f.severity, 0) for f in flags)
    return max(0, min(100, score))


def most_severe_flag(flags: Iterable[ScamFlag]) -> ScamFlag | None:
    """Highest-severity flag; the earliest one wins ties."""
    top: ScamFlag | None = None
    for flag in flags:
        if top is None or SEVERITY_RANK[flag.severity] > SEVERITY_RANK[top.severity]:
            top = flag
    return top


def generate_message(severity: Severity, flags: list[ScamFlag]) -> str:
    top = most_severe_flag(flags)
    if top is None:
        return "No scam indicators found. This job listing appears safe."
    if severity == "critical":
        return (
            "This job listing shows strong indicators of a scam and has been blocked "
            f"for your protection: {top.description.lower()}."
        )
    if severity == "high":
        plural = "s" if len(flags) > 1 else ""
        return (
            f"This job listing has {len(flags)} red flag{plural} that may indicate a scam "
            f"(most serious: {top.description.lower()}). Please proceed with caution."
        )
    if severity == "medium":
        return (
            "This job listing has some characteristics that warrant caution "
            f"({top.description.lower()}). Verify the company before applying."
        )
    return f"This job listing appears safe. Minor note: {top.description.lower()}."


# ── Utility functions ────────────────────────────────────────────────────


def filter_critical_jobs(jobs: Iterable[J]) -> list[J]:
    """Drop jobs whose scam severity is critical."""
    jobs = list(jobs)
    kept = [j for j in jobs if check_job_for_scams(j).severity != "critical"]
    log.info("Scam filter: %d jobs → %d shown (%d blocked)", len(jobs), len(kept), len(jobs) - len(kept))
    return kept


def enrich_jobs_with_scam_check(jobs: Iterable[J]) -> list[tuple[J, ScamCheckResult]]:
    return [(j, check_job_for_scams(j)) for j in jobs]


def get_readable_flags(flags: Iterable[ScamFlag]) -> list[str]:
    return [f.description for f in flags]


def should_show_job(job: JobPosting | Mapping[str, Any]) -> bool:
    return check_job_for_scams(job).severity != "critical"


def requires_warning_confirmation(job: JobPosting | Mapping[str, Any]) -> bool:
    """High severity jobs need user confirmation before viewing."""
    return check_job_for_scams(job).severity == "high"
