"""Job lookup and analysis envelope used by the job-fit endpoint."""
from __future__ import annotations

import re
from datetime import date, datetime, timezone
from typing import Any, Iterable

from jobshield.analyzer import analyze_job_fit
from jobshield.log import get_logger
from jobshield.models import JobPosting, ScoringConfig, UserProfile
from jobshield.repository import JobRepository

log = get_logger(__name__)

_UUID_RE = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE)

# Aggregator prefixes tried when a bare external id misses
EXTERNAL_ID_PREFIXES: tuple[str, ...] = ("indeed_", "jsearch_")


class JobNotFoundError(LookupError):
    def __init__(self, job_id: str) -> None:
        super().__init__(f"Job not found: {job_id}")
        self.job_id = job_id


def resolve_job(repo: JobRepository, job_id: str) -> JobPosting:
    """Find a job by UUID, then external id, then prefixed external id."""
    if not job_id or not job_id.strip():
        raise ValueError("job_id is required")
    job_id = job_id.strip()

    if _UUID_RE.match(job_id):
        job = repo.get_by_id(job_id)
        if job is not None:
            return job

    job = repo.get_by_external_id(job_id)
    if job is not None:
        return job

    for prefix in EXTERNAL_ID_PREFIXES:
        if job_id.startswith(prefix):
            continue
        job = repo.get_by_external_id(f"{prefix}{job_id}")
        if job is not None:
            return job

    raise JobNotFoundError(job_id)


def analyze_job_by_id(
    repo: JobRepository,
    job_id: str,
    user_profile: UserProfile,
    *,
    config: ScoringConfig | None = None,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Resolve *job_id* and return the JSON envelope for the analysis."""
    job = resolve_job(repo, job_id)
    analysis = analyze_job_fit(job, user_profile, config)
    analyzed_at = (now or datetime.now(timezone.utc)).isoformat()
    log.info("Analyzed job %s → %s", job.id or job.external_id or job_id, analysis.recommendation)
    return {
        "jobId": job.id or job.external_id or job_id,
        "jobTitle": job.title,
        "company": job.company,
        **analysis.to_dict(),
        "analyzedAt": analyzed_at,
    }


def _parse_date(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    for fmt in ("%Y-%m-%d", "%Y-%m", "%m/%Y", "%Y"):
        try:
            return datetime.strptime(text[:10] if fmt == "%Y-%m-%d" else text, fmt).date()
        except ValueError:
            continue
    return None


def extract_experience_years(
    experience: Iterable[dict[str, Any]] | None,
    today: date | None = None,
) -> int | None:
    """Whole years of experience summed from resume entries; None if unknown."""
    if not experience or isinstance(experience, (str, bytes, dict)):
        return None
    today = today or date.today()

    total_months = 0
    for entry in experience:
        if not isinstance(entry, dict):
            continue
        start_raw = entry.get("startDate") or entry.get("start_date")
        if not start_raw:
            continue
        end_raw = entry.get("endDate") or entry.get("end_date") or "present"
        start = _parse_date(start_raw)
        end = today if str(end_raw).strip().lower() == "present" else _parse_date(end_raw)
        if start is None or end is None:
            continue
        total_months += max(0, (end.year - start.year) * 12 + (end.month - start.month))

    return round(total_months / 12) if total_months > 0 else None


def profile_from_resume(resume: dict[str, Any] | None) -> UserProfile:
    """User profile from an active resume record (skills + experience entries)."""
    resume = resume or {}
    return UserProfile(
        skills=[str(s) for s in resume.get("skills") or [] if s],
        experience_years=extract_experience_years(resume.get("experience")),
    )
