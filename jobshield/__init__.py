"""Deterministic job scam detection and job-fit analysis."""
from jobshield.analyzer import analyze_job_fit, quick_analyze
from jobshield.models import JobAnalysis, JobPosting, ScamCheckResult, ScamFlag, UserProfile
from jobshield.salary import get_median_salary
from jobshield.scam_shield import check_job_for_scams
from jobshield.service import JobNotFoundError, analyze_job_by_id, resolve_job

__all__ = [
    "JobAnalysis", "JobNotFoundError", "JobPosting", "ScamCheckResult", "ScamFlag", "UserProfile",
    "analyze_job_by_id", "analyze_job_fit", "check_job_for_scams", "get_median_salary",
    "quick_analyze", "resolve_job",
]
