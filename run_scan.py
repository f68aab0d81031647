#!/usr/bin/env python3
"""Scan a file of job postings for scams and rate each against your profile."""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from jobshield.log import get_logger
from jobshield.config import PROFILE_PATH, load_profile, load_scoring_config
from jobshield.models import UserProfile

log = get_logger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("postings", type=Path, help="YAML or JSON file with job postings")
    parser.add_argument("--profile", type=Path, default=None, help=f"profile YAML (default: {PROFILE_PATH})")
    parser.add_argument("--scoring", type=Path, default=None, help="scoring YAML overriding the defaults")
    parser.add_argument("--write-report", action="store_true", help="write a Markdown report to reports/")
    parser.add_argument("--job-id", default=None, help="analyze one posting by id or external id and print JSON")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    from jobshield.analyzer import analyze_job_fit
    from jobshield.report import build_scan_report, write_scan_report
    from jobshield.repository import FileJobRepository
    from jobshield.service import JobNotFoundError, analyze_job_by_id

    profile_path = args.profile or PROFILE_PATH
    if profile_path.exists():
        profile = load_profile(profile_path)
    else:
        log.warning("No profile at %s — analyzing without skills", profile_path)
        profile = UserProfile()
    config = load_scoring_config(args.scoring)

    repo = FileJobRepository(args.postings)
    if args.job_id:
        try:
            payload = analyze_job_by_id(repo, args.job_id, profile, config=config)
        except JobNotFoundError as e:
            log.error("Job not found: %s", e.job_id)
            return 1
        print(json.dumps(payload, indent=2))
        return 0

    jobs = repo.all()
    results = [(job, analyze_job_fit(job, profile, config)) for job in jobs]

    for job, analysis in results:
        fit = f"{analysis.qualification.match_percentage}%" if analysis.qualification else "n/a"
        log.info(
            "  %-10s  scam=%-8s fit=%-4s  %s @ %s",
            analysis.recommendation, analysis.scam_check.severity, fit,
            job.title or "Untitled", job.company or "Unknown",
        )

    if args.write_report:
        path = write_scan_report(build_scan_report(results))
        log.info("Report: %s", path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
