"""Generate a Markdown report for a batch of analyzed jobs."""
from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from jobshield.config import REPORTS_DIR
from jobshield.log import get_logger
from jobshield.models import JobAnalysis, JobPosting

log = get_logger(__name__)

_BADGES: dict[str, str] = {
    "APPLY_NOW": "✅",
    "CONSIDER": "\U0001f914",
    "SKIP": "⏭️",
}

_ORDER: dict[str, int] = {"APPLY_NOW": 0, "CONSIDER": 1, "SKIP": 2}


def _cell(value: str | None, width: int) -> str:
    value = (value or "").replace("|", "/")
    return value[:width] + ("…" if len(value) > width else "")


def _ranked(results: list[tuple[JobPosting, JobAnalysis]]) -> list[tuple[JobPosting, JobAnalysis]]:
    def key(item: tuple[JobPosting, JobAnalysis]) -> tuple[int, int, int]:
        _, a = item
        match = a.qualification.match_percentage if a.qualification else 0
        return (_ORDER[a.recommendation], a.scam_check.score, -match)

    return sorted(results, key=key)


def build_scan_report(results: list[tuple[JobPosting, JobAnalysis]], *, now: datetime | None = None) -> str:
    date = (now or datetime.now(timezone.utc)).strftime("%Y-%m-%d")
    lines: list[str] = [f"# Job Scan Report — {date}", ""]

    counts = {r: sum(1 for _, a in results if a.recommendation == r) for r in _ORDER}
    blocked = [(j, a) for j, a in results if a.scam_check.severity == "critical"]
    lines.append(
        f"**{len(results)}** jobs analyzed | **{counts['APPLY_NOW']}** apply now | "
        f"**{counts['CONSIDER']}** consider | **{counts['SKIP']}** skip | **{len(blocked)}** blocked"
    )
    lines.append("")

    shown = [(j, a) for j, a in _ranked(results) if a.scam_check.severity != "critical"]
    if shown:
        lines.append("## Verdicts")
        lines.append("")
        for job, a in shown:
            lines.append(f"### {_BADGES[a.recommendation]} {job.title or 'Untitled'} @ {job.company or 'Unknown'}")
            lines.append(f"- **Verdict:** {a.recommendation} — {a.verdict.reason}")
            lines.append(f"- **Safety:** {a.safety.status} (scam score {a.scam_check.score})")
            if a.qualification:
                q = a.qualification
                lines.append(f"- **Fit:** {q.match_percentage}% ({q.total_matched}/{q.total_required} skills)")
                if q.missing_skills:
                    lines.append(f"- **Missing:** {', '.join(q.missing_skills)}")
            if a.safety.flags:
                lines.append(f"- **Flags:** {'; '.join(a.safety.flags)}")
            if a.quick_win:
                lines.append(f"- **Quick win:** {a.quick_win.action} ({a.quick_win.impact}, {a.quick_win.time_estimate})")
            if job.apply_url:
                lines.append(f"- **Apply:** {job.apply_url}")
            lines.append("")

        lines.append("---")
        lines.append("")
        lines.append("## Quick Reference")
        lines.append("")
        lines.append("| # | Role | Company | Fit | Scam | Verdict |")
        lines.append("|--:|------|---------|----:|-----:|---------|")
        for i, (job, a) in enumerate(shown, 1):
            fit = f"{a.qualification.match_percentage}%" if a.qualification else "—"
            lines.append(
                f"| {i} | {_cell(job.title, 40)} | {_cell(job.company, 22)} | {fit} | "
                f"{a.scam_check.score} | {a.recommendation} |"
            )
        lines.append("")

    if blocked:
        lines.append("---")
        lines.append("")
        lines.append("## Blocked Listings")
        lines.append("")
        for job, a in blocked:
            reasons = ", ".join(f.description for f in a.scam_check.flags if f.severity == "critical")
            lines.append(f"- **{job.title or 'Untitled'}** @ {job.company or 'Unknown'} — {reasons}")
        lines.append("")

    log.info("Built scan report: %d jobs, %d blocked", len(results), len(blocked))
    return "\n".join(lines)


def write_scan_report(content: str, reports_dir: Path | None = None) -> Path:
    target_dir = reports_dir or REPORTS_DIR
    target_dir.mkdir(parents=True, exist_ok=True)
    date = datetime.now(timezone.utc).strftime("%Y-%m-%d")
    path = target_dir / f"scan_{date}.md"
    path.write_text(content, encoding="utf-8")
    log.info("Report written → %s", path)
    return path
