"""Skill extraction and qualification matching for job fit."""
from __future__ import annotations

import re
from typing import Iterable

from jobshield.models import DEFAULT_SCORING, JobPosting, QualificationMatch, ScoringConfig

SKILL_KEYWORDS: dict[str, tuple[str, ...]] = {
    "technical": (
        "javascript", "typescript", "python", "java", "c++", "c#", "ruby", "php", "golang", "rust", "swift",
        "react", "angular", "vue", "node", "express", "django", "flask", "spring", "rails",
        "sql", "mysql", "postgresql", "mongodb", "redis", "elasticsearch",
        "aws", "azure", "gcp", "docker", "kubernetes", "terraform",
        "html", "css", "sass", "tailwind", "bootstrap",
        "git", "github", "gitlab", "ci/cd", "jenkins",
        "rest api", "graphql", "api", "microservices",
        "agile", "scrum", "jira", "confluence",
    ),
    "office": (
        "excel", "microsoft word", "powerpoint", "outlook", "microsoft office", "ms office",
        "google sheets", "google docs", "google slides", "g suite", "google workspace",
        "quickbooks", "salesforce", "hubspot", "zendesk", "slack", "zoom", "microsoft teams",
    ),
    "soft": (
        "communication", "teamwork", "leadership", "problem solving", "problem-solving",
        "time management", "organizational", "attention to detail",
        "customer service", "interpersonal", "adaptability", "flexibility",
        "critical thinking", "decision making", "conflict resolution",
        "presentation", "public speaking", "writing", "verbal",
    ),
    "certifications": (
        "pmp", "cpa", "cfa", "series 7", "series 63", "aws certified", "azure certified",
        "google certified", "cisco", "ccna", "comptia", "a+", "security+", "network+",
        "six sigma", "lean manufacturing", "itil", "scrum master", "csm",
    ),
    "retail_service": (
        "cash handling", "cash register", "pos", "point of sale", "inventory",
        "merchandising", "stocking", "sales",
        "food handling", "food safety", "servsafe", "food service",
        "phone support", "email support", "chat support", "data entry", "typing",
    ),
}

_REQUIREMENT_PHRASE = re.compile(
    r"(?:required|must have|experience with|proficient in|knowledge of)\s*:?\s*([^.;,\n]+)",
    re.IGNORECASE,
)
_YEARS_EXPERIENCE = re.compile(
    r"\b(\d{1,2})\s*\+?\s*(?:-\s*\d{1,2}\s*)?years?\s+(?:of\s+)?(?:[a-z-]+\s+)?experience",
    re.IGNORECASE,
)
_PHRASE_SPLIT = re.compile(r"[,/&]|\band\b|\bor\b")

SKILL_VARIATIONS: dict[str, tuple[str, ...]] = {
    "javascript": ("js", "ecmascript"),
    "typescript": ("ts",),
    "python": ("py",),
    "golang": ("go",),
    "customer service": ("customer support", "client service", "client support"),
    "microsoft office": ("ms office", "office suite", "microsoft word", "excel", "powerpoint"),
    "excel": ("spreadsheets", "google sheets"),
    "communication": ("verbal", "written", "interpersonal"),
    "problem solving": ("problem-solving", "analytical"),
    "time management": ("organizational", "organization"),
}

RELATED_SKILLS: dict[str, tuple[str, ...]] = {
    "customer service": ("retail", "sales", "hospitality", "support"),
    "communication": ("presentation", "writing", "public speaking"),
    "excel": ("google sheets", "spreadsheets", "data analysis"),
    "leadership": ("management", "team lead", "supervisor"),
    "problem solving": ("analytical", "troubleshooting", "debugging"),
    "sql": ("mysql", "postgresql", "database"),
    "inventory": ("stocking", "warehouse", "shipping"),
}

QUICKLY_LEARNABLE: tuple[str, ...] = (
    "google sheets", "google docs", "google slides",
    "zoom", "slack", "microsoft teams", "trello", "asana",
    "basic excel", "data entry", "typing",
    "communication", "customer service basics",
)


def contains_term(text: str, term: str) -> bool:
    """Case-insensitive *term* in *text*, not embedded inside a longer word."""
    if not term:
        return False
    return re.search(rf"(?<![a-z0-9]){re.escape(term.lower())}(?![a-z0-9])", text.lower()) is not None


def _job_text(job: JobPosting) -> str:
    return f"{job.field_text('title')} {job.field_text('description')} {job.field_text('requirements')}".lower()


def extract_requirements(job: JobPosting) -> list[str]:
    """Skills a posting asks for, in catalog order then phrase order."""
    text = _job_text(job)
    found: dict[str, None] = {}

    for category in SKILL_KEYWORDS.values():
        for skill in category:
            if contains_term(text, skill):
                found.setdefault(skill)

    for match in _REQUIREMENT_PHRASE.finditer(text):
        for part in _PHRASE_SPLIT.split(match.group(1)):
            skill = part.strip().lower()
            if 2 < len(skill) < 30:
                found.setdefault(skill)

    return list(found)


def required_experience_years(job: JobPosting) -> int | None:
    """Largest "N+ years of experience" figure in the posting."""
    years = [int(m.group(1)) for m in _YEARS_EXPERIENCE.finditer(_job_text(job))]
    return max(years) if years else None


def _skill_matches(requirement: str, user_skill: str) -> bool:
    if user_skill == requirement:
        return True
    if contains_term(requirement, user_skill) or contains_term(user_skill, requirement):
        return True
    return any(
        contains_term(user_skill, v) or contains_term(v, user_skill)
        for v in SKILL_VARIATIONS.get(requirement, ())
    )


def match_skills(
    requirements: Iterable[str],
    user_skills: Iterable[str],
    *,
    experience_years: int | None = None,
    required_years: int | None = None,
    config: ScoringConfig | None = None,
) -> QualificationMatch:
    config = config or DEFAULT_SCORING
    reqs = list(dict.fromkeys(r.lower().strip() for r in requirements if r and r.strip()))
    skills = [s.lower().strip() for s in user_skills if s and s.strip()]

    gap = None
    if experience_years is not None and required_years is not None:
        gap = max(0, required_years - experience_years)

    if not reqs:
        # Nothing to compare against: assume a good match
        return QualificationMatch(
            match_percentage=config.default_match_percentage,
            matched_skills=[],
            missing_skills=[],
            experience_gap=gap,
            total_required=0,
            total_matched=0,
        )

    matched: list[str] = []
    missing: list[str] = []
    for req in reqs:
        if any(_skill_matches(req, skill) for skill in skills):
            matched.append(req)
        else:
            missing.append(req)

    return QualificationMatch(
        match_percentage=round(len(matched) / len(reqs) * 100),
        matched_skills=matched,
        missing_skills=missing[:5],
        experience_gap=gap,
        total_required=len(reqs),
        total_matched=len(matched),
    )


def find_related_skill(missing: str, user_skills: Iterable[str]) -> str | None:
    """A skill the user already has that can be reframed as *missing*."""
    related = RELATED_SKILLS.get(missing.lower(), ())
    for skill in user_skills:
        low = skill.lower()
        if any(term in low for term in related):
            return skill
    return None


def is_quickly_learnable(skill: str) -> bool:
    low = skill.lower()
    return any(s in low for s in QUICKLY_LEARNABLE)
