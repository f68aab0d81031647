"""Scam detection rules.

Each rule inspects one aspect of a posting and yields at most one flag.
Pattern rules scan the combined free text; check rules look at structured
fields. A rule whose input is missing does not fire.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, NamedTuple
from urllib.parse import urlparse

from jobshield.models import DEFAULT_SCORING, JobPosting, ScamFlag, ScoringConfig, Severity, parse_salary
from jobshield.salary import get_median_salary

_SCAN_FIELDS: tuple[str, ...] = ("title", "company", "description", "requirements", "location_address")

WEBMAIL_PROVIDERS: frozenset[str] = frozenset({
    "gmail", "yahoo", "hotmail", "outlook", "aol", "mail", "icloud",
    "protonmail", "live", "msn", "ymail", "gmx",
})

# Providers distinctive enough that a near-miss spelling is imitating them
_LOOKALIKE_TARGETS: tuple[str, ...] = ("gmail", "yahoo", "hotmail", "outlook", "icloud", "protonmail")
_COMMON_TYPOS: frozenset[str] = frozenset({
    "gmial", "gmai", "gamil", "gmaill", "gnail", "yahooo", "yaho", "yahho",
    "hotmial", "hotmai", "hotmall", "outlok", "outllook",
})
_NOT_LOOKALIKES: frozenset[str] = frozenset({"email"})
_MAX_LOOKALIKE_TAG = 5
# Brand plus one of these is the brand's own corporate domain (yahooinc.com)
_CORPORATE_TAGS: frozenset[str] = frozenset({"inc", "corp", "co", "llc", "ltd", "group"})
_SECOND_LEVEL_SUFFIXES: frozenset[str] = frozenset({"co", "com", "org", "net", "ac", "gov", "edu"})

_SUSPICIOUS_TLDS: frozenset[str] = frozenset({"xyz", "top", "work", "click", "link", "icu", "buzz"})
_URL_SHORTENERS: frozenset[str] = frozenset({
    "bit.ly", "tinyurl.com", "t.co", "goo.gl", "ow.ly", "is.gd", "rb.gy", "cutt.ly",
})

_GENERIC_COMPANY_NAMES: frozenset[str] = frozenset({
    "company", "corporation", "inc", "llc", "business", "enterprise", "group",
})
_UNDISCLOSED_COMPANY_NAMES: frozenset[str] = frozenset({
    "confidential", "undisclosed", "private", "unknown", "n/a", "na", "tbd",
    "none", "-", "hiring company",
})


class Hit(NamedTuple):
    matched: str | bool
    severity: Severity | None = None


@dataclass(frozen=True)
class Rule:
    id: str
    name: str
    description: str
    severity: Severity
    pattern: re.Pattern[str] | None = None
    check: Callable[[JobPosting, ScoringConfig], Hit | None] | None = None

    def __call__(
        self,
        job: JobPosting,
        config: ScoringConfig = DEFAULT_SCORING,
        text: str | None = None,
    ) -> ScamFlag | None:
        if self.pattern is not None:
            match = self.pattern.search(scan_text(job) if text is None else text)
            hit = Hit(match.group(0)) if match else None
        else:
            hit = self.check(job, config)
        if hit is None:
            return None
        return ScamFlag(
            id=self.id,
            rule=self.name,
            severity=hit.severity or self.severity,
            matched=hit.matched,
            description=self.description,
        )


def scan_text(job: JobPosting) -> str:
    """Free-text fields joined for pattern matching."""
    return " ".join(job.field_text(name) for name in _SCAN_FIELDS)


def _pattern(*alternatives: str) -> re.Pattern[str]:
    return re.compile("|".join(alternatives), re.IGNORECASE)


def email_domain(email: str) -> str:
    if "@" not in email:
        return ""
    return email.rsplit("@", 1)[1].strip().strip(">").lower()


def url_host(url: str) -> str:
    url = url.strip()
    if not url:
        return ""
    if "://" not in url:
        url = "http://" + url
    try:
        host = urlparse(url).hostname or ""
    except ValueError:
        return ""
    return host[4:] if host.startswith("www.") else host


def same_organization(domain: str, host: str) -> bool:
    """True when an email domain and a website host belong to the same site."""
    if not domain or not host:
        return False
    return domain == host or domain.endswith("." + host) or host.endswith("." + domain)


def _word_count(text: str) -> int:
    return len(text.split())


def _site_label(domain: str) -> str:
    """The label naming the site: ``acme`` for both mail.acme.com and acme.co.uk."""
    labels = domain.split(".")
    if len(labels) < 2:
        return labels[0]
    if len(labels) >= 3 and len(labels[-1]) == 2 and labels[-2] in _SECOND_LEVEL_SUFFIXES:
        return labels[-3]
    return labels[-2]


def _edit_distance(a: str, b: str) -> int:
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, 1):
        current = [i]
        for j, cb in enumerate(b, 1):
            current.append(min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + (ca != cb)))
        previous = current
    return previous[-1]


def _is_webmail(domain: str) -> bool:
    return _site_label(domain) in WEBMAIL_PROVIDERS


def _is_lookalike(domain: str) -> bool:
    label = _site_label(domain)
    if label in WEBMAIL_PROVIDERS or label in _NOT_LOOKALIKES:
        return False
    if label in _COMMON_TYPOS:
        return True
    for target in _LOOKALIKE_TARGETS:
        # provider name plus a short tag, e.g. gmail-hr, gmailtypo
        if label.startswith(target):
            tag = label[len(target):].strip("-_")
            if tag and len(tag) <= _MAX_LOOKALIKE_TAG and tag not in _CORPORATE_TAGS:
                return True
        # near-miss spelling of the provider
        if len(label) >= len(target) and _edit_distance(label, target) <= (1 if len(target) <= 6 else 2):
            return True
    return False


# ── Check rules ──────────────────────────────────────────────────────────


def _check_unrealistic_salary(job: JobPosting, config: ScoringConfig) -> Hit | None:
    title = job.field_text("title")
    bounds = [b for b in (parse_salary(job.salary_min), parse_salary(job.salary_max)) if b]
    if not title or not bounds:
        return None
    offered = sum(bounds) / len(bounds)
    median = get_median_salary(title)
    ratio = offered / median
    if ratio > config.salary_high_multiple:
        severity: Severity = "high"
    elif ratio > config.salary_medium_multiple:
        severity = "medium"
    else:
        return None
    return Hit(f"${offered:,.0f} offered vs ${median:,} median ({ratio:.1f}x)", severity)


def _check_lookalike_email(job: JobPosting, config: ScoringConfig) -> Hit | None:
    domain = email_domain(job.field_text("contact_email"))
    if not domain or not _is_lookalike(domain):
        return None
    if same_organization(domain, url_host(job.field_text("company_website"))):
        return None
    return Hit(domain)


def _check_personal_email(job: JobPosting, config: ScoringConfig) -> Hit | None:
    domain = email_domain(job.field_text("contact_email"))
    if not domain or not _is_webmail(domain):
        return None
    if same_organization(domain, url_host(job.field_text("company_website"))):
        return None
    return Hit(domain)


def _check_email_domain_mismatch(job: JobPosting, config: ScoringConfig) -> Hit | None:
    domain = email_domain(job.field_text("contact_email"))
    host = url_host(job.field_text("company_website"))
    if not domain or not host:
        return None
    # webmail and lookalike domains have their own rules
    if _is_webmail(domain) or _is_lookalike(domain):
        return None
    if same_organization(domain, host):
        return None
    return Hit(f"{domain} vs {host}")


def _check_missing_company_website(job: JobPosting, config: ScoringConfig) -> Hit | None:
    if not job.field_text("company") or job.field_text("company_website"):
        return None
    if not (job.field_text("contact_email") or job.field_text("apply_url")):
        return None
    return Hit(True)


def _check_suspicious_url(job: JobPosting, config: ScoringConfig) -> Hit | None:
    url = job.field_text("apply_url")
    host = url_host(url)
    if not host:
        return None
    tld = host.rsplit(".", 1)[-1]
    if (
        tld in _SUSPICIOUS_TLDS
        or host in _URL_SHORTENERS
        or re.fullmatch(r"[\d.]+", host)
        or re.search(r"\d{5,}", host)
    ):
        return Hit(url)
    return None


def _check_undisclosed_company(job: JobPosting, config: ScoringConfig) -> Hit | None:
    company = job.field_text("company")
    if not company:
        return None
    if len(company) < 2 or company.lower() in _UNDISCLOSED_COMPANY_NAMES:
        return Hit(company)
    return None


def _check_vague_company_name(job: JobPosting, config: ScoringConfig) -> Hit | None:
    company = job.field_text("company").lower().rstrip(".")
    if company in _GENERIC_COMPANY_NAMES:
        return Hit(job.field_text("company"))
    return None


def _check_vague_description(job: JobPosting, config: ScoringConfig) -> Hit | None:
    description = job.field_text("description")
    if not description:
        return None
    words = _word_count(description)
    if words < config.very_vague_description_words:
        return Hit(f"{words} words", "medium")
    if words < config.vague_description_words:
        return Hit(f"{words} words", "low")
    return None


_URGENCY = _pattern(
    r"\b(?:urgent(?:ly)?|immediately|right away|asap|start today|hiring now|immediate start)\b",
    r"\blimited (?:spots|positions|openings|seats)\b",
    r"\bact now\b",
    r"\bspots? (?:are )?filling fast\b",
)


def _check_urgency(job: JobPosting, config: ScoringConfig) -> Hit | None:
    match = _URGENCY.search(scan_text(job))
    if not match:
        return None
    words = _word_count(job.field_text("description"))
    vague = 0 < words < config.vague_description_words
    return Hit(match.group(0), "medium" if vague else "low")


def _check_brief_requirements(job: JobPosting, config: ScoringConfig) -> Hit | None:
    requirements = job.field_text("requirements")
    if requirements and len(requirements) < config.min_requirements_chars:
        return Hit(requirements)
    return None


# ── Rule set ─────────────────────────────────────────────────────────────

CRITICAL_RULES: tuple[Rule, ...] = (
    Rule(
        id="upfront_payment",
        name="Upfront payment",
        description="Requests upfront payment or fees",
        severity="critical",
        pattern=_pattern(
            r"\b(?:pay|send|wire|transfer|deposit)\b.{0,30}?\b(?:fees?|money|upfront|advance)\b",
            r"\b(?:processing|registration|application|enrollment|starter|onboarding|equipment|kit)\s+fees?\b",
            r"\bbackground[- ]check\s+fees?\b",
            r"\bfees?\b.{0,30}?\b(?:before|prior to)\b.{0,20}?"
            r"\b(?:training|starting|start|hire|hiring|interview|orientation|employment)\b",
            r"\b(?:buy|purchase)\b.{0,30}?\b(?:equipment|starter kit|kit|software|supplies|gift cards?)\b"
            r".{0,40}?\b(?:reimburs\w*|before|upfront|own money)",
        ),
    ),
    Rule(
        id="check_cashing",
        name="Check cashing",
        description="Involves check cashing scheme",
        severity="critical",
        pattern=_pattern(
            r"\b(?:cash|deposit)(?:ing)?\s+(?:a |the |our |these |company )?(?:checks?|cheques?|money orders?)\b",
            r"\b(?:checks?|cheques?|money orders?)\b.{0,30}?\b(?:into|to) your (?:personal )?(?:bank )?account\b",
        ),
    ),
    Rule(
        id="cryptocurrency_payment",
        name="Cryptocurrency payment",
        description="Payment in cryptocurrency",
        severity="critical",
        pattern=_pattern(
            r"\b(?:pay|paid|payment|salary|compensation)\b.{0,30}?"
            r"\b(?:bitcoin|crypto(?:currency)?|btc|ethereum|usdt)\b",
        ),
    ),
    Rule(
        id="money_transfer_service",
        name="Money transfer service",
        description="Uses money transfer services",
        severity="critical",
        pattern=_pattern(r"\b(?:western union|moneygram|wire transfers?|money transfers?)\b"),
    ),
    Rule(
        id="bank_account_request",
        name="Bank details request",
        description="Requests bank account details upfront",
        severity="critical",
        pattern=_pattern(
            r"\b(?:your bank account|bank (?:account )?details|routing number|account number)\b"
            r".{0,30}?\b(?:send|provide|share|submit)\b",
            r"\b(?:send|provide|share|submit)\b.{0,20}?\b(?:your bank account|bank (?:account )?details|routing number)\b"
            r".{0,20}?\b(?:before|to apply|upfront|with your application)\b",
        ),
    ),
    Rule(
        id="reshipping_scam",
        name="Reshipping",
        description="Reshipping/package forwarding scam",
        severity="critical",
        pattern=_pattern(
            r"\b(?:re-?ship(?:ping)?|forward(?:ing)? packages|receiv(?:e|ing) packages)\b"
            r".{0,30}?\b(?:home|address|residence)\b",
        ),
    ),
    Rule(
        id="mlm_pyramid",
        name="MLM / pyramid scheme",
        description="Multi-level marketing or pyramid scheme",
        severity="critical",
        pattern=_pattern(r"\b(?:multi[- ]?level marketing|mlm|network marketing|pyramid|downline|upline)\b"),
    ),
    Rule(
        id="personal_info_upfront",
        name="Sensitive info upfront",
        description="Requests sensitive personal info before interview",
        severity="critical",
        pattern=_pattern(
            r"\b(?:ssn|social security(?: number)?|passport|driver'?s? licen[cs]e)\b"
            r".{0,30}?\b(?:before|upfront|to apply)\b",
        ),
    ),
)

HIGH_RULES: tuple[Rule, ...] = (
    Rule(
        id="unrealistic_salary",
        name="Unrealistic salary",
        description="Salary significantly above market rate for this role",
        severity="high",
        check=_check_unrealistic_salary,
    ),
    Rule(
        id="lookalike_email_domain",
        name="Look-alike email domain",
        description="Contact email domain imitates a well-known email provider",
        severity="high",
        check=_check_lookalike_email,
    ),
    Rule(
        id="work_from_home_emphasis",
        name="Work-from-home emphasis",
        description="Heavy emphasis on work-from-home opportunity",
        severity="high",
        pattern=_pattern(
            r"\b(?:work from home|earn from home|make money from home|home[- ]?based (?:opportunity|business))\b",
        ),
    ),
    Rule(
        id="too_good_to_be_true",
        name="Too good to be true",
        description="Claims that sound too good to be true",
        severity="high",
        pattern=_pattern(
            r"\bunlimited (?:earning|earnings|income)\b",
            r"\b(?:easy money|get rich|quick cash)\b",
        ),
    ),
    Rule(
        id="guaranteed_income",
        name="Guaranteed income",
        description="Unrealistic income guarantees",
        severity="high",
        pattern=_pattern(
            r"\bguaranteed\b.{0,20}?\b(?:income|salary|pay|earnings)\b",
            r"\bmake \$[\d,]{3,}.{0,10}?\b(?:day|week|hour)\b",
        ),
    ),
    Rule(
        id="interview_fee",
        name="Interview or training fee",
        description="Mentions fees for interview or training",
        severity="high",
        pattern=_pattern(
            r"\b(?:interview|training|orientation|certification)\b.{0,30}?\b(?:fees?|charges?)\b",
            r"\bpay(?:ing)? for (?:your |the )?(?:own )?(?:interview|training|orientation|certification)\b",
        ),
    ),
)

MEDIUM_RULES: tuple[Rule, ...] = (
    Rule(
        id="personal_email",
        name="Personal email",
        description="Uses personal email domain instead of company email",
        severity="medium",
        check=_check_personal_email,
    ),
    Rule(
        id="email_domain_mismatch",
        name="Email domain mismatch",
        description="Contact email domain does not match the company website",
        severity="medium",
        check=_check_email_domain_mismatch,
    ),
    Rule(
        id="missing_company_website",
        name="No company website",
        description="No company website to verify the employer",
        severity="medium",
        check=_check_missing_company_website,
    ),
    Rule(
        id="suspicious_url",
        name="Suspicious URL",
        description="Suspicious application URL",
        severity="medium",
        check=_check_suspicious_url,
    ),
    Rule(
        id="undisclosed_company",
        name="Undisclosed company",
        description="Company name is withheld or a placeholder",
        severity="medium",
        check=_check_undisclosed_company,
    ),
    Rule(
        id="vague_company_name",
        name="Vague company name",
        description="Generic or vague company name",
        severity="medium",
        check=_check_vague_company_name,
    ),
    Rule(
        id="po_box_address",
        name="P.O. Box address",
        description="Uses P.O. Box instead of physical address",
        severity="medium",
        pattern=_pattern(r"\bp\.?\s?o\.?\s*box\b"),
    ),
    Rule(
        id="contact_before_apply",
        name="Contact before applying",
        description="Requests contact via messaging app before applying",
        severity="medium",
        pattern=_pattern(
            r"\b(?:text|call|whatsapp|telegram)\b.{0,30}?\b(?:before applying|to apply|for more info(?:rmation)?)\b",
        ),
    ),
    Rule(
        id="commission_only",
        name="Commission only",
        description="Commission-only compensation",
        severity="medium",
        pattern=_pattern(r"\bcommission[- ]?only\b", r"\b100%\s?commission\b", r"\bno base (?:salary|pay)\b"),
    ),
    Rule(
        id="personal_vehicle_required",
        name="Personal vehicle required",
        description="Requires personal vehicle (common in delivery scams)",
        severity="medium",
        pattern=_pattern(
            r"\b(?:must have|need|requires?|required)\b.{0,20}?\b(?:your own|personal|reliable)\b"
            r".{0,10}?\b(?:car|vehicle|automobile)\b",
        ),
    ),
)

GRADED_RULES: tuple[Rule, ...] = (
    Rule(
        id="vague_description",
        name="Vague description",
        description="Very vague job description",
        severity="low",
        check=_check_vague_description,
    ),
    Rule(
        id="urgency_language",
        name="Urgency language",
        description="Uses high-urgency language",
        severity="low",
        check=_check_urgency,
    ),
    Rule(
        id="brief_requirements",
        name="Brief requirements",
        description="Very brief job requirements",
        severity="low",
        check=_check_brief_requirements,
    ),
)

RULES: tuple[Rule, ...] = CRITICAL_RULES + HIGH_RULES + MEDIUM_RULES + GRADED_RULES
