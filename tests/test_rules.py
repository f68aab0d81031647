from __future__ import annotations

import pytest

from jobshield.models import JobPosting, ScoringConfig
from jobshield.rules import RULES, Rule, email_domain, same_organization, url_host

from tests.conftest import WAREHOUSE_DESCRIPTION


def _rule(rule_id: str) -> Rule:
    return next(r for r in RULES if r.id == rule_id)


def test_rule_ids_are_unique() -> None:
    ids = [r.id for r in RULES]
    assert len(ids) == len(set(ids))


def test_no_rule_fires_on_an_empty_posting() -> None:
    empty = JobPosting()
    assert [r.id for r in RULES if r(empty) is not None] == []


def test_no_rule_fires_on_legitimate_posting(warehouse_job: JobPosting) -> None:
    assert [r.id for r in RULES if r(warehouse_job) is not None] == []


@pytest.mark.parametrize(
    ("rule_id", "description"),
    [
        ("upfront_payment", "You must pay a $50 registration fee to get started."),
        ("upfront_payment", "A processing fee before training is required."),
        ("upfront_payment", "Send money for your starter kit."),
        ("check_cashing", "You will deposit the check into your account and keep 10%."),
        ("cryptocurrency_payment", "Your salary is paid weekly in Bitcoin."),
        ("money_transfer_service", "Forward the balance via Western Union."),
        ("bank_account_request", "Your bank account details: send them to our HR mailbox."),
        ("reshipping_scam", "Receive packages at your home and reship them overseas."),
        ("mlm_pyramid", "Recruit friends and build your downline."),
        ("personal_info_upfront", "Provide your SSN before the interview."),
        ("work_from_home_emphasis", "Make money from home in your spare time!"),
        ("too_good_to_be_true", "Unlimited earning potential and easy money."),
        ("guaranteed_income", "Guaranteed weekly income for every member."),
        ("guaranteed_income", "Make $500 a day!"),
        ("interview_fee", "There is a small training fee of $99."),
        ("contact_before_apply", "Text 555-0100 to apply."),
        ("commission_only", "This is a 100% commission role."),
        ("personal_vehicle_required", "You must have your own car."),
    ],
)
def test_pattern_rules_fire(rule_id: str, description: str) -> None:
    flag = _rule(rule_id)(JobPosting(description=description))
    assert flag is not None
    assert flag.id == rule_id
    assert isinstance(flag.matched, str) and flag.matched


@pytest.mark.parametrize(
    ("rule_id", "description"),
    [
        ("upfront_payment", "Competitive pay and opportunities for advancement."),
        ("check_cashing", "Accept cash, checks and cards at the register."),
        ("mlm_pyramid", "Work in our multi-level warehouse with modern racking."),
        ("interview_fee", "Paid training with no cost to you."),
        ("personal_vehicle_required", "Must have reliable transportation to the site."),
    ],
)
def test_pattern_rules_ignore_benign_wording(rule_id: str, description: str) -> None:
    assert _rule(rule_id)(JobPosting(description=description)) is None


def test_critical_rules_have_critical_severity() -> None:
    flag = _rule("upfront_payment")(JobPosting(description="Pay the application fee today."))
    assert flag is not None
    assert flag.severity == "critical"
    assert flag.description == "Requests upfront payment or fees"
    assert flag.rule == "Upfront payment"


def test_pattern_rules_scan_location_and_title() -> None:
    flag = _rule("po_box_address")(JobPosting(location_address="P.O. Box 42, Springfield"))
    assert flag is not None
    assert flag.severity == "medium"


def test_unrealistic_salary_grades_by_multiple() -> None:
    rule = _rule("unrealistic_salary")
    high = rule(JobPosting(title="Data Entry Clerk", salary_min=150000, salary_max=200000))
    assert high is not None and high.severity == "high"
    assert "38,000" in high.matched

    medium = rule(JobPosting(title="Data Entry Clerk", salary_min=75000, salary_max=85000))
    assert medium is not None and medium.severity == "medium"

    assert rule(JobPosting(title="Data Entry Clerk", salary_min=36000, salary_max=40000)) is None


def test_unrealistic_salary_uses_single_bound_when_only_one_is_listed() -> None:
    flag = _rule("unrealistic_salary")(JobPosting(title="Retail Associate", salary_max=500000))
    assert flag is not None and flag.severity == "high"


def test_unrealistic_salary_needs_title_and_salary() -> None:
    rule = _rule("unrealistic_salary")
    assert rule(JobPosting(salary_min=900000, salary_max=1000000)) is None
    assert rule(JobPosting(title="Data Entry Clerk")) is None
    assert rule(JobPosting(title="Data Entry Clerk", salary_max=0)) is None


def test_salary_thresholds_come_from_config() -> None:
    strict = ScoringConfig(salary_high_multiple=1.5, salary_medium_multiple=1.2)
    job = JobPosting(title="Warehouse Associate", salary_min=60000, salary_max=64000)
    assert _rule("unrealistic_salary")(job) is None
    flag = _rule("unrealistic_salary")(job, strict)
    assert flag is not None and flag.severity == "high"


def test_lookalike_email_domain() -> None:
    rule = _rule("lookalike_email_domain")
    flag = rule(JobPosting(contact_email="hr@gmailtypo.com"))
    assert flag is not None
    assert flag.severity == "high"
    assert flag.matched == "gmailtypo.com"
    assert rule(JobPosting(contact_email="hr@gmial.com")) is not None
    assert rule(JobPosting(contact_email="hr@gmail.com")) is None
    assert rule(JobPosting(contact_email="hr@acme.com")) is None


@pytest.mark.parametrize("domain", ["gmail-hr.com", "gmai1.com", "hotmaill.net", "yahoo-hr.co.uk"])
def test_lookalike_near_misses(domain: str) -> None:
    assert _rule("lookalike_email_domain")(JobPosting(contact_email=f"hr@{domain}")) is not None


@pytest.mark.parametrize(
    "domain",
    ["yahooinc.com", "outlookcapital.com", "email.com", "icloudnine-studios.com", "yahoo.co.uk"],
)
def test_brand_in_employer_domain_is_not_a_lookalike(domain: str) -> None:
    assert _rule("lookalike_email_domain")(JobPosting(contact_email=f"recruiting@{domain}")) is None


def test_corporate_brand_domain_is_not_webmail_or_lookalike() -> None:
    job = JobPosting(
        title="Product Manager",
        company="Yahoo",
        contact_email="recruiting@yahooinc.com",
        description=WAREHOUSE_DESCRIPTION,
    )
    ids = {r.id for r in RULES if r(job)}
    assert "lookalike_email_domain" not in ids
    assert "personal_email" not in ids


def test_lookalike_domain_owned_by_the_company_is_not_flagged() -> None:
    job = JobPosting(contact_email="jobs@outlookcapital.com", company_website="https://outlookcapital.com")
    assert _rule("lookalike_email_domain")(job) is None


def test_personal_email() -> None:
    flag = _rule("personal_email")(JobPosting(contact_email="recruiter@yahoo.com"))
    assert flag is not None
    assert flag.severity == "medium"
    assert flag.matched == "yahoo.com"
    assert _rule("personal_email")(JobPosting(contact_email="recruiter@acme.com")) is None


def test_personal_email_judges_the_site_not_the_subdomain() -> None:
    rule = _rule("personal_email")
    assert rule(JobPosting(contact_email="jobs@mail.acmelogistics.com")) is None
    assert rule(JobPosting(contact_email="jobs@yahoo.co.uk")) is not None


def test_email_domain_mismatch() -> None:
    rule = _rule("email_domain_mismatch")
    mismatch = rule(JobPosting(contact_email="jobs@other-corp.com", company_website="https://acme.com"))
    assert mismatch is not None
    assert mismatch.matched == "other-corp.com vs acme.com"
    assert rule(JobPosting(contact_email="jobs@careers.acme.com", company_website="https://www.acme.com")) is None
    assert rule(JobPosting(contact_email="jobs@acme.com")) is None


def test_missing_company_website_needs_company_and_contact() -> None:
    rule = _rule("missing_company_website")
    assert rule(JobPosting(company="Acme", contact_email="jobs@acme.com")) is not None
    assert rule(JobPosting(company="Acme", apply_url="https://acme.com/apply")) is not None
    assert rule(JobPosting(company="Acme")) is None
    assert rule(JobPosting(contact_email="jobs@acme.com")) is None


@pytest.mark.parametrize(
    "url",
    ["https://apply-now.xyz/job", "https://bit.ly/3abcd", "http://192.168.4.20/apply", "https://jobs84213.example.com"],
)
def test_suspicious_url(url: str) -> None:
    flag = _rule("suspicious_url")(JobPosting(apply_url=url))
    assert flag is not None
    assert flag.matched == url


def test_normal_job_board_url_is_not_suspicious() -> None:
    assert _rule("suspicious_url")(JobPosting(apply_url="https://careers.acme.com/jobs/1234567")) is None


def test_company_name_rules() -> None:
    assert _rule("undisclosed_company")(JobPosting(company="Confidential")) is not None
    assert _rule("undisclosed_company")(JobPosting(company="X")) is not None
    assert _rule("vague_company_name")(JobPosting(company="LLC.")) is not None
    assert _rule("vague_company_name")(JobPosting(company="Acme LLC")) is None


def test_vague_description_grades_by_length() -> None:
    rule = _rule("vague_description")
    very_vague = rule(JobPosting(description="Great job, apply."))
    assert very_vague is not None and very_vague.severity == "medium"
    assert very_vague.matched == "3 words"

    short = rule(JobPosting(description=" ".join(["word"] * 30)))
    assert short is not None and short.severity == "low"

    assert rule(JobPosting(description=" ".join(["word"] * 50))) is None
    assert rule(JobPosting(description="   ")) is None


def test_urgency_is_medium_only_with_a_vague_description() -> None:
    rule = _rule("urgency_language")
    vague = rule(JobPosting(description="Hiring now! Start today."))
    assert vague is not None and vague.severity == "medium"

    detailed = rule(JobPosting(description=WAREHOUSE_DESCRIPTION, requirements="Able to start immediately"))
    assert detailed is not None and detailed.severity == "low"
    assert detailed.matched.lower() == "immediately"


def test_urgency_without_a_description_stays_low() -> None:
    flag = _rule("urgency_language")(JobPosting(title="Warehouse Associate - Hiring Now"))
    assert flag is not None
    assert flag.severity == "low"


def test_brief_requirements() -> None:
    rule = _rule("brief_requirements")
    flag = rule(JobPosting(requirements="Forklift"))
    assert flag is not None and flag.severity == "low"
    assert rule(JobPosting(requirements=["Forklift certification", "Lift 50 lbs"])) is None
    assert rule(JobPosting()) is None


def test_domain_helpers() -> None:
    assert email_domain("Jobs <HR@Acme.COM>") == "acme.com"
    assert email_domain("not-an-email") == ""
    assert url_host("www.acme.com/careers") == "acme.com"
    assert url_host("") == ""
    assert same_organization("mail.acme.com", "acme.com")
    assert not same_organization("acme.co", "acme.com")
