from __future__ import annotations

import os

os.environ.setdefault("LOG_TO_FILE", "false")

import pytest

from jobshield.models import JobPosting

WAREHOUSE_DESCRIPTION = (
    "Acme Logistics is hiring a Warehouse Associate for our distribution center. In this "
    "role you will receive inbound freight, verify shipments against packing lists, and "
    "report any damaged or missing items to the shift lead. You will pick, pack, and label "
    "customer orders using handheld scanners and our warehouse management system, keeping "
    "accuracy above ninety nine percent. Associates load and unload trailers, build stable "
    "pallets, and wrap outbound loads for carrier pickup. You will operate pallet jacks and, "
    "after certification, sit-down forklifts in a safe and careful manner. Each shift "
    "includes cycle counts, replenishing pick locations, and keeping aisles, docks, and work "
    "areas clean and organized. You will follow all safety procedures, wear the provided "
    "protective equipment, and take part in weekly safety meetings. The team works closely "
    "together, so clear communication with coworkers and supervisors is important. Shifts "
    "run Monday through Friday from six in the morning until two thirty in the afternoon, "
    "with occasional Saturday overtime during peak season. The position requires lifting up "
    "to fifty pounds, standing for long periods, and working in a warehouse that is not "
    "climate controlled. Benefits include medical, dental, and vision coverage, a retirement "
    "plan with company match, paid time off, and tuition assistance. Questions about the "
    "role can be sent to our recruiting team at jobs@acmelogistics.com."
)

OFFICE_DESCRIPTION = (
    "Valencia Services is looking for an Office Assistant to support a busy front office. "
    "You will greet visitors, schedule appointments for our advisors, keep client files up "
    "to date, order office supplies, and prepare weekly summaries for the office manager. "
    "The role is full time on site, Monday to Friday from eight to five, with a one hour "
    "lunch break and a small friendly team."
)


@pytest.fixture
def warehouse_job() -> JobPosting:
    return JobPosting(
        title="Warehouse Associate",
        company="Acme Logistics",
        company_website="https://acmelogistics.com",
        description=WAREHOUSE_DESCRIPTION,
        salary_min=36000,
        salary_max=40000,
        contact_email="jobs@acmelogistics.com",
    )


@pytest.fixture
def data_entry_scam() -> JobPosting:
    return JobPosting(
        title="Data Entry Clerk",
        salary_min=150000,
        salary_max=200000,
        contact_email="hr@gmailtypo.com",
    )


@pytest.fixture
def fee_scam() -> JobPosting:
    return JobPosting(
        title="Customer Service Representative",
        company="Bright Path Staffing",
        description="Work with customers by phone. A processing fee before training is required for all new hires.",
    )


@pytest.fixture
def office_job() -> JobPosting:
    return JobPosting(
        title="Office Assistant",
        company="Valencia Services",
        company_website="https://valenciaservices.com",
        description=OFFICE_DESCRIPTION,
        requirements="Required: Excel, data entry, customer service, QuickBooks",
        salary_min=38000,
        salary_max=42000,
        contact_email="hr@valenciaservices.com",
    )
