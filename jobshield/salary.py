"""Median annual salaries (USD) by job-title keyword."""
from __future__ import annotations

from types import MappingProxyType

# Declaration order is the match priority: "software engineer" resolves to
# "software", not "engineer".
MEDIAN_SALARIES = MappingProxyType({
    "customer service": 35000,
    "retail": 30000,
    "warehouse": 38000,
    "administrative": 42000,
    "receptionist": 35000,
    "data entry": 38000,
    "sales": 50000,
    "marketing": 55000,
    "accounting": 60000,
    "software": 95000,
    "developer": 90000,
    "engineer": 85000,
    "manager": 70000,
    "director": 100000,
    "executive": 150000,
    "nurse": 75000,
    "medical": 65000,
    "teacher": 50000,
})

DEFAULT_MEDIAN_SALARY = 45000


def match_salary_keyword(title: str | None) -> str | None:
    """First table keyword contained in *title*, or None."""
    lower_title = (title or "").lower()
    for keyword in MEDIAN_SALARIES:
        if keyword in lower_title:
            return keyword
    return None


def get_median_salary(title: str | None) -> int:
    keyword = match_salary_keyword(title)
    if keyword is None:
        return DEFAULT_MEDIAN_SALARY
    return MEDIAN_SALARIES[keyword]
