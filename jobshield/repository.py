"""Storage port for job postings."""
from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Iterable

import yaml

from jobshield.log import get_logger
from jobshield.models import JobPosting

log = get_logger(__name__)


class JobRepository(ABC):
    @abstractmethod
    def get_by_id(self, job_id: str) -> JobPosting | None:
        pass

    @abstractmethod
    def get_by_external_id(self, external_id: str) -> JobPosting | None:
        pass

    @abstractmethod
    def all(self) -> list[JobPosting]:
        pass


class InMemoryJobRepository(JobRepository):
    def __init__(self, jobs: Iterable[JobPosting] = ()) -> None:
        self._jobs: list[JobPosting] = list(jobs)

    def get_by_id(self, job_id: str) -> JobPosting | None:
        return next((j for j in self._jobs if j.id == job_id), None)

    def get_by_external_id(self, external_id: str) -> JobPosting | None:
        return next((j for j in self._jobs if j.external_id == external_id), None)

    def all(self) -> list[JobPosting]:
        return list(self._jobs)


class FileJobRepository(InMemoryJobRepository):
    """Postings read once from a YAML or JSON file (a list, or ``{jobs: [...]}``)."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(JobPosting.from_dict(row) for row in self._load_rows())
        log.info("Loaded %d job posting(s) from %s", len(self._jobs), self.path.name)

    def _load_rows(self) -> list[dict[str, Any]]:
        with open(self.path, "r", encoding="utf-8") as f:
            if self.path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
        if isinstance(data, dict):
            data = data.get("jobs", [])
        if not isinstance(data, list):
            raise ValueError(f"{self.path.name}: expected a list of job postings")
        for i, row in enumerate(data):
            if not isinstance(row, dict):
                raise ValueError(f"{self.path.name}: entry {i} is not a mapping")
        return data
