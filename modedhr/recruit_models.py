"""Records of the student recruitment process."""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum


class ApplicationStatus(str, Enum):
    """Stage an application has reached."""

    PENDING = "Pending"
    INTERVIEW_STAGE = "Interview"
    EVALUATED = "Evaluated"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"
    CONFIRMED = "Confirmed"
    WITHDRAWN = "Withdrawn"
    STUDENT = "Student"


def _dump(data: Mapping[str, object]) -> str:
    return json.dumps(dict(data), sort_keys=True, separators=(",", ":"), allow_nan=False)


def _load_object(text: str) -> dict:
    value = json.loads(text)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"expected a JSON object, got {type(value).__name__}")
    return value


@dataclass(kw_only=True)
class Admin:
    """An administrator of the recruitment system."""

    admin_id: int = 0
    username: str = ""
    password: str = ""


@dataclass(kw_only=True)
class Applicant:
    """A person applying for admission, with grades and test scores."""

    applicant_id: int = 0
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    birth_date: date | None = None
    address: str = ""
    phone_number: str = ""
    gpax: float = 0.0
    high_school_program: str = ""
    tgat1: float = 0.0
    tgat2: float = 0.0
    tgat3: float = 0.0
    tpat1: float = 0.0
    tpat2: float = 0.0
    tpat3: float = 0.0
    tpat4: float = 0.0
    tpat5: float = 0.0
    applicant_round_information: str = ""
    portfolio_url: str = ""
    family_income: float = 0.0
    math_grade: float = 0.0
    science_grade: float = 0.0
    english_grade: float = 0.0

    def set_round_info(self, data: Mapping[str, str]) -> None:
        """Store round-specific answers as a JSON object."""
        self.applicant_round_information = _dump(data)

    def get_round_info(self) -> dict[str, str]:
        """Return the round-specific answers; raise ``ValueError`` if they are not valid."""
        data = _load_object(self.applicant_round_information)
        for key, value in data.items():
            if not isinstance(value, str):
                raise ValueError(f"round information value for {key!r} is not a string")
        return data


@dataclass(kw_only=True)
class ApplicationRound:
    """An admission round."""

    round_id: int = 0
    round_name: str = ""


@dataclass(kw_only=True)
class ApplicationReport:
    """An applicant's application to a faculty and department in a round."""

    application_report_id: int = 0
    applicant_id: int = 0
    applicant: Applicant | None = None
    application_rounds_id: int = 0
    application_round: ApplicationRound | None = None
    faculty_id: int = 0
    department_id: int = 0
    program: str | None = None
    application_statuses: ApplicationStatus | None = None


@dataclass(kw_only=True)
class Interview:
    """An interview of an applicant and its evaluation."""

    interview_id: int = 0
    instructor_id: int = 0
    application_report_id: int = 0
    application_report: ApplicationReport | None = None
    scheduled_appointment: datetime | None = None
    criteria_scores: str = ""
    total_score: float = 0.0
    evaluated_at: datetime | None = None
    interview_status: ApplicationStatus | None = None

    def set_criteria_scores(self, scores: Mapping[str, float]) -> None:
        """Store per-criterion scores as a JSON object."""
        self.criteria_scores = _dump(scores)

    def get_criteria_scores(self) -> dict[str, float]:
        """Return the per-criterion scores; raise ``ValueError`` if they are not valid."""
        data = _load_object(self.criteria_scores)
        result = {}
        for key, value in data.items():
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"score for {key!r} is not a number")
            if not math.isfinite(value):
                raise ValueError(f"score for {key!r} is not finite")
            result[key] = float(value)
        return result


@dataclass(kw_only=True)
class InterviewCriteria:
    """Passing score for interviews of a round, faculty and department."""

    interview_criteria_id: int = 0
    application_rounds_id: int = 0
    application_round: ApplicationRound | None = None
    faculty_id: int = 0
    department_id: int = 0
    passing_score: float = 0.0