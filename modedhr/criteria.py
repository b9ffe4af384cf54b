"""Admission criteria for faculties, departments and admission rounds."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import ClassVar

from modedhr.recruit_models import Applicant

logger = logging.getLogger(__name__)


class ThresholdCriteria:
    """Satisfied when every listed applicant score reaches its minimum."""

    minimums: ClassVar[Mapping[str, float]] = {}

    def is_satisfied_by(self, applicant: Applicant) -> bool:
        """Return True if the applicant meets every minimum score."""
        return all(
            getattr(applicant, name) >= minimum for name, minimum in self.minimums.items()
        )


class ChemistryCriteria(ThresholdCriteria):
    """Entry requirements of the chemistry department."""

    minimums = {"gpax": 2.5, "tgat1": 50.0, "tgat2": 50.0, "tgat3": 40.0, "tpat3": 45.0}


class ComputerEngineeringCriteria(ThresholdCriteria):
    """Entry requirements of the computer engineering department."""

    minimums = {"gpax": 3.0, "tgat1": 60.0, "tgat2": 60.0, "tgat3": 60.0, "tpat3": 70.0}


class FinanceCriteria(ThresholdCriteria):
    """Entry requirements of the finance department."""

    minimums = {"gpax": 2.5, "tgat1": 55.0, "tgat2": 45.0, "tgat3": 40.0, "tpat3": 40.0}


class InteriaCriteria(ThresholdCriteria):
    """Entry requirements of the interior architecture department."""

    minimums = {"gpax": 2.5, "tgat1": 50.0, "tgat2": 50.0, "tgat3": 50.0, "tpat4": 65.0}


class MarketingCriteria(ThresholdCriteria):
    """Entry requirements of the marketing department."""

    minimums = {"gpax": 3.0, "tgat1": 50.0, "tgat2": 40.0, "tgat3": 45.0, "tpat3": 50.0}


class MechanicalEngineeringCriteria(ThresholdCriteria):
    """Entry requirements of the mechanical engineering department."""

    minimums = {"gpax": 2.5, "tgat1": 50.0, "tgat2": 50.0, "tgat3": 50.0, "tpat3": 65.0}


class PhysicsCriteria(ThresholdCriteria):
    """Entry requirements of the physics department."""

    minimums = {"gpax": 2.5, "tgat1": 40.0, "tgat2": 55.0, "tgat3": 40.0, "tpat3": 50.0}


class UrbanCriteria(ThresholdCriteria):
    """Entry requirements of the urban design department."""

    minimums = {"gpax": 2.5, "tgat1": 40.0, "tgat2": 40.0, "tgat3": 40.0, "tpat4": 55.0}


class ArchitectureCriteria(ThresholdCriteria):
    """Entry requirements of the faculty of architecture."""

    minimums = {"gpax": 2.0, "tgat1": 40.0, "tgat2": 40.0, "tgat3": 40.0, "tpat4": 40.0}


class BusinessCriteria(ThresholdCriteria):
    """Entry requirements of the faculty of business."""

    minimums = {"gpax": 2.0, "tgat1": 30.0, "tgat2": 30.0, "tgat3": 30.0, "tpat3": 30.0}


class EngineeringCriteria(ThresholdCriteria):
    """Entry requirements of the faculty of engineering."""

    minimums = {"gpax": 2.5, "tgat1": 40.0, "tgat2": 40.0, "tgat3": 40.0, "tpat3": 50.0}


class ScienceCriteria(ThresholdCriteria):
    """Entry requirements of the faculty of science."""

    minimums = {"gpax": 2.0, "tgat1": 30.0, "tgat2": 30.0, "tgat3": 30.0, "tpat3": 30.0}


def _round_info(applicant: Applicant) -> dict[str, str] | None:
    try:
        return applicant.get_round_info()
    except ValueError as exc:
        logger.error("Error retrieving Round Information: %s", exc)
        return None


class AdmissionCriteria:
    """General admission round: an admission category requires a minimum GPAX."""

    MINIMUM_GPAX: ClassVar[float] = 3.0

    def is_satisfied_by(self, applicant: Applicant) -> bool:
        """Return True if the applicant qualifies for the admission round."""
        data = _round_info(applicant)
        if data is None:
            return False
        if not data.get("Admission Category", ""):
            return True
        return applicant.gpax >= self.MINIMUM_GPAX


class PortfolioCriteria:
    """Portfolio round: a portfolio URL and a GPAX of at least 3.0."""

    MINIMUM_GPAX: ClassVar[float] = 3.0

    def is_satisfied_by(self, applicant: Applicant) -> bool:
        """Return True if the applicant qualifies for the portfolio round."""
        data = _round_info(applicant)
        if data is None or not data.get("Portfolio URL", ""):
            return False
        return applicant.gpax >= self.MINIMUM_GPAX


class QuotaCriteria:
    """Quota round: a quota category, a minimum GPAX and minimum core grades."""

    MINIMUM_GPAX: ClassVar[float] = 3.0
    MINIMUM_GRADE: ClassVar[float] = 3.5

    def is_satisfied_by(self, applicant: Applicant) -> bool:
        """Return True if the applicant qualifies for the quota round."""
        data = _round_info(applicant)
        if data is None or not data.get("Quota Category", ""):
            return False
        if applicant.gpax < self.MINIMUM_GPAX:
            return False
        grades = (applicant.english_grade, applicant.math_grade, applicant.science_grade)
        return all(grade >= self.MINIMUM_GRADE for grade in grades)


class ScholarshipCriteria:
    """Scholarship round: a declared family income and a GPAX of at least 3.5."""

    MINIMUM_GPAX: ClassVar[float] = 3.5

    def is_satisfied_by(self, applicant: Applicant) -> bool:
        """Return True if the applicant qualifies for the scholarship round."""
        data = _round_info(applicant)
        if data is None or not data.get("Family Yearly Income", ""):
            return False
        return applicant.gpax >= self.MINIMUM_GPAX