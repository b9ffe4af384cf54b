"""Enumerations used by the HR records: academic and department positions and review actions."""

from __future__ import annotations

from enum import IntEnum


class AcademicPosition(IntEnum):
    """Academic rank of an instructor."""

    NONE = 0
    ASSISTANT_PROF = 1
    ASSOCIATE_PROF = 2
    PROFESSOR = 3


class DepartmentPosition(IntEnum):
    """Administrative position of an instructor inside a department."""

    NONE = 0
    HEAD = 1
    DEPUTY = 2
    SECRETARY = 3


class Action(IntEnum):
    """Decision taken when a request is reviewed."""

    APPROVE = 0
    REJECT = 1


_ACADEMIC_POSITIONS = {
    "assistant": AcademicPosition.ASSISTANT_PROF,
    "associate": AcademicPosition.ASSOCIATE_PROF,
    "professor": AcademicPosition.PROFESSOR,
    "none": AcademicPosition.NONE,
}

_DEPARTMENT_POSITIONS = {
    "head": DepartmentPosition.HEAD,
    "deputy": DepartmentPosition.DEPUTY,
    "secretary": DepartmentPosition.SECRETARY,
    "none": DepartmentPosition.NONE,
}

_ACTIONS = {
    "approve": Action.APPROVE,
    "reject": Action.REJECT,
}


def parse_academic_position(text: str) -> AcademicPosition:
    """Return the academic position named by ``text`` (case-insensitive)."""
    try:
        return _ACADEMIC_POSITIONS[text.lower()]
    except KeyError:
        raise ValueError(f"invalid academic position: {text}") from None


def parse_department_position(text: str) -> DepartmentPosition:
    """Return the department position named by ``text`` (case-insensitive)."""
    try:
        return _DEPARTMENT_POSITIONS[text.lower()]
    except KeyError:
        raise ValueError(f"invalid department position: {text}") from None


def parse_action(text: str) -> Action:
    """Return the review action named by ``text`` (case-insensitive)."""
    try:
        return _ACTIONS[text.lower()]
    except KeyError:
        raise ValueError(f"invalid action: {text}") from None