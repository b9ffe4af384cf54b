"""Leave, resignation and raise requests, their review and the factory that builds them."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Callable, Protocol, Union

from modedhr.hr_enums import Action

PENDING = "Pending"


class Role(Enum):
    """Who submits a request."""

    STUDENT = 0
    INSTRUCTOR = 1


class RequestType(Enum):
    """Kind of request."""

    LEAVE = 0
    RESIGNATION = 1
    RAISE = 2


@dataclass(kw_only=True)
class CreateRequestParams:
    """Input for :func:`create_request`."""

    id: str
    leave_type: str = ""
    reason: str = ""
    date_str: str = ""
    target_salary: float = 0.0


class _RequestStatus(Protocol):
    status: str
    reason: str


def _approve(request: _RequestStatus, _reason: str) -> None:
    request.status = "approve"


def _reject(request: _RequestStatus, reason: str) -> None:
    request.status = "reject"
    request.reason = reason


_ACTION_HANDLERS: dict[Action, Callable[[_RequestStatus, str], None]] = {
    Action.APPROVE: _approve,
    Action.REJECT: _reject,
}


def apply_status(request: _RequestStatus, action: Action, reason: str) -> None:
    """Set the status of ``request`` according to ``action``; a rejection also records the reason."""
    try:
        handler = _ACTION_HANDLERS[action]
    except (KeyError, TypeError):
        raise ValueError(f"invalid action: {action}") from None
    handler(request, reason)


@dataclass(kw_only=True)
class BaseLeaveRequest:
    """Fields shared by leave requests."""

    id: int | None = None
    status: str = PENDING
    leave_type: str = ""
    reason: str = ""
    leave_date: date | None = None

    def apply_status(self, action: Action, reason: str) -> None:
        """Approve or reject this request."""
        apply_status(self, action, reason)


@dataclass(kw_only=True)
class BaseStandardRequest:
    """Fields shared by resignation and raise requests."""

    id: int | None = None
    reason: str = ""
    status: str = PENDING

    def apply_status(self, action: Action, reason: str) -> None:
        """Approve or reject this request."""
        apply_status(self, action, reason)


@dataclass(kw_only=True)
class RequestLeaveStudent(BaseLeaveRequest):
    """A student's leave request."""

    student_code: str = ""


@dataclass(kw_only=True)
class RequestLeaveInstructor(BaseLeaveRequest):
    """An instructor's leave request."""

    instructor_code: str = ""


@dataclass(kw_only=True)
class RequestResignationStudent(BaseStandardRequest):
    """A student's resignation request."""

    student_code: str = ""


@dataclass(kw_only=True)
class RequestResignationInstructor(BaseStandardRequest):
    """An instructor's resignation request."""

    instructor_code: str = ""


@dataclass(kw_only=True)
class RequestRaiseInstructor(BaseStandardRequest):
    """An instructor's request for a salary raise."""

    instructor_code: str = ""
    target_salary: float = 0.0


Request = Union[
    RequestLeaveStudent,
    RequestLeaveInstructor,
    RequestResignationStudent,
    RequestResignationInstructor,
    RequestRaiseInstructor,
]

_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


def _parse_date(text: str, role_name: str) -> date:
    try:
        if not _DATE_PATTERN.fullmatch(text):
            raise ValueError("expected YYYY-MM-DD")
        return datetime.strptime(text, "%Y-%m-%d").date()
    except ValueError as exc:
        raise ValueError(
            f"invalid date format for {role_name} leave request ('{text}'): {exc}"
        ) from exc


def _check_leave_params(params: CreateRequestParams, role_name: str) -> date:
    if not (params.leave_type and params.reason and params.date_str):
        raise ValueError(
            f"missing parameters for {role_name} leave request "
            "(LeaveType, Reason, DateStr are required)"
        )
    return _parse_date(params.date_str, role_name)


def _student_leave(params: CreateRequestParams) -> Request:
    leave_date = _check_leave_params(params, "student")
    return RequestLeaveStudent(
        leave_type=params.leave_type,
        reason=params.reason,
        leave_date=leave_date,
        student_code=params.id,
    )


def _student_resignation(params: CreateRequestParams) -> Request:
    if not params.reason:
        raise ValueError("missing Reason parameter for student resignation request")
    return RequestResignationStudent(reason=params.reason, student_code=params.id)


def _instructor_leave(params: CreateRequestParams) -> Request:
    leave_date = _check_leave_params(params, "instructor")
    return RequestLeaveInstructor(
        leave_type=params.leave_type,
        reason=params.reason,
        leave_date=leave_date,
        instructor_code=params.id,
    )


def _instructor_resignation(params: CreateRequestParams) -> Request:
    if not params.reason:
        raise ValueError("missing Reason parameter for instructor resignation request")
    return RequestResignationInstructor(reason=params.reason, instructor_code=params.id)


def _instructor_raise(params: CreateRequestParams) -> Request:
    if not params.reason:
        raise ValueError("missing Reason parameter for instructor raise request")
    return RequestRaiseInstructor(
        reason=params.reason,
        instructor_code=params.id,
        target_salary=params.target_salary,
    )


# Combinations that are known but never allowed, with the reason given.
_FORBIDDEN: dict[tuple[Role, RequestType], str] = {
    (Role.STUDENT, RequestType.RAISE): "students cannot request a raise",
}

_CREATORS: dict[Role, dict[RequestType, Callable[[CreateRequestParams], Request]]] = {
    Role.STUDENT: {
        RequestType.LEAVE: _student_leave,
        RequestType.RESIGNATION: _student_resignation,
    },
    Role.INSTRUCTOR: {
        RequestType.LEAVE: _instructor_leave,
        RequestType.RESIGNATION: _instructor_resignation,
        RequestType.RAISE: _instructor_raise,
    },
}


def create_request(role: Role, request_type: RequestType, params: CreateRequestParams) -> Request:
    """Build the request of ``request_type`` submitted by someone in ``role``."""
    if not params.id:
        raise ValueError("ID parameter is required")
    creators = _CREATORS.get(role)
    if creators is None:
        raise ValueError(f"unknown role: {role}")
    forbidden = _FORBIDDEN.get((role, request_type))
    if forbidden is not None:
        raise ValueError(forbidden)
    creator = creators.get(request_type)
    if creator is None:
        raise ValueError(f"unknown request type '{request_type}' for role {role}")
    return creator(params)