"""Shared logic for approving or rejecting a stored request."""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Protocol, TypeVar

from modedhr.hr_enums import Action, parse_action

_UNSIGNED = re.compile(r"[0-9]+", re.ASCII)
_MAX_ID = 2**32 - 1


class Reviewable(Protocol):
    """A request that can be approved or rejected."""

    def apply_status(self, action: Action, reason: str) -> None: ...


R = TypeVar("R", bound=Reviewable)


class ReviewError(Exception):
    """Raised when a request cannot be reviewed."""


def _parse_request_id(text: str) -> int:
    if not _UNSIGNED.fullmatch(text):
        raise ValueError(f"parsing {text!r}: invalid syntax")
    value = int(text)
    if value > _MAX_ID:
        raise ValueError(f"parsing {text!r}: value out of range")
    return value


def review_request(
    request_id: str,
    action: str,
    reason: str,
    fetch: Callable[[int], R],
    save: Callable[[R], object],
) -> R:
    """Fetch the request, apply the action, save it and return it."""
    try:
        ident = _parse_request_id(request_id)
    except ValueError as exc:
        raise ReviewError(f"invalid request ID: {exc}") from exc
    try:
        request = fetch(ident)
    except Exception as exc:
        raise ReviewError(f"failed to fetch request: {exc}") from exc
    try:
        parsed = parse_action(action)
    except ValueError as exc:
        raise ReviewError(f"invalid action: {exc}") from exc
    request.apply_status(parsed, reason)
    try:
        save(request)
    except Exception as exc:
        raise ReviewError(f"failed to save request: {exc}") from exc
    return request