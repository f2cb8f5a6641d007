"""Application lifecycle statuses shared by the evaluator and the state machine."""

from __future__ import annotations

from enum import Enum


class ApplicationStatus(str, Enum):
    NOT_SUBMITTED = "NOT_SUBMITTED"
    PENDING = "PENDING"      # passed automatic checks, awaiting reviewer
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

