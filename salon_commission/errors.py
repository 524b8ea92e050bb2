from __future__ import annotations


class CommissionError(Exception):
    """Base class for errors raised by the compensation engine."""


class InvalidHours(CommissionError, ValueError):
    pass


class MissingProfile(CommissionError, KeyError):
    def __init__(self, therapist_id: str) -> None:
        super().__init__(therapist_id)
        self.therapist_id = therapist_id

    def __str__(self) -> str:
        return f"No therapist profile found for {self.therapist_id}"


class InconsistentTransaction(CommissionError, ValueError):
    pass
