"""Error types raised by the offering domain."""


class OfferingError(Exception):
    """Base class for offering domain errors."""
    pass


class InvalidArgument(OfferingError, ValueError):
    """Raised when a calculation input is outside its domain (e.g., negative amount)."""
    pass


class MinimumInvestmentNotMet(InvalidArgument):
    """Raised when a selected amount is below the offering minimum."""

    def __init__(self, amount, minimum):
        super().__init__(f"minimum investment not met: {amount} < {minimum}")
        self.amount = amount
        self.minimum = minimum


class IncompleteFormError(OfferingError):
    """Raised when a submission is built before every form step is complete."""

    def __init__(self, missing_steps):
        self.missing_steps = tuple(missing_steps)
        steps = ", ".join(str(step) for step in self.missing_steps)
        super().__init__(f"Form steps not complete: {steps}")


class SubmissionNotFound(OfferingError, KeyError):
    """Raised when a submission id is not in the store."""

    def __init__(self, submission_id: str):
        super().__init__(submission_id)
        self.submission_id = submission_id

    def __str__(self) -> str:
        return f"Investment submission not found: {self.submission_id}"
