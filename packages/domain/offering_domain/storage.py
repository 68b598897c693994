"""Submission storage.

SubmissionStore is the interface the rest of the system talks to.
InMemorySubmissionStore keeps submissions in a dict for the life of the
process; it offers no durability and no locking.
"""

import logging
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, List, Optional

from .errors import SubmissionNotFound
from .schemas import InvestmentSubmission, InvestmentSubmissionCreate

log = logging.getLogger(__name__)


class SubmissionStore(ABC):
    """Persistence interface for investment submissions."""

    @abstractmethod
    def create_submission(self, submission: InvestmentSubmissionCreate) -> InvestmentSubmission:
        """Store a submission, assigning its id and timestamp.

        Args:
            submission: Validated submission payload

        Returns:
            The stored submission
        """
        pass

    @abstractmethod
    def get_submission(self, submission_id: str) -> Optional[InvestmentSubmission]:
        """Return the submission with this id, or None if there is none."""
        pass

    @abstractmethod
    def list_submissions(self) -> List[InvestmentSubmission]:
        """Return all submissions in the order they were stored."""
        pass

    def require_submission(self, submission_id: str) -> InvestmentSubmission:
        """Like get_submission(), but raise if the id is unknown.

        Raises:
            SubmissionNotFound: If no submission has this id
        """
        submission = self.get_submission(submission_id)
        if submission is None:
            raise SubmissionNotFound(submission_id)
        return submission


class InMemorySubmissionStore(SubmissionStore):
    def __init__(self):
        self._submissions: Dict[str, InvestmentSubmission] = {}

    def create_submission(self, submission: InvestmentSubmissionCreate) -> InvestmentSubmission:
        stored = InvestmentSubmission(
            **submission.model_dump(),
            id=str(uuid.uuid4()),
            submitted_at=datetime.now(timezone.utc),
        )
        self._submissions[stored.id] = stored
        log.info(
            "stored submission id=%s type=%s amount=%s total_shares=%s",
            stored.id, stored.investor_type, stored.investment_amount, stored.total_shares,
        )
        return stored

    def get_submission(self, submission_id: str) -> Optional[InvestmentSubmission]:
        return self._submissions.get(submission_id)

    def list_submissions(self) -> List[InvestmentSubmission]:
        return list(self._submissions.values())

    def __len__(self) -> int:
        return len(self._submissions)
