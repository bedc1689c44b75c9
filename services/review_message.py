"""
Composes the explanation printed on in-review documents from the stored review reason.
Rules are checked top to bottom; the first keyword found in the reason wins.
"""
from __future__ import annotations

from services.exceptions import MissingReviewError

REVIEW_MESSAGE_LEAD_IN = "Your application has been placed in review"

# (keyword, clause), case-sensitive substring match
REVIEW_REASON_RULES: list[tuple[str, str]] = [
    ("address", "pending outstanding address verification for FICA purposes."),
    ("bank", "pending outstanding bank account verification."),
]
DEFAULT_REVIEW_CLAUSE = "because of suspicious account behaviour. Please contact support ASAP."


def compose_review_message(reason: str) -> str:
    if reason is None:
        raise MissingReviewError("Review reason is required to compose a review message")
    clause = next(
        (clause for keyword, clause in REVIEW_REASON_RULES if keyword in reason),
        DEFAULT_REVIEW_CLAUSE,
    )
    return f"{REVIEW_MESSAGE_LEAD_IN} {clause}"
