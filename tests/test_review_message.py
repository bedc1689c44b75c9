"""
Tests for the in-review explanation: keyword rules are checked in order and the first match wins.
Run from project root: python -m pytest tests/test_review_message.py -v
"""
import unittest

from services.exceptions import MissingReviewError
from services.review_message import (
    DEFAULT_REVIEW_CLAUSE,
    REVIEW_MESSAGE_LEAD_IN,
    compose_review_message,
)

ADDRESS_MESSAGE = (
    "Your application has been placed in review pending outstanding address verification for FICA purposes."
)
BANK_MESSAGE = "Your application has been placed in review pending outstanding bank account verification."
DEFAULT_MESSAGE = (
    "Your application has been placed in review because of suspicious account behaviour. "
    "Please contact support ASAP."
)


class TestComposeReviewMessage(unittest.TestCase):
    def test_address_reason(self):
        self.assertEqual(compose_review_message("flagged for address change"), ADDRESS_MESSAGE)

    def test_bank_reason(self):
        self.assertEqual(compose_review_message("bank mismatch"), BANK_MESSAGE)

    def test_unmatched_reason_falls_back_to_default(self):
        self.assertEqual(compose_review_message("unusual login pattern"), DEFAULT_MESSAGE)

    def test_empty_reason_falls_back_to_default(self):
        self.assertEqual(compose_review_message(""), DEFAULT_MESSAGE)

    def test_address_rule_wins_over_bank(self):
        """Both keywords present -> only the address clause, regardless of position in the text."""
        message = compose_review_message("bank statement shows a different address")
        self.assertEqual(message, ADDRESS_MESSAGE)
        self.assertNotIn("bank account", message)

    def test_matching_is_case_sensitive(self):
        self.assertEqual(compose_review_message("Address and Bank details"), DEFAULT_MESSAGE)

    def test_always_starts_with_lead_in(self):
        for reason in ("address", "bank", "other"):
            self.assertTrue(compose_review_message(reason).startswith(REVIEW_MESSAGE_LEAD_IN + " "))
        self.assertTrue(compose_review_message("other").endswith(DEFAULT_REVIEW_CLAUSE))

    def test_missing_reason_raises(self):
        with self.assertRaises(MissingReviewError):
            compose_review_message(None)


if __name__ == "__main__":
    unittest.main()
