"""
View models handed to document templates, plus PDF layout options.
One view model shape per document kind; fields absent for a kind are never present on its model.
"""
from __future__ import annotations

import enum
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class DocumentKind(str, enum.Enum):
    # Values double as template registry keys
    PENDING = "PendingApplication"
    ACTIVATED = "ActivatedApplication"
    IN_REVIEW = "InReviewApplication"
    UNSUPPORTED = "Unsupported"


class FundSchema(BaseModel):
    name: str
    amount: Decimal
    fees: Decimal

    model_config = {"from_attributes": True}


class LegalEntitySchema(BaseModel):
    company_name: str
    registration_number: Optional[str] = None
    vat_number: Optional[str] = None

    model_config = {"from_attributes": True}


class ReviewSchema(BaseModel):
    reason: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class PendingApplicationViewModel(BaseModel):
    reference_number: str
    state: str
    full_name: str
    applied_on: date
    support_email: str
    signature: str


class ActivatedApplicationViewModel(PendingApplicationViewModel):
    # None means the applicant is not a legal entity
    legal_entity: Optional[LegalEntitySchema] = None
    portfolio_funds: list[FundSchema] = Field(default_factory=list)
    portfolio_total_amount: Decimal = Decimal("0")


class InReviewApplicationViewModel(ActivatedApplicationViewModel):
    in_review_message: str
    in_review_information: ReviewSchema


class PageNumbers(str, enum.Enum):
    NONE = "none"
    NUMERIC = "numeric"


class HeaderRepeat(str, enum.Enum):
    FIRST_PAGE_ONLY = "first_page_only"
    EVERY_PAGE = "every_page"


class HeaderOptions(BaseModel):
    header_repeat: HeaderRepeat = HeaderRepeat.FIRST_PAGE_ONLY
    header_html: str = ""


class PdfOptions(BaseModel):
    page_numbers: PageNumbers = PageNumbers.NUMERIC
    header_options: HeaderOptions = Field(default_factory=HeaderOptions)
