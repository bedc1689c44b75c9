from schemas.application import (
    ApplicationCreate,
    ApplicationResponse,
    FundCreate,
    LegalEntityCreate,
    PersonSchema,
    ProductCreate,
    ReviewCreate,
)
from schemas.documents import (
    ActivatedApplicationViewModel,
    DocumentKind,
    FundSchema,
    HeaderOptions,
    HeaderRepeat,
    InReviewApplicationViewModel,
    LegalEntitySchema,
    PageNumbers,
    PdfOptions,
    PendingApplicationViewModel,
    ReviewSchema,
)

__all__ = [
    "ApplicationCreate",
    "ApplicationResponse",
    "FundCreate",
    "LegalEntityCreate",
    "PersonSchema",
    "ProductCreate",
    "ReviewCreate",
    "ActivatedApplicationViewModel",
    "DocumentKind",
    "FundSchema",
    "HeaderOptions",
    "HeaderRepeat",
    "InReviewApplicationViewModel",
    "LegalEntitySchema",
    "PageNumbers",
    "PdfOptions",
    "PendingApplicationViewModel",
    "ReviewSchema",
]
