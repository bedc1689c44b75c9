"""
Generates the PDF for an application according to its lifecycle state.

Pending, Activated and InReview applications each have their own template and
view model; every other state has no document. Unknown applications and
unsupported states yield None with a logged warning instead of an error.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from config import Settings, settings as default_settings
from models.application import ApplicationState
from schemas.documents import (
    ActivatedApplicationViewModel,
    DocumentKind,
    FundSchema,
    InReviewApplicationViewModel,
    LegalEntitySchema,
    PendingApplicationViewModel,
    ReviewSchema,
)
from services.applications import ApplicationLookup, SqlApplicationLookup
from services.exceptions import MissingReviewError
from services.portfolio import flatten_funds, portfolio_total
from services.rendering import (
    FpdfGenerator,
    JinjaViewGenerator,
    PdfGenerator,
    SettingsPathProvider,
    TemplatePathProvider,
    ViewGenerator,
    default_pdf_options,
)
from services.review_message import compose_review_message

logger = logging.getLogger(__name__)

APPLICATION_ID_NOT_FOUND = "No application found for id"
APPLICATION_IN_STATE = "The application is in state"
APPLICATION_NO_VALID_DOCUMENT = "and no valid document can be generated for it."

_STATE_KINDS = {
    ApplicationState.PENDING: DocumentKind.PENDING,
    ApplicationState.ACTIVATED: DocumentKind.ACTIVATED,
    ApplicationState.IN_REVIEW: DocumentKind.IN_REVIEW,
}


def classify_state(state: Any) -> DocumentKind:
    """Document kind for a lifecycle state; UNSUPPORTED for any state without a document."""
    try:
        state = ApplicationState(state)
    except ValueError:
        return DocumentKind.UNSUPPORTED
    return _STATE_KINDS.get(state, DocumentKind.UNSUPPORTED)


def normalize_base_uri(base_uri: str) -> str:
    """Strip a single trailing '/' so template paths can be appended directly."""
    if base_uri.endswith("/"):
        return base_uri[:-1]
    return base_uri


def _common_fields(application: Any, settings: Settings) -> dict[str, Any]:
    person = application.person
    return {
        "reference_number": application.reference_number,
        "state": ApplicationState(application.state).description,
        "full_name": f"{person.first_name} {person.surname}",
        "applied_on": application.date,
        "support_email": settings.support_email,
        "signature": settings.signature,
    }


def _portfolio_fields(application: Any, settings: Settings) -> dict[str, Any]:
    legal_entity = None
    if application.is_legal_entity and application.legal_entity is not None:
        legal_entity = LegalEntitySchema.model_validate(application.legal_entity)
    return {
        "legal_entity": legal_entity,
        "portfolio_funds": [FundSchema.model_validate(f) for f in flatten_funds(application.products)],
        "portfolio_total_amount": portfolio_total(application.products, settings.tax_rate),
    }


def build_pending_view_model(application: Any, settings: Settings) -> PendingApplicationViewModel:
    return PendingApplicationViewModel(**_common_fields(application, settings))


def build_activated_view_model(application: Any, settings: Settings) -> ActivatedApplicationViewModel:
    return ActivatedApplicationViewModel(
        **_common_fields(application, settings),
        **_portfolio_fields(application, settings),
    )


def build_in_review_view_model(application: Any, settings: Settings) -> InReviewApplicationViewModel:
    """
    Activated fields plus the review explanation and the raw review record.
    Raises MissingReviewError when the application has no review reason.
    """
    review = application.current_review
    if review is None or review.reason is None:
        raise MissingReviewError(
            f"Application '{application.id}' is in review but has no review reason",
            application_id=application.id,
        )
    return InReviewApplicationViewModel(
        **_common_fields(application, settings),
        **_portfolio_fields(application, settings),
        in_review_message=compose_review_message(review.reason),
        in_review_information=ReviewSchema.model_validate(review),
    )


ViewModelBuilder = Callable[[Any, Settings], BaseModel]

VIEW_MODEL_BUILDERS: dict[DocumentKind, ViewModelBuilder] = {
    DocumentKind.PENDING: build_pending_view_model,
    DocumentKind.ACTIVATED: build_activated_view_model,
    DocumentKind.IN_REVIEW: build_in_review_view_model,
}


class DocumentGenerator:
    def __init__(
        self,
        lookup: ApplicationLookup,
        path_provider: TemplatePathProvider,
        view_generator: ViewGenerator,
        pdf_generator: PdfGenerator,
        settings: Settings = default_settings,
    ):
        self._lookup = lookup
        self._path_provider = path_provider
        self._view_generator = view_generator
        self._pdf_generator = pdf_generator
        self._settings = settings

    async def generate(self, application_id: str, base_uri: str) -> Optional[bytes]:
        """
        PDF bytes for the application, or None when it does not exist or its
        state has no document. Collaborator errors propagate.
        """
        application = await self._lookup.get(application_id)
        if application is None:
            logger.warning("%s '%s'", APPLICATION_ID_NOT_FOUND, application_id)
            return None

        # Rendering and PDF layout are CPU-bound and run in a worker thread
        return await run_in_threadpool(self._render_pdf, application, base_uri)

    def _render_pdf(self, application: Any, base_uri: str) -> Optional[bytes]:
        html = self.generate_html(application, base_uri)
        if html is None:
            return None
        return self._pdf_generator.generate_from_html(html, default_pdf_options(self._settings))

    def generate_html(self, application: Any, base_uri: str) -> Optional[str]:
        base_uri = normalize_base_uri(base_uri)
        kind = classify_state(application.state)
        builder = VIEW_MODEL_BUILDERS.get(kind)
        if builder is None:
            state = application.state
            if isinstance(state, ApplicationState):
                state = state.value
            logger.warning("%s '%s' %s", APPLICATION_IN_STATE, state, APPLICATION_NO_VALID_DOCUMENT)
            return None

        path = self._path_provider.get(kind.value)
        view_model = builder(application, self._settings)
        logger.debug("Rendering %s for application %s", kind.value, application.id)
        return self._view_generator.generate_from_path(f"{base_uri}{path}", view_model)


def build_document_generator(session: AsyncSession, settings: Settings = default_settings) -> DocumentGenerator:
    """Generator wired to the database and the default Jinja2 / fpdf2 collaborators."""
    return DocumentGenerator(
        lookup=SqlApplicationLookup(session),
        path_provider=SettingsPathProvider(settings.template_paths),
        view_generator=JinjaViewGenerator(),
        pdf_generator=FpdfGenerator(settings.font_path, settings.bold_font_path),
        settings=settings,
    )
