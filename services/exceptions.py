"""
Document Generation Exceptions

Raised when application data or template configuration cannot produce a document.
Not-found applications and unsupported states are not errors; the generator returns None for them.
"""
from typing import Optional



class DocumentGenerationError(Exception):
    """Base exception for all document generation errors."""
    pass


class MissingReviewError(DocumentGenerationError):
    """
    Raised when an in-review application carries no review record or no reason.

    The stored application violates the in-review contract; a document built
    from it would be malformed.
    """
    def __init__(self, message: str, application_id: Optional[str] = None):
        self.application_id = application_id
        super().__init__(message)


class TemplateNotFoundError(DocumentGenerationError):
    """Raised when the template registry has no path for a document kind."""
    def __init__(self, message: str, template_name: Optional[str] = None):
        self.template_name = template_name
        super().__init__(message)
