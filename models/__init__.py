from models.application import (
    Application,
    ApplicationState,
    Fund,
    LegalEntity,
    Person,
    Product,
    Review,
)

__all__ = [
    "Application",
    "ApplicationState",
    "Fund",
    "LegalEntity",
    "Person",
    "Product",
    "Review",
]
