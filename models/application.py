import enum

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, Numeric, String, Text, func
from sqlalchemy.orm import relationship

from database import Base


class ApplicationState(str, enum.Enum):
    PENDING = "Pending"
    ACTIVATED = "Activated"
    IN_REVIEW = "InReview"
    CLOSED = "Closed"
    DECLINED = "Declined"
    WITHDRAWN = "Withdrawn"

    @property
    def description(self) -> str:
        """Human-readable label printed on documents."""
        return _STATE_DESCRIPTIONS[self]


_STATE_DESCRIPTIONS = {
    ApplicationState.PENDING: "Pending",
    ApplicationState.ACTIVATED: "Activated",
    ApplicationState.IN_REVIEW: "In Review",
    ApplicationState.CLOSED: "Closed",
    ApplicationState.DECLINED: "Declined",
    ApplicationState.WITHDRAWN: "Withdrawn",
}


class Application(Base):
    __tablename__ = "applications"

    id = Column(String(64), primary_key=True, index=True)
    reference_number = Column(String(64), nullable=False, index=True)
    state = Column(String(32), nullable=False, default=ApplicationState.PENDING.value, index=True)
    date = Column(Date, nullable=False)
    is_legal_entity = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    person = relationship("Person", back_populates="application", uselist=False, cascade="all, delete-orphan")
    legal_entity = relationship("LegalEntity", back_populates="application", uselist=False, cascade="all, delete-orphan")
    products = relationship(
        "Product",
        back_populates="application",
        order_by="Product.position",
        cascade="all, delete-orphan",
    )
    current_review = relationship("Review", back_populates="application", uselist=False, cascade="all, delete-orphan")


class Person(Base):
    __tablename__ = "people"

    id = Column(Integer, primary_key=True, autoincrement=True)
    application_id = Column(String(64), ForeignKey("applications.id", ondelete="CASCADE"), nullable=False, unique=True)
    first_name = Column(String(128), nullable=False)
    surname = Column(String(128), nullable=False)

    application = relationship("Application", back_populates="person")


class LegalEntity(Base):
    __tablename__ = "legal_entities"

    id = Column(Integer, primary_key=True, autoincrement=True)
    application_id = Column(String(64), ForeignKey("applications.id", ondelete="CASCADE"), nullable=False, unique=True)
    company_name = Column(String(256), nullable=False)
    registration_number = Column(String(64), nullable=True)
    vat_number = Column(String(64), nullable=True)

    application = relationship("Application", back_populates="legal_entity")


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    application_id = Column(String(64), ForeignKey("applications.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(256), nullable=False)
    position = Column(Integer, nullable=False, default=0)

    application = relationship("Application", back_populates="products")
    funds = relationship("Fund", back_populates="product", order_by="Fund.position", cascade="all, delete-orphan")


class Fund(Base):
    __tablename__ = "funds"

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(256), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    # Amount and fees share one currency unit
    amount = Column(Numeric(18, 2), nullable=False)
    fees = Column(Numeric(18, 2), nullable=False, default=0)

    product = relationship("Product", back_populates="funds")


class Review(Base):
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, autoincrement=True)
    application_id = Column(String(64), ForeignKey("applications.id", ondelete="CASCADE"), nullable=False, unique=True)
    reason = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    application = relationship("Application", back_populates="current_review")
