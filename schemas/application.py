from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from models.application import ApplicationState


class PersonSchema(BaseModel):
    first_name: str = Field(..., alias="firstName")
    surname: str

    model_config = {"populate_by_name": True}


class LegalEntityCreate(BaseModel):
    company_name: str = Field(..., alias="companyName")
    registration_number: Optional[str] = Field(None, alias="registrationNumber")
    vat_number: Optional[str] = Field(None, alias="vatNumber")

    model_config = {"populate_by_name": True}


class FundCreate(BaseModel):
    name: str
    amount: Decimal
    fees: Decimal = Decimal("0")


class ProductCreate(BaseModel):
    name: str
    funds: list[FundCreate] = Field(default_factory=list)


class ReviewCreate(BaseModel):
    reason: str


class ApplicationCreate(BaseModel):
    reference_number: str = Field(..., alias="referenceNumber")
    state: ApplicationState = ApplicationState.PENDING
    date: dt.date
    person: PersonSchema
    is_legal_entity: bool = Field(False, alias="isLegalEntity")
    legal_entity: Optional[LegalEntityCreate] = Field(None, alias="legalEntity")
    products: list[ProductCreate] = Field(default_factory=list)
    current_review: Optional[ReviewCreate] = Field(None, alias="currentReview")

    model_config = {"populate_by_name": True}


class ApplicationResponse(BaseModel):
    id: str
    reference_number: str
    state: str
    date: dt.date
    person: Optional[dict[str, Any]] = None
    is_legal_entity: bool
    legal_entity: Optional[dict[str, Any]] = None
    products: list[dict[str, Any]] = Field(default_factory=list)
    current_review: Optional[dict[str, Any]] = None
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    @classmethod
    def from_orm_with_camel(cls, obj: Any) -> "ApplicationResponse":
        """Map the ORM graph to a response serialized with camelCase keys."""
        person = obj.person
        legal_entity = obj.legal_entity
        review = obj.current_review
        return cls(
            id=obj.id,
            reference_number=obj.reference_number,
            state=obj.state,
            date=obj.date,
            person={"firstName": person.first_name, "surname": person.surname} if person else None,
            is_legal_entity=obj.is_legal_entity,
            legal_entity={
                "companyName": legal_entity.company_name,
                "registrationNumber": legal_entity.registration_number,
                "vatNumber": legal_entity.vat_number,
            } if legal_entity else None,
            products=[
                {
                    "name": p.name,
                    "funds": [{"name": f.name, "amount": str(f.amount), "fees": str(f.fees)} for f in p.funds],
                }
                for p in obj.products
            ],
            current_review={"reason": review.reason} if review else None,
            created_at=obj.created_at,
            updated_at=obj.updated_at,
        )
