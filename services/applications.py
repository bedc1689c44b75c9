from __future__ import annotations

import uuid
from typing import Optional, Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from models import Application, Fund, LegalEntity, Person, Product, Review
from schemas.application import ApplicationCreate


class ApplicationLookup(Protocol):
    async def get(self, application_id: str) -> Optional[Application]: ...


def _application_graph():
    """Eager-load everything a document may read, so no lazy load happens during rendering."""
    return (
        selectinload(Application.person),
        selectinload(Application.legal_entity),
        selectinload(Application.products).selectinload(Product.funds),
        selectinload(Application.current_review),
    )


class SqlApplicationLookup:
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get(self, application_id: str) -> Optional[Application]:
        result = await self._session.execute(
            select(Application)
            .where(Application.id == application_id)
            .options(*_application_graph())
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()


async def create_application(session: AsyncSession, body: ApplicationCreate) -> Application:
    """Persist an application with its person, legal entity, products, funds and review."""
    app_id = f"app-{uuid.uuid4().hex[:12]}"
    app = Application(
        id=app_id,
        reference_number=body.reference_number,
        state=body.state.value,
        date=body.date,
        is_legal_entity=body.is_legal_entity,
        person=Person(first_name=body.person.first_name, surname=body.person.surname),
        legal_entity=LegalEntity(
            company_name=body.legal_entity.company_name,
            registration_number=body.legal_entity.registration_number,
            vat_number=body.legal_entity.vat_number,
        ) if body.legal_entity else None,
        products=[
            Product(
                name=p.name,
                position=i,
                funds=[
                    Fund(name=f.name, position=j, amount=f.amount, fees=f.fees)
                    for j, f in enumerate(p.funds)
                ],
            )
            for i, p in enumerate(body.products)
        ],
        current_review=Review(reason=body.current_review.reason) if body.current_review else None,
    )
    session.add(app)
    await session.flush()
    # Reload so timestamps and relationships are populated without lazy loads
    return await SqlApplicationLookup(session).get(app_id)
