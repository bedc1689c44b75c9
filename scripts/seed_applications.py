"""
Seed one application per lifecycle state so every document template can be previewed.
Run: python -m scripts.seed_applications (from the project root).
"""
import asyncio
import datetime as dt
import logging
import os
import sys
from decimal import Decimal

# Add parent so we can import from the project root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import select

from database import AsyncSessionLocal, init_db
from models import Application, ApplicationState
from schemas.application import ApplicationCreate
from services.applications import create_application

logger = logging.getLogger("scripts.seed_applications")

_PORTFOLIO = [
    {
        "name": "Retirement Annuity",
        "funds": [
            {"name": "Balanced Fund", "amount": Decimal("25000.00"), "fees": Decimal("250.00")},
            {"name": "Equity Fund", "amount": Decimal("10000.00"), "fees": Decimal("120.00")},
        ],
    },
    {
        "name": "Tax Free Savings",
        "funds": [
            {"name": "Money Market Fund", "amount": Decimal("5000.00"), "fees": Decimal("15.00")},
        ],
    },
]

APPLICATIONS_DATA = [
    {
        "reference_number": "REF-1001",
        "state": ApplicationState.PENDING,
        "date": dt.date(2024, 1, 1),
        "person": {"first_name": "Jane", "surname": "Doe"},
    },
    {
        "reference_number": "REF-1002",
        "state": ApplicationState.ACTIVATED,
        "date": dt.date(2024, 2, 14),
        "person": {"first_name": "Sipho", "surname": "Ndlovu"},
        "is_legal_entity": True,
        "legal_entity": {"company_name": "Ndlovu Holdings (Pty) Ltd", "registration_number": "2019/123456/07"},
        "products": _PORTFOLIO,
    },
    {
        "reference_number": "REF-1003",
        "state": ApplicationState.IN_REVIEW,
        "date": dt.date(2024, 3, 3),
        "person": {"first_name": "Anna", "surname": "Smith"},
        "products": _PORTFOLIO,
        "current_review": {"reason": "proof of address outstanding"},
    },
    {
        "reference_number": "REF-1004",
        "state": ApplicationState.CLOSED,
        "date": dt.date(2023, 11, 20),
        "person": {"first_name": "Piet", "surname": "Botha"},
    },
]


async def seed():
    await init_db()
    async with AsyncSessionLocal() as session:
        for data in APPLICATIONS_DATA:
            existing = await session.execute(
                select(Application).where(Application.reference_number == data["reference_number"])
            )
            if existing.scalar_one_or_none():
                logger.info("Application %s already exists, skipping", data["reference_number"])
                continue
            app = await create_application(session, ApplicationCreate.model_validate(data))
            logger.info("Seeded application %s (%s) as %s", data["reference_number"], app.state, app.id)
        await session.commit()
    logger.info("Seed complete.")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    asyncio.run(seed())
