from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from database import get_db
from schemas.application import ApplicationCreate, ApplicationResponse
from services.applications import SqlApplicationLookup, create_application
from services.document_generator import build_document_generator
from services.exceptions import MissingReviewError

router = APIRouter(prefix="/api/applications", tags=["applications"])


def _app_to_response(app) -> dict:
    """Serialize application to dict with camelCase for frontend."""
    return ApplicationResponse.from_orm_with_camel(app).model_dump(mode="json", by_alias=True)


@router.post("", status_code=201)
async def create(body: ApplicationCreate, db: AsyncSession = Depends(get_db)):
    app = await create_application(db, body)
    return _app_to_response(app)


@router.get("/{application_id}")
async def get_application(application_id: str, db: AsyncSession = Depends(get_db)):
    app = await SqlApplicationLookup(db).get(application_id)
    if not app:
        raise HTTPException(status_code=404, detail="Application not found")
    return _app_to_response(app)


@router.get("/{application_id}/document")
async def get_application_document(
    application_id: str,
    base_uri: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    generator = build_document_generator(db, settings)
    try:
        pdf = await generator.generate(application_id, base_uri or settings.template_base_uri)
    except MissingReviewError as e:
        raise HTTPException(status_code=422, detail=str(e))
    if pdf is None:
        raise HTTPException(status_code=404, detail="No document available for this application")
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'inline; filename="application-{application_id}.pdf"'},
    )
