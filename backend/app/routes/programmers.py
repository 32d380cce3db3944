"""
Programmers Backend — Programmer Resource Controller
======================================================

What:  Maps the CRUD HTTP verbs on /api/programmers to ProgrammerService calls.
How:   Reads the (JSON or form) body, delegates to the service, serializes the result.
Who:   Called by the Angular $resource client in static/js/app.js.

Route Inventory (each also answers with a `.json` suffix):
    GET    /api/programmers          list       200 [records], X-Total-Count
    POST   /api/programmers          create     201 record, Location
    GET    /api/programmers/{id}     view       200 record | 404
    PUT    /api/programmers/{id}     update     200 record | 404 | 422
    PATCH  /api/programmers/{id}     partial    200 record | 404 | 422
    DELETE /api/programmers/{id}     delete     204 | 404

The `{id:int}` convertor keeps "3.json" from reaching the plain-id routes.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_db_session
from app.schemas.programmer import ErrorResponse, FieldErrorsResponse, ProgrammerResponse
from app.services.payload import read_payload
from app.services.programmer_service import programmer_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Programmers"])

ITEM = "/programmers/{programmer_id:int}"
ITEM_JSON = "/programmers/{programmer_id:int}.json"

WRITE_RESPONSES = {
    400: {"description": "Malformed body", "model": ErrorResponse},
    403: {"description": "XSRF token missing or invalid", "model": ErrorResponse},
    415: {"description": "Unsupported content type", "model": ErrorResponse},
    422: {"description": "Field validation failed", "model": FieldErrorsResponse},
}
NOT_FOUND = {404: {"description": "Programmer not found", "model": ErrorResponse}}


@router.get(
    "/programmers",
    response_model=List[ProgrammerResponse],
    summary="List programmers",
)
@router.get("/programmers.json", response_model=List[ProgrammerResponse], include_in_schema=False)
async def list_programmers(
    response: Response,
    limit: Optional[int] = Query(
        default=None, ge=1, le=settings.list_max_limit,
        description="Maximum number of records (omit for all)",
    ),
    offset: int = Query(default=0, ge=0, description="Records to skip"),
    db: AsyncSession = Depends(get_db_session),
) -> List[ProgrammerResponse]:
    """Returns records ordered by id; the total is in X-Total-Count."""
    programmers, total_count = await programmer_service.list_programmers(
        db=db, limit=limit, offset=offset
    )
    response.headers["X-Total-Count"] = str(total_count)
    return [ProgrammerResponse.model_validate(p) for p in programmers]


@router.post(
    "/programmers",
    status_code=201,
    response_model=ProgrammerResponse,
    responses=WRITE_RESPONSES,
    summary="Create a programmer",
    description=(
        "Accepts application/json or form-encoded bodies, flat (`name=...`) or "
        "model-scoped (`Programmer[name]=...`). The password is stored only as a hash."
    ),
)
@router.post(
    "/programmers.json",
    status_code=201,
    response_model=ProgrammerResponse,
    include_in_schema=False,
)
async def create_programmer(
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> ProgrammerResponse:
    data = await read_payload(request)
    programmer = await programmer_service.create_programmer(db=db, data=data)
    response.headers["Location"] = f"/api/programmers/{programmer.id}"
    return ProgrammerResponse.model_validate(programmer)


@router.get(ITEM, response_model=ProgrammerResponse, responses=NOT_FOUND, summary="View a programmer")
@router.get(ITEM_JSON, response_model=ProgrammerResponse, include_in_schema=False)
async def get_programmer(
    programmer_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> ProgrammerResponse:
    programmer = await programmer_service.get_programmer(db=db, programmer_id=programmer_id)
    return ProgrammerResponse.model_validate(programmer)


@router.put(
    ITEM,
    response_model=ProgrammerResponse,
    responses={**WRITE_RESPONSES, **NOT_FOUND},
    summary="Update a programmer",
    description="Name and experience are required; omit the password to keep the current one.",
)
@router.put(ITEM_JSON, response_model=ProgrammerResponse, include_in_schema=False)
async def update_programmer(
    programmer_id: int,
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> ProgrammerResponse:
    data = await read_payload(request)
    programmer = await programmer_service.update_programmer(
        db=db, programmer_id=programmer_id, data=data
    )
    return ProgrammerResponse.model_validate(programmer)


@router.patch(
    ITEM,
    response_model=ProgrammerResponse,
    responses={**WRITE_RESPONSES, **NOT_FOUND},
    summary="Partially update a programmer",
)
@router.patch(ITEM_JSON, response_model=ProgrammerResponse, include_in_schema=False)
async def patch_programmer(
    programmer_id: int,
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> ProgrammerResponse:
    data = await read_payload(request)
    programmer = await programmer_service.update_programmer(
        db=db, programmer_id=programmer_id, data=data, partial=True
    )
    return ProgrammerResponse.model_validate(programmer)


@router.delete(
    ITEM,
    status_code=204,
    response_class=Response,
    responses=NOT_FOUND,
    summary="Delete a programmer",
)
@router.delete(ITEM_JSON, status_code=204, response_class=Response, include_in_schema=False)
async def delete_programmer(
    programmer_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await programmer_service.delete_programmer(db=db, programmer_id=programmer_id)
    return Response(status_code=204)
