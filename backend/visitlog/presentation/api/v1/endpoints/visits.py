"""Visit record CRUD endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, status

from visitlog.application.schemas import (
    ValidationErrorResponse,
    VisitPayload,
    VisitResponse,
    VisitStatisticsResponse,
)
from visitlog.application.services import VisitService
from visitlog.domain.exceptions import ValidationError
from visitlog.infrastructure.database.models import MAX_VISIT_ID
from visitlog.infrastructure.dependencies import get_visit_service

router = APIRouter(prefix="/visits", tags=["Visits"])

_NOT_FOUND = "Visit not found"
_INVALID_RESPONSES = {status.HTTP_400_BAD_REQUEST: {"model": ValidationErrorResponse}}

VisitId = Annotated[int, Path(gt=0, le=MAX_VISIT_ID, description="Visit identifier")]


def _bad_request(exc: ValidationError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"message": str(exc), "errors": exc.errors},
    )


def _require_body(payload: VisitPayload) -> dict:
    data = payload.to_field_map()
    if not data:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": "Visit data is required", "errors": []},
        )
    return data


@router.get("", response_model=list[VisitResponse])
async def list_visits(
    service: VisitService = Depends(get_visit_service),
) -> list[VisitResponse]:
    """Retrieve every visit, most recent visit date first."""
    records = await service.list_all()
    return [VisitResponse.from_entity(r) for r in records]


@router.get("/statistics", response_model=VisitStatisticsResponse)
async def get_statistics(
    service: VisitService = Depends(get_visit_service),
) -> VisitStatisticsResponse:
    """Visit counts per category plus the overall total."""
    statistics = await service.statistics()
    return VisitStatisticsResponse.from_statistics(statistics)


@router.get(
    "/category/{category}",
    response_model=list[VisitResponse],
    responses=_INVALID_RESPONSES,
)
async def list_visits_by_category(
    category: str,
    service: VisitService = Depends(get_visit_service),
) -> list[VisitResponse]:
    """Retrieve the visits of a single category."""
    try:
        records = await service.list_by_category(category)
    except ValidationError as e:
        raise _bad_request(e)
    return [VisitResponse.from_entity(r) for r in records]


@router.get("/{visit_id}", response_model=VisitResponse)
async def get_visit(
    visit_id: VisitId,
    service: VisitService = Depends(get_visit_service),
) -> VisitResponse:
    """Retrieve a single visit by ID."""
    record = await service.find_by_id(visit_id)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=_NOT_FOUND)
    return VisitResponse.from_entity(record)


@router.post(
    "",
    response_model=VisitResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_INVALID_RESPONSES,
)
async def create_visit(
    payload: VisitPayload,
    service: VisitService = Depends(get_visit_service),
) -> VisitResponse:
    """Create a new visit."""
    try:
        record = await service.create(_require_body(payload))
    except ValidationError as e:
        raise _bad_request(e)
    return VisitResponse.from_entity(record)


@router.put("/{visit_id}", response_model=VisitResponse, responses=_INVALID_RESPONSES)
async def update_visit(
    payload: VisitPayload,
    visit_id: VisitId,
    service: VisitService = Depends(get_visit_service),
) -> VisitResponse:
    """Replace every editable field of an existing visit."""
    try:
        record = await service.update(visit_id, _require_body(payload))
    except ValidationError as e:
        raise _bad_request(e)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=_NOT_FOUND)
    return VisitResponse.from_entity(record)


@router.delete("/{visit_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_visit(
    visit_id: VisitId,
    service: VisitService = Depends(get_visit_service),
) -> None:
    """Delete a visit by ID."""
    if not await service.remove(visit_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=_NOT_FOUND)
