import logging

from fastapi import APIRouter, Body, Depends
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from core.actor import Actor
from core.database import get_db
from core.errors import ValidationFailure, describe_validation_errors
from routers.deps import admin_actor, get_generation_gateway
from schemas.assignment import AssignVocabularyIn
from schemas.envelope import ApiResponse
from schemas.vocabulary import GenerateVocabularyIn, VocabularyOut
from services.assignment_services import AssignmentService
from services.bootstrap_services import BootstrapService
from services.catalog_services import CatalogGenerationService
from services.generation_gateway import GenerationGateway

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["API"])


def _parse(model: type[BaseModel], payload: dict):
    """Validate a raw body so failures come back as envelope 400s, not 422s."""
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        messages = describe_validation_errors(exc.errors())
        raise ValidationFailure(messages or "Missing required parameters") from exc


@router.post("/assign-vocabulary", response_model=ApiResponse, response_model_exclude_none=True)
async def assign_vocabulary(
    payload: dict = Body(...),
    actor: Actor = Depends(admin_actor),
    db: Session = Depends(get_db),
):
    data = _parse(AssignVocabularyIn, payload)
    result = AssignmentService(db).assign_daily(actor=actor, user_id=data.userId, quota=data.count)
    message = result.message
    if result.count:
        message = f"Assigned {result.count} vocabulary items to user {data.userId}"
    return ApiResponse(success=True, message=message, count=result.count, data={"status": result.status})


@router.post("/generate-vocabulary", response_model=ApiResponse, response_model_exclude_none=True)
async def generate_vocabulary(
    payload: dict = Body(...),
    actor: Actor = Depends(admin_actor),
    db: Session = Depends(get_db),
    gateway: GenerationGateway = Depends(get_generation_gateway),
):
    data = _parse(GenerateVocabularyIn, payload)
    svc = CatalogGenerationService(db, gateway)
    stored = await svc.generate_and_store(actor=actor, level=data.level, count=data.count, topic=data.topic)
    return ApiResponse(
        success=True,
        message=f"{len(stored)} vocabulary words generated successfully",
        count=len(stored),
        data=jsonable_encoder([VocabularyOut.model_validate(word) for word in stored]),
    )


@router.post("/init-database", response_model=ApiResponse, response_model_exclude_none=True)
async def init_database(db: Session = Depends(get_db)):
    created = BootstrapService(db).initialize()
    return ApiResponse(success=True, message="Database initialized", data=created)
