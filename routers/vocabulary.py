from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from core.actor import Actor
from core.database import get_db
from models.enums import CefrLevel
from routers.deps import admin_actor, current_actor, get_generation_gateway
from schemas.vocabulary import (
    ExamplesOut,
    PronunciationOut,
    VocabularyCreateIn,
    VocabularyOut,
    VocabularyUpdateIn,
    WordIn,
)
from services.catalog_services import CatalogGenerationService
from services.generation_gateway import GenerationGateway
from services.vocabulary_services import VocabularyService

router = APIRouter(prefix="/vocabulary", tags=["Vocabulary"])


@router.get("", response_model=list[VocabularyOut])
async def list_vocabulary(
    cefr: CefrLevel | None = Query(None),
    actor: Actor = Depends(admin_actor),
    db: Session = Depends(get_db),
):
    svc = VocabularyService(db)
    return [VocabularyOut.model_validate(word) for word in svc.list_words(cefr=cefr)]


@router.post("", response_model=VocabularyOut, status_code=201)
async def create_vocabulary(
    data: VocabularyCreateIn,
    actor: Actor = Depends(admin_actor),
    db: Session = Depends(get_db),
):
    word = VocabularyService(db).create_word(actor=actor, data=data)
    return VocabularyOut.model_validate(word)


@router.get("/{vocabulary_id}", response_model=VocabularyOut)
async def get_vocabulary(
    vocabulary_id: int,
    actor: Actor = Depends(current_actor),
    db: Session = Depends(get_db),
):
    return VocabularyOut.model_validate(VocabularyService(db).get_word(vocabulary_id))


@router.put("/{vocabulary_id}", response_model=VocabularyOut)
async def update_vocabulary(
    vocabulary_id: int,
    data: VocabularyUpdateIn,
    actor: Actor = Depends(admin_actor),
    db: Session = Depends(get_db),
):
    word = VocabularyService(db).update_word(actor=actor, vocabulary_id=vocabulary_id, data=data)
    return VocabularyOut.model_validate(word)


@router.delete("/{vocabulary_id}", status_code=204)
async def delete_vocabulary(
    vocabulary_id: int,
    actor: Actor = Depends(admin_actor),
    db: Session = Depends(get_db),
):
    VocabularyService(db).delete_word(actor=actor, vocabulary_id=vocabulary_id)
    return Response(status_code=204)


@router.post("/generate/examples", response_model=ExamplesOut)
async def generate_examples(
    data: WordIn,
    actor: Actor = Depends(admin_actor),
    db: Session = Depends(get_db),
    gateway: GenerationGateway = Depends(get_generation_gateway),
):
    svc = CatalogGenerationService(db, gateway)
    return ExamplesOut(word=data.word, examples=await svc.generate_examples(data.word))


@router.post("/generate/pronunciation", response_model=PronunciationOut)
async def generate_pronunciation(
    data: WordIn,
    actor: Actor = Depends(admin_actor),
    db: Session = Depends(get_db),
    gateway: GenerationGateway = Depends(get_generation_gateway),
):
    svc = CatalogGenerationService(db, gateway)
    result = await svc.generate_pronunciation(data.word)
    return PronunciationOut(word=data.word, **result)
