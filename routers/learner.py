from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.actor import Actor
from core.database import get_db
from routers.deps import learner_actor
from schemas.assignment import (
    AnswerIn,
    AnswerOut,
    AssignedDayOut,
    AssignedWordOut,
    BlankOut,
    LearnedIn,
)
from services.practice_services import PracticeService

router = APIRouter(prefix="/learner", tags=["Learner"])


@router.get("/vocabulary", response_model=list[AssignedDayOut])
async def my_vocabulary(
    actor: Actor = Depends(learner_actor),
    db: Session = Depends(get_db),
):
    days = PracticeService(db).list_by_day(actor=actor)
    return [
        AssignedDayOut(date=day["date"], words=[AssignedWordOut.model_validate(row) for row in day["words"]])
        for day in days
    ]


@router.patch("/vocabulary/{assignment_id}/learned", response_model=AssignedWordOut)
async def set_learned(
    assignment_id: int,
    data: LearnedIn,
    actor: Actor = Depends(learner_actor),
    db: Session = Depends(get_db),
):
    entity = PracticeService(db).set_learned(actor=actor, assignment_id=assignment_id, learned=data.learned)
    return AssignedWordOut.model_validate(entity)


@router.get("/practice/{assignment_id}/blank", response_model=BlankOut)
async def fill_in_blank(
    assignment_id: int,
    actor: Actor = Depends(learner_actor),
    db: Session = Depends(get_db),
):
    sentence = PracticeService(db).fill_in_blank(actor=actor, assignment_id=assignment_id)
    return BlankOut(assignment_id=assignment_id, sentence=sentence)


@router.post("/practice/{assignment_id}/check", response_model=AnswerOut)
async def check_answer(
    assignment_id: int,
    data: AnswerIn,
    actor: Actor = Depends(learner_actor),
    db: Session = Depends(get_db),
):
    result = PracticeService(db).check_answer(actor=actor, assignment_id=assignment_id, answer=data.answer)
    return AnswerOut(**result)
