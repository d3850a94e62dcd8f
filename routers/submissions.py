from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.actor import Actor
from core.database import get_db
from models.enums import SubmissionStatus
from routers.deps import admin_actor, learner_actor
from schemas.submission import SubmissionCreateIn, SubmissionOut, SubmissionReviewIn
from services.submission_services import SubmissionService

router = APIRouter(tags=["Submissions"])


@router.post("/submissions", response_model=SubmissionOut, status_code=201)
async def create_submission(
    data: SubmissionCreateIn,
    actor: Actor = Depends(learner_actor),
    db: Session = Depends(get_db),
):
    svc = SubmissionService(db)
    entity = svc.submit(actor=actor, vocabulary_id=data.vocabulary_id, sentences=data.sentences)
    return SubmissionOut.from_entity(entity)


@router.get("/submissions", response_model=list[SubmissionOut])
async def my_submissions(
    actor: Actor = Depends(learner_actor),
    db: Session = Depends(get_db),
):
    return [SubmissionOut.from_entity(s) for s in SubmissionService(db).list_for_user(actor=actor)]


@router.get("/admin/submissions", response_model=list[SubmissionOut])
async def all_submissions(
    status: SubmissionStatus | None = Query(None),
    actor: Actor = Depends(admin_actor),
    db: Session = Depends(get_db),
):
    entities = SubmissionService(db).list_all(actor=actor, status=status)
    return [SubmissionOut.from_entity(s) for s in entities]


@router.post("/admin/submissions/{submission_id}/review", response_model=SubmissionOut)
async def review_submission(
    submission_id: int,
    data: SubmissionReviewIn,
    actor: Actor = Depends(admin_actor),
    db: Session = Depends(get_db),
):
    entity = SubmissionService(db).review(
        actor=actor,
        submission_id=submission_id,
        decision=SubmissionStatus(data.decision),
        feedback=data.feedback,
        override=data.override,
    )
    return SubmissionOut.from_entity(entity)
