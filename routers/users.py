from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from core.actor import Actor
from core.database import get_db
from models.enums import Role
from routers.deps import admin_actor
from schemas.assignment import AssignWordIn, AssignWordOut
from schemas.auth import UserCreateIn, UserOut, UserUpdateIn
from services.assignment_services import AssignmentService
from services.user_services import UserService

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/users", response_model=list[UserOut])
async def list_users(
    role: Role | None = Query(None),
    actor: Actor = Depends(admin_actor),
    db: Session = Depends(get_db),
):
    users = UserService(db).list_users(actor=actor, role=role)
    return [UserOut.model_validate(user) for user in users]


@router.post("/users", response_model=UserOut, status_code=201)
async def create_user(
    data: UserCreateIn,
    actor: Actor = Depends(admin_actor),
    db: Session = Depends(get_db),
):
    return UserOut.model_validate(UserService(db).create_user(actor=actor, data=data))


@router.put("/users/{user_id}", response_model=UserOut)
async def update_user(
    user_id: int,
    data: UserUpdateIn,
    actor: Actor = Depends(admin_actor),
    db: Session = Depends(get_db),
):
    return UserOut.model_validate(UserService(db).update_user(actor=actor, user_id=user_id, data=data))


@router.delete("/users/{user_id}", status_code=204)
async def delete_user(
    user_id: int,
    actor: Actor = Depends(admin_actor),
    db: Session = Depends(get_db),
):
    UserService(db).delete_user(actor=actor, user_id=user_id)
    return Response(status_code=204)


@router.post("/assignments", response_model=AssignWordOut, status_code=201)
async def assign_word(
    data: AssignWordIn,
    actor: Actor = Depends(admin_actor),
    db: Session = Depends(get_db),
):
    svc = AssignmentService(db)
    count = svc.assign_word(actor=actor, user_ids=data.user_ids, vocabulary_id=data.vocabulary_id)
    return AssignWordOut(vocabulary_id=data.vocabulary_id, count=count)
