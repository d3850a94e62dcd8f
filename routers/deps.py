from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session

from authx import TokenPayload
from core.actor import Actor
from core.database import get_db
from models.enums import Role
from repositories.user_repo import UserRepository
from routers.auth import security
from services.generation_gateway import GenerationGateway


def current_actor(
    payload: TokenPayload = Depends(security.access_token_required),
    db: Session = Depends(get_db),
) -> Actor:
    try:
        user_id = int(payload.sub)
    except (TypeError, ValueError) as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid subject in token") from exc
    user = UserRepository(db).get_by_id(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User no longer exists")
    return Actor.from_user(user)


def admin_actor(actor: Actor = Depends(current_actor)) -> Actor:
    if actor.role is not Role.ADMIN:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return actor


def learner_actor(actor: Actor = Depends(current_actor)) -> Actor:
    if actor.role is not Role.USER:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Learner access required")
    return actor


def get_generation_gateway() -> GenerationGateway:
    return GenerationGateway.from_settings()
