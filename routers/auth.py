import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from authx import AuthX, AuthXConfig, TokenPayload
from core.actor import home_for
from core.config import settings
from core.database import SessionLocal, get_db
from models.enums import Role
from repositories.refresh_token_repo import RefreshTokenRepository
from schemas.auth import LoginIn, SessionOut
from services.auth_services import AuthService, InvalidCredentials

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

_cookie_samesite = settings.JWT_COOKIE_SAMESITE.lower() if settings.JWT_COOKIE_SAMESITE else None
_cookie_domain = settings.JWT_COOKIE_DOMAIN or None

config = AuthXConfig(
    JWT_SECRET_KEY=settings.SECRET_KEY,
    JWT_ALGORITHM=settings.JWT_ALG,
    JWT_ACCESS_TOKEN_EXPIRES=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    JWT_REFRESH_TOKEN_EXPIRES=timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
    JWT_TOKEN_LOCATION=settings.JWT_TOKEN_LOCATION,
    JWT_ACCESS_COOKIE_NAME=settings.JWT_ACCESS_COOKIE_NAME,
    JWT_REFRESH_COOKIE_NAME=settings.JWT_REFRESH_COOKIE_NAME,
    JWT_COOKIE_SAMESITE=_cookie_samesite or "lax",
    JWT_COOKIE_SECURE=settings.JWT_COOKIE_SECURE,
    JWT_COOKIE_DOMAIN=_cookie_domain,
    JWT_COOKIE_CSRF_PROTECT=settings.JWT_COOKIE_CSRF_PROTECT,
)

security = AuthX(config=config)


def _decode_token(token: str) -> TokenPayload:
    return TokenPayload.decode(
        token=token,
        key=security.config.public_key,
        algorithms=[security.config.JWT_ALGORITHM],
    )


def _exp_to_datetime(exp_value: float | int | datetime) -> datetime:
    if isinstance(exp_value, datetime):
        return exp_value if exp_value.tzinfo else exp_value.replace(tzinfo=timezone.utc)
    return datetime.fromtimestamp(exp_value, tz=timezone.utc)


def _refresh_metadata(payload: TokenPayload) -> tuple[str, datetime]:
    if payload.jti is None:
        raise ValueError("Refresh token does not contain jti")
    if payload.exp is None:
        raise ValueError("Refresh token missing expiry")
    return payload.jti, _exp_to_datetime(payload.exp)


def _is_token_revoked(token: str, **_: Any) -> bool:
    try:
        payload = _decode_token(token)
    except Exception:
        return True

    # only refresh tokens are registered; access tokens simply expire
    if payload.type != "refresh" or payload.jti is None:
        return False

    db = SessionLocal()
    try:
        return not RefreshTokenRepository(db).is_usable(payload.jti)
    finally:
        db.close()


security.set_token_blocklist(_is_token_revoked)


def _issue_tokens(response: Response, db: Session, user_id: int, *, rotate: bool) -> None:
    access_token = security.create_access_token(uid=str(user_id))
    refresh_token = security.create_refresh_token(uid=str(user_id))

    jti, expires_at = _refresh_metadata(_decode_token(refresh_token))
    repo = RefreshTokenRepository(db)
    if rotate:
        repo.add(user_id=user_id, jti=jti, expires_at=expires_at)
    else:
        repo.replace_for_user(user_id=user_id, jti=jti, expires_at=expires_at)

    security.set_access_cookies(access_token, response)
    security.set_refresh_cookies(refresh_token, response)


def _session_out(user, assigned_today: int) -> SessionOut:
    role = Role(user.role)
    return SessionOut(
        id=user.id,
        username=user.username,
        name=user.name,
        role=role,
        words_per_day=user.words_per_day,
        home=home_for(role),
        assigned_today=assigned_today,
    )


@router.post("/login", response_model=SessionOut)
async def post_login(response: Response, data: LoginIn, db: Session = Depends(get_db)):
    svc = AuthService(db)
    try:
        user = svc.login(username=data.username, password=data.password)
    except InvalidCredentials as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc

    _issue_tokens(response, db, user.id, rotate=False)
    return _session_out(user, svc.assigned_today(user.id))


@router.get("/me", response_model=SessionOut)
async def me(
    payload: TokenPayload = Depends(security.access_token_required),
    db: Session = Depends(get_db),
):
    svc = AuthService(db)
    try:
        user = svc.get_user(int(payload.sub))
    except (TypeError, ValueError) as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid subject in token") from exc
    return _session_out(user, svc.assigned_today(user.id))


@router.post("/logout")
async def logout(
    response: Response,
    payload: TokenPayload = Depends(security.refresh_token_required),
    db: Session = Depends(get_db),
):
    if payload.jti:
        RefreshTokenRepository(db).revoke(payload.jti)
    security.unset_cookies(response)
    return {"ok": True}


@router.post("/refresh")
async def refresh(
    response: Response,
    payload: TokenPayload = Depends(security.refresh_token_required),
    db: Session = Depends(get_db),
):
    try:
        user_id = int(payload.sub)
    except (TypeError, ValueError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid subject in token") from exc

    if payload.jti is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Token missing identifier")

    repo = RefreshTokenRepository(db)
    try:
        repo.assert_active(jti=payload.jti, user_id=user_id)
    except PermissionError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc

    repo.revoke(payload.jti)
    _issue_tokens(response, db, user_id, rotate=True)
    return {"status": "ok"}
