from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.db.base import get_db
from app.db.models.user import AdminSession
from app.schemas.user import LoginRequest, SessionResponse, TokenResponse, UserResponse
from app.core.security import create_session, find_user_by_email, get_current_session, verify_password

router = APIRouter(tags=["auth"])


@router.post("/login", response_model=TokenResponse)
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    user = find_user_by_email(db, credentials.email)

    if not user or not verify_password(credentials.password, user.password_hash):
        raise HTTPException(status_code=400, detail="Invalid credentials")

    session = create_session(db, user)

    return TokenResponse(access_token=session.token, expires_at=session.expires_at)


@router.post("/logout")
def logout(session: AdminSession = Depends(get_current_session), db: Session = Depends(get_db)):
    db.delete(session)
    db.commit()
    return {"ok": True}


@router.get("/session", response_model=SessionResponse)
def current_session(session: AdminSession = Depends(get_current_session)):
    return SessionResponse(user=UserResponse.model_validate(session.user), expires_at=session.expires_at)
