"""
Authentication Routes

Endpoints:
- POST /auth/google - Exchange Google id_token for a session
- POST /auth/logout - Revoke the current session
- GET /auth/me - Current user, or null when anonymous

Auth Flow:
1. Frontend performs the Google sign-in flow and receives an id_token
2. Frontend POSTs id_token to /auth/google
3. Backend verifies id_token with Google's public keys
4. Backend upserts the user (name/avatar refreshed on every sign-in)
5. Backend returns an opaque session token, sent back as a Bearer header

Security:
- id_token is verified using Google's public keys (google-auth library)
- Session tokens are random and stored server-side, so logout revokes them
"""

from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException, status
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token as google_id_token
from sqlalchemy import or_, select

from app.api.deps import DbSession, Identity, SessionToken
from app.config import get_settings
from app.db.models import User
from app.schemas.auth import GoogleAuthRequest, MeResponse, SessionResponse
from app.schemas.user import UserRead
from app.services.access import create_session, revoke_session

router = APIRouter(prefix="/auth", tags=["auth"])
settings = get_settings()


@router.post("/google", response_model=SessionResponse)
async def google_login(request: GoogleAuthRequest, db: DbSession) -> SessionResponse:
    """
    Exchange a Google id_token for a session.

    Users are matched by Google subject first, then by verified email, so an
    account created before the subject was recorded gets linked.
    """
    try:
        # Checks signature, expiry and audience
        idinfo = google_id_token.verify_oauth2_token(
            request.id_token,
            google_requests.Request(),
            settings.google_client_id,
        )

        if idinfo.get("iss") not in ["accounts.google.com", "https://accounts.google.com"]:
            raise ValueError("Invalid issuer")

        google_id = idinfo["sub"]
        email = idinfo.get("email")
        # Unverified emails could allow account hijacking
        if not email or not idinfo.get("email_verified", False):
            raise ValueError("Google account has no verified email")

    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid Google id_token: {e}",
        )

    email = email.lower()
    result = await db.execute(
        select(User)
        .where(or_(User.google_id == google_id, User.email == email))
        .order_by(User.google_id.is_(None))
    )
    user = result.scalars().first()

    if user is None:
        user = User(email=email, google_id=google_id)
        db.add(user)

    user.google_id = google_id
    user.name = idinfo.get("name", email)
    user.avatar_url = idinfo.get("picture")
    user.last_login_at = datetime.now(timezone.utc)
    await db.flush()

    session = await create_session(db, user)
    await db.commit()
    await db.refresh(user)

    return SessionResponse(
        session_token=session.id,
        expires_at=session.expires_at,
        user=UserRead.model_validate(user),
    )


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(token: SessionToken, db: DbSession) -> None:
    """Revoke the bearer session. Logging out without one is a no-op."""
    if token:
        await revoke_session(db, token)
        await db.commit()


@router.get("/me", response_model=MeResponse)
async def get_me(identity: Identity) -> MeResponse:
    """Current user profile; user is null for anonymous or expired sessions."""
    if identity is None:
        return MeResponse(user=None)
    return MeResponse(user=UserRead.model_validate(identity))
