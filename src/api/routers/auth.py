"""Login, signup and session endpoints backed by the identity service."""
import logging

import httpx
from fastapi import APIRouter, Depends, HTTPException, Response, status

from api.dependencies import get_current_user, get_identity_client, get_settings
from core.auth import create_session_token
from core.config import Settings
from schemas.auth import LoginRequest, LoginResponse, SessionUser, SignupRequest
from services import identity_service
from services.exceptions import EmailAlreadyRegisteredError, IdentityServiceError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

# Same message for every sign-in failure so the response does not reveal whether the
# email has an account
INVALID_CREDENTIALS = "Invalid email or password"


@router.post("/login", response_model=LoginResponse)
async def login(
    data: LoginRequest,
    response: Response,
    client: httpx.AsyncClient = Depends(get_identity_client),
    settings: Settings = Depends(get_settings),
) -> LoginResponse:
    """Verify credentials and issue a session token (also set as an HttpOnly cookie)."""
    identity = await identity_service.sign_in_with_password(client, data.email, data.password)
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=INVALID_CREDENTIALS,
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = create_session_token(identity.id, identity.email, settings)
    response.set_cookie(
        settings.session_cookie_name,
        token,
        max_age=settings.session_max_age,
        httponly=True,
        samesite="lax",
        secure=not settings.dev_mode,
    )
    return LoginResponse(token=token, user=SessionUser(user_id=identity.id, email=identity.email))


@router.post("/signup", response_model=SessionUser, status_code=201)
async def signup(
    data: SignupRequest,
    client: httpx.AsyncClient = Depends(get_identity_client),
) -> SessionUser:
    """Create an account. The user signs in separately afterwards."""
    try:
        identity = await identity_service.sign_up(client, data.email, data.password)
    except EmailAlreadyRegisteredError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except IdentityServiceError:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Signup failed. Please try again later.",
        )
    logger.info("Created account %s", identity.id)
    return SessionUser(user_id=identity.id, email=identity.email)


@router.post("/logout", status_code=204)
async def logout(
    response: Response,
    settings: Settings = Depends(get_settings),
) -> None:
    """Clear the session cookie. Bearer tokens simply expire."""
    response.delete_cookie(settings.session_cookie_name)


@router.get("/session", response_model=SessionUser)
async def get_session(current_user: SessionUser = Depends(get_current_user)) -> SessionUser:
    """Return the identity carried by the current session."""
    return current_user
