"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from taskhub.application.use_cases.messages import MessageDispatcher
from taskhub.domain.entities import EventCatalog, User
from taskhub.domain.exceptions import AuthenticationError
from taskhub.infrastructure.database import SessionLocal, get_db
from taskhub.infrastructure.notifications import NotificationPublisher
from taskhub.infrastructure.repositories import UserRepository
from taskhub.infrastructure.security import user_id_from_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")


def resolve_current_user(token: str, db: Session) -> User:
    """Resolve the authenticated user for the provided token."""

    try:
        user_id = user_id_from_token(token)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc

    user = UserRepository(db).get(user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the provided token."""

    return resolve_current_user(token, db)


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the authenticated user is active."""

    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Inactive user",
        )
    return current_user


def require_admin(current_user: User = Depends(get_current_active_user)) -> User:
    """Ensure the authenticated user has administrator privileges."""

    if not current_user.is_admin():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return current_user


def get_event_catalog(request: Request) -> EventCatalog:
    return request.app.state.event_catalog


def get_notification_publisher(request: Request) -> NotificationPublisher:
    return request.app.state.notification_publisher


def get_message_dispatcher(
    db: Session = Depends(get_db),
    catalog: EventCatalog = Depends(get_event_catalog),
    publisher: NotificationPublisher = Depends(get_notification_publisher),
) -> MessageDispatcher:
    """Return a dispatcher bound to the request's database session."""

    return MessageDispatcher(db, catalog, publisher)


def authenticate_live_token(token: str) -> int:
    """Return the id of the active user owning ``token`` for the live channel."""

    try:
        user_id = user_id_from_token(token)
    except ValueError as exc:
        raise AuthenticationError(str(exc)) from exc

    session = SessionLocal()
    try:
        user = UserRepository(session).get(user_id)
    finally:
        session.close()

    if user is None or not user.is_active:
        raise AuthenticationError("Unknown or inactive user")
    return user_id
