import logging
from urllib.parse import parse_qsl, urlencode, urlparse, urlunparse

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import RedirectResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from booksmart.auth import jwt_handler, passwords, redirects
from booksmart.auth.dependencies import find_user_by_email, get_current_user, get_optional_user
from booksmart.core import config
from booksmart.database import get_db
from booksmart.models.user import User
from booksmart.routes.errors import STORE_UNAVAILABLE_DETAIL
from booksmart.schemas.auth import (
    LoginRequest,
    RedirectTargetResponse,
    SessionResponse,
    SignupRequest,
    UserResponse,
)

router = APIRouter(tags=['auth'])

logger = logging.getLogger(__name__)

CALLBACK_FAILED_MESSAGE = 'Authentication failed. Please sign in again.'
CALLBACK_UNAVAILABLE_MESSAGE = 'Sign-in is temporarily unavailable. Please try again.'
DUPLICATE_ACCOUNT_MESSAGE = 'An account with this email already exists.'


def auth_page_location(path: str, redirect: str | None) -> str:
    return redirects.with_redirect(path, redirect) if redirect else path


def start_session(user: User, location: str) -> SessionResponse:
    token = jwt_handler.create_access_token(subject=user.email, name=user.name)
    return SessionResponse(
        access_token=token,
        token_type='bearer',
        redirect_to=redirects.resolve_redirect(location, is_authenticated=True),
    )


def frontend_url(location: str, extra_query: dict | None = None) -> str:
    parsed = urlparse(f'{config.FRONTEND_URL}{location}')
    query = dict(parse_qsl(parsed.query))
    query.update(extra_query or {})
    return urlunparse(parsed._replace(query=urlencode(query)))


@router.post('/signup', response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
def signup(
    data: SignupRequest,
    redirect: str | None = Query(default=None),
    db: Session = Depends(get_db),
):
    try:
        if find_user_by_email(db, data.email) is not None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=DUPLICATE_ACCOUNT_MESSAGE,
            )

        user = User(
            email=data.email,
            name=data.name,
            hashed_password=passwords.hash_password(data.password),
        )
        db.add(user)
        db.commit()
        db.refresh(user)
    except IntegrityError as exc:
        db.rollback()
        logger.warning('Sign-up raced an existing account for %s', data.email)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=DUPLICATE_ACCOUNT_MESSAGE,
        ) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Sign-up failed for %s', data.email)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=STORE_UNAVAILABLE_DETAIL,
        ) from exc

    logger.info('New account created for %s', user.email)
    return start_session(user, auth_page_location(redirects.SIGNUP_PATH, redirect))


@router.post('/login', response_model=SessionResponse)
def login(
    data: LoginRequest,
    redirect: str | None = Query(default=None),
    db: Session = Depends(get_db),
):
    try:
        user = find_user_by_email(db, data.email)
    except SQLAlchemyError as exc:
        logger.exception('Account lookup failed for %s', data.email)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=STORE_UNAVAILABLE_DETAIL,
        ) from exc

    if user is None or not passwords.verify_password(data.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail='Invalid email or password.',
        )

    return start_session(user, auth_page_location(redirects.LOGIN_PATH, redirect))


@router.get('/callback')
def callback(
    token: str | None = Query(default=None),
    redirect: str | None = Query(default=None),
    db: Session = Depends(get_db),
):
    email = jwt_handler.read_subject(token)
    try:
        user = find_user_by_email(db, email) if email else None
    except SQLAlchemyError:
        logger.exception('Account lookup failed during sign-in callback')
        return RedirectResponse(
            url=frontend_url(redirects.error_location(CALLBACK_UNAVAILABLE_MESSAGE)),
            status_code=status.HTTP_302_FOUND,
        )

    if user is None:
        logger.warning('Rejected sign-in callback with an invalid or unknown token')
        return RedirectResponse(
            url=frontend_url(redirects.error_location(CALLBACK_FAILED_MESSAGE)),
            status_code=status.HTTP_302_FOUND,
        )

    location = redirects.resolve_redirect(
        auth_page_location(redirects.CALLBACK_PATH, redirect),
        is_authenticated=True,
    )
    return RedirectResponse(
        url=frontend_url(location, {'access_token': token, 'token_type': 'bearer'}),
        status_code=status.HTTP_302_FOUND,
    )


@router.get('/redirect', response_model=RedirectTargetResponse)
def redirect_target(
    location: str = Query(default=redirects.HOME_PATH),
    current_user: User | None = Depends(get_optional_user),
):
    return RedirectTargetResponse(
        redirect_to=redirects.resolve_redirect(location, is_authenticated=current_user is not None),
    )


@router.get('/me', response_model=UserResponse)
def me(current_user: User = Depends(get_current_user)):
    return UserResponse(email=current_user.email, name=current_user.name)
