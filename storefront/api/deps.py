# storefront/api/deps.py
from fastapi import Depends, Header
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.data.models.session import UserSessionModel
from storefront.domain.enums import Role
from storefront.services.token_service import TokenService


def get_token(token: str = Header(default="", description="Session token from /auth/*/login")) -> str:
    return token


def require_seller(token: str = Depends(get_token), db: Session = Depends(get_db)) -> UserSessionModel:
    return TokenService(db).validate(token, Role.SELLER)


def require_session(token: str = Depends(get_token), db: Session = Depends(get_db)) -> UserSessionModel:
    return TokenService(db).validate_any(token)
