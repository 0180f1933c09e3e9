# storefront/api/routers/auth.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_token
from storefront.data.database import get_db
from storefront.domain.schemas import (
    CustomerCredentials,
    MessageOut,
    SellerCredentials,
    SessionOut,
    TokenStatusOut,
)
from storefront.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


def get_service(db: Session):
    return AuthService(db)


@router.post("/customers/login", response_model=SessionOut)
def login_customer(payload: CustomerCredentials, db: Session = Depends(get_db)):
    return get_service(db).login_customer(payload)


@router.post("/customers/logout", response_model=MessageOut)
def logout_customer(token: str = Depends(get_token), db: Session = Depends(get_db)):
    return get_service(db).logout_customer(token)


@router.post("/sellers/login", response_model=SessionOut)
def login_seller(payload: SellerCredentials, db: Session = Depends(get_db)):
    return get_service(db).login_seller(payload)


@router.post("/sellers/logout", response_model=MessageOut)
def logout_seller(token: str = Depends(get_token), db: Session = Depends(get_db)):
    return get_service(db).logout_seller(token)


@router.get("/token", response_model=TokenStatusOut)
def check_token(token: str = Depends(get_token), db: Session = Depends(get_db)):
    """Is the token still valid, and whose is it."""
    session = get_service(db).check_token(token)
    return TokenStatusOut(valid=True, user_id=session.user_id, role=session.role, end_time=session.end_time)
