# storefront/api/routers/customers.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_token
from storefront.data.database import get_db
from storefront.domain.schemas import (
    AddressIn,
    CreditCardIn,
    CustomerCreate,
    CustomerCredentials,
    CustomerOut,
    CustomerUpdate,
    MessageOut,
)
from storefront.services.customer_service import CustomerService

router = APIRouter(prefix="/customers", tags=["customers"])


def get_service(db: Session):
    return CustomerService(db)


@router.post("/", response_model=CustomerOut, status_code=201)
def register_customer(payload: CustomerCreate, db: Session = Depends(get_db)):
    return get_service(db).register(payload)


@router.get("/", response_model=List[CustomerOut])
def get_all_customers(token: str = Depends(get_token), db: Session = Depends(get_db)):
    """Seller only."""
    return get_service(db).get_all_customers(token)


@router.get("/current", response_model=CustomerOut)
def get_logged_in_customer(token: str = Depends(get_token), db: Session = Depends(get_db)):
    return get_service(db).get_logged_in_customer(token)


@router.put("/", response_model=CustomerOut)
def update_customer(payload: CustomerUpdate, token: str = Depends(get_token), db: Session = Depends(get_db)):
    return get_service(db).update_customer(token, payload)


@router.put("/password", response_model=MessageOut)
def update_password(payload: CustomerCredentials, token: str = Depends(get_token), db: Session = Depends(get_db)):
    return get_service(db).update_password(token, payload)


@router.put("/addresses/{address_type}", response_model=CustomerOut)
def update_address(
    address_type: str,
    payload: AddressIn,
    token: str = Depends(get_token),
    db: Session = Depends(get_db),
):
    return get_service(db).update_address(token, address_type, payload)


@router.delete("/addresses/{address_type}", response_model=CustomerOut)
def delete_address(address_type: str, token: str = Depends(get_token), db: Session = Depends(get_db)):
    return get_service(db).delete_address(token, address_type)


@router.put("/card", response_model=CustomerOut)
def update_credit_card(payload: CreditCardIn, token: str = Depends(get_token), db: Session = Depends(get_db)):
    return get_service(db).update_credit_card(token, payload)


@router.delete("/", response_model=MessageOut)
def delete_customer(payload: CustomerCredentials, token: str = Depends(get_token), db: Session = Depends(get_db)):
    return get_service(db).delete_customer(token, payload)
