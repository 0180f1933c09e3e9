# storefront/api/routers/orders.py
from datetime import date
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_token, require_seller, require_session
from storefront.data.database import get_db
from storefront.domain.schemas import CustomerOut, OrderCreate, OrderOut
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(db: Session):
    return OrderService(db)


@router.post("/", response_model=OrderOut, status_code=201)
def place_order(payload: OrderCreate, token: str = Depends(get_token), db: Session = Depends(get_db)):
    """
    Checkout całego koszyka.
    Rezerwuje towar, czyści koszyk i asynchronicznie wysyła powiadomienie.
    """
    return get_service(db).place_order(token, payload)


@router.get("/", response_model=List[OrderOut], dependencies=[Depends(require_seller)])
def get_all_orders(db: Session = Depends(get_db)):
    return get_service(db).get_all_orders()


@router.get("/mine", response_model=List[OrderOut])
def get_customer_orders(token: str = Depends(get_token), db: Session = Depends(get_db)):
    return get_service(db).get_customer_orders(token)


@router.get("/date/{day}", response_model=List[OrderOut], dependencies=[Depends(require_seller)])
def get_orders_by_date(day: date, db: Session = Depends(get_db)):
    return get_service(db).get_orders_by_date(day)


@router.get("/{order_id}", response_model=OrderOut, dependencies=[Depends(require_session)])
def get_order(order_id: int, db: Session = Depends(get_db)):
    return get_service(db).get_order_by_id(order_id)


@router.get("/{order_id}/customer", response_model=CustomerOut, dependencies=[Depends(require_seller)])
def get_customer_by_order_id(order_id: int, db: Session = Depends(get_db)):
    return get_service(db).get_customer_by_order_id(order_id)


@router.post("/{order_id}/cancel", response_model=OrderOut)
def cancel_order(order_id: int, token: str = Depends(get_token), db: Session = Depends(get_db)):
    return get_service(db).cancel_order(token, order_id)
