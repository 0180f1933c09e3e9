# storefront/api/routers/carts.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_token
from storefront.data.database import get_db
from storefront.domain.schemas import CartItemIn, CartOut
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db)


@router.get("/", response_model=CartOut)
def get_cart(token: str = Depends(get_token), db: Session = Depends(get_db)):
    return get_service(db).get_cart(token)


@router.post("/items", response_model=CartOut)
def add_item(payload: CartItemIn, token: str = Depends(get_token), db: Session = Depends(get_db)):
    return get_service(db).add_item(token, payload.product_id, payload.quantity)


@router.delete("/items/{product_id}", response_model=CartOut)
def remove_item(product_id: int, token: str = Depends(get_token), db: Session = Depends(get_db)):
    """Takes one unit off; the line disappears at zero."""
    return get_service(db).remove_item(token, product_id)


@router.delete("/", response_model=CartOut)
def clear_cart(token: str = Depends(get_token), db: Session = Depends(get_db)):
    return get_service(db).clear(token)
