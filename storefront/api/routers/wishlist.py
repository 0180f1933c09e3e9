# storefront/api/routers/wishlist.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_token
from storefront.data.database import get_db
from storefront.domain.schemas import CartOut, MessageOut, WishlistItemOut, WishlistStatusOut
from storefront.services.wishlist_service import WishlistService

router = APIRouter(prefix="/wishlist", tags=["wishlist"])


def get_service(db: Session):
    return WishlistService(db)


@router.get("/", response_model=List[WishlistItemOut])
def list_wishlist(token: str = Depends(get_token), db: Session = Depends(get_db)):
    return [WishlistItemOut.from_item(i) for i in get_service(db).list(token)]


@router.post("/{product_id}", response_model=WishlistItemOut, status_code=201)
def add_to_wishlist(product_id: int, token: str = Depends(get_token), db: Session = Depends(get_db)):
    return WishlistItemOut.from_item(get_service(db).add(token, product_id))


@router.delete("/{product_id}", response_model=MessageOut)
def remove_from_wishlist(product_id: int, token: str = Depends(get_token), db: Session = Depends(get_db)):
    return get_service(db).remove(token, product_id)


@router.post("/{product_id}/move-to-cart", response_model=CartOut)
def move_to_cart(product_id: int, token: str = Depends(get_token), db: Session = Depends(get_db)):
    return get_service(db).move_to_cart(token, product_id)


@router.get("/{product_id}/status", response_model=WishlistStatusOut)
def wishlist_status(product_id: int, token: str = Depends(get_token), db: Session = Depends(get_db)):
    return WishlistStatusOut(product_id=product_id, wishlisted=get_service(db).is_wishlisted(token, product_id))
