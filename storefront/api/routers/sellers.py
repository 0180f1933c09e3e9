# storefront/api/routers/sellers.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_token
from storefront.data.database import get_db
from storefront.domain.schemas import MessageOut, SellerCreate, SellerCredentials, SellerOut, SellerUpdate
from storefront.services.seller_service import SellerService

router = APIRouter(prefix="/sellers", tags=["sellers"])


def get_service(db: Session):
    return SellerService(db)


@router.post("/", response_model=SellerOut, status_code=201)
def register_seller(payload: SellerCreate, db: Session = Depends(get_db)):
    return get_service(db).register(payload)


@router.get("/", response_model=List[SellerOut])
def get_all_sellers(db: Session = Depends(get_db)):
    return get_service(db).get_all_sellers()


@router.get("/current", response_model=SellerOut)
def get_logged_in_seller(token: str = Depends(get_token), db: Session = Depends(get_db)):
    return get_service(db).get_logged_in_seller(token)


@router.get("/mobile/{mobile}", response_model=SellerOut)
def get_seller_by_mobile(mobile: str, token: str = Depends(get_token), db: Session = Depends(get_db)):
    return get_service(db).get_seller_by_mobile(token, mobile)


@router.get("/{seller_id}", response_model=SellerOut)
def get_seller_by_id(seller_id: int, db: Session = Depends(get_db)):
    return get_service(db).get_seller_by_id(seller_id)


@router.put("/", response_model=SellerOut)
def update_seller(payload: SellerUpdate, token: str = Depends(get_token), db: Session = Depends(get_db)):
    return get_service(db).update_seller(token, payload)


@router.put("/mobile", response_model=SellerOut)
def update_mobile(payload: SellerCredentials, token: str = Depends(get_token), db: Session = Depends(get_db)):
    return get_service(db).update_mobile(token, payload)


@router.put("/password", response_model=MessageOut)
def update_password(payload: SellerCredentials, token: str = Depends(get_token), db: Session = Depends(get_db)):
    return get_service(db).update_password(token, payload)


@router.delete("/{seller_id}", response_model=MessageOut)
def delete_seller(seller_id: int, token: str = Depends(get_token), db: Session = Depends(get_db)):
    return get_service(db).delete_seller(token, seller_id)
