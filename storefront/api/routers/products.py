# storefront/api/routers/products.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_token
from storefront.data.database import get_db
from storefront.domain.enums import Category, ProductStatus
from storefront.domain.schemas import (
    MessageOut,
    ProductCreate,
    ProductOut,
    ProductPage,
    ProductSearchFilter,
    ProductUpdate,
    QuantityAdjust,
)
from storefront.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["products"])


def get_service(db: Session):
    return ProductService(db)


@router.post("/", response_model=ProductOut, status_code=201)
def add_product(payload: ProductCreate, token: str = Depends(get_token), db: Session = Depends(get_db)):
    return get_service(db).add_product(token, payload)


@router.get("/", response_model=List[ProductOut])
def get_all_products(db: Session = Depends(get_db)):
    return get_service(db).get_all_products()


@router.get("/search", response_model=ProductPage)
def search_products(filters: ProductSearchFilter = Depends(), db: Session = Depends(get_db)):
    return get_service(db).search(filters)


@router.get("/category/{category}", response_model=List[ProductOut])
def get_products_by_category(category: Category, db: Session = Depends(get_db)):
    return get_service(db).get_products_by_category(category)


@router.get("/status/{status}", response_model=List[ProductOut])
def get_products_by_status(status: ProductStatus, db: Session = Depends(get_db)):
    return get_service(db).get_products_by_status(status)


@router.get("/seller/{seller_id}", response_model=List[ProductOut])
def get_products_of_seller(seller_id: int, db: Session = Depends(get_db)):
    return get_service(db).get_products_of_seller(seller_id)


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    return get_service(db).get_product(product_id)


@router.put("/{product_id}", response_model=ProductOut)
def update_product(
    product_id: int,
    payload: ProductUpdate,
    token: str = Depends(get_token),
    db: Session = Depends(get_db),
):
    return get_service(db).update_product(token, product_id, payload)


@router.patch("/{product_id}/quantity", response_model=ProductOut)
def adjust_quantity(
    product_id: int,
    payload: QuantityAdjust,
    token: str = Depends(get_token),
    db: Session = Depends(get_db),
):
    return get_service(db).adjust_quantity(token, product_id, payload.delta)


@router.delete("/{product_id}", response_model=MessageOut)
def delete_product(product_id: int, token: str = Depends(get_token), db: Session = Depends(get_db)):
    return get_service(db).delete_product(token, product_id)
