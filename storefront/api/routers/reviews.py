# storefront/api/routers/reviews.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.api.deps import get_token
from storefront.data.database import get_db
from storefront.domain.schemas import MessageOut, ReviewIn, ReviewOut, ReviewPage, ReviewSummary, ReviewUpdate
from storefront.services.review_service import ReviewService

router = APIRouter(prefix="/reviews", tags=["reviews"])


def get_service(db: Session):
    return ReviewService(db)


@router.post("/", response_model=ReviewOut, status_code=201)
def add_review(payload: ReviewIn, token: str = Depends(get_token), db: Session = Depends(get_db)):
    return get_service(db).add_review(token, payload)


@router.put("/{review_id}", response_model=ReviewOut)
def update_review(
    review_id: int,
    payload: ReviewUpdate,
    token: str = Depends(get_token),
    db: Session = Depends(get_db),
):
    return get_service(db).update_review(token, review_id, payload)


@router.delete("/{review_id}", response_model=MessageOut)
def delete_review(review_id: int, token: str = Depends(get_token), db: Session = Depends(get_db)):
    return get_service(db).delete_review(token, review_id)


@router.post("/{review_id}/approve", response_model=ReviewOut)
def approve_review(review_id: int, token: str = Depends(get_token), db: Session = Depends(get_db)):
    return get_service(db).approve_review(token, review_id)


@router.get("/product/{product_id}", response_model=ReviewPage)
def get_product_reviews(
    product_id: int,
    page: int = Query(0, ge=0),
    size: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    return get_service(db).get_product_reviews(product_id, page, size)


@router.get("/product/{product_id}/rating", response_model=ReviewSummary)
def get_product_rating(product_id: int, db: Session = Depends(get_db)):
    return get_service(db).calculate_product_rating(product_id)
