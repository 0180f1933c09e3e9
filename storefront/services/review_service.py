# storefront/services/review_service.py
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.data.models.review import ReviewModel
from storefront.domain.enums import Role
from storefront.domain.errors import DuplicateReview, InvalidRating, NotOwner, ReviewNotFound
from storefront.domain.schemas import MessageOut, ReviewIn, ReviewOut, ReviewPage, ReviewSummary, ReviewUpdate
from storefront.repos.review_repo import ReviewRepo
from storefront.services.customer_service import CustomerService
from storefront.services.product_service import ProductService
from storefront.services.token_service import TokenService
from storefront.utils.security import now_utc
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

MIN_RATING = 1
MAX_RATING = 5


class ReviewService:
    """
    Opinie o produktach.

    Każda zmiana (dodanie, edycja, usunięcie, akceptacja) przelicza
    average_rating i review_count produktu. Do średniej wchodzą tylko
    opinie zaakceptowane i nieusunięte.
    """

    def __init__(self, db: Session, token_service: TokenService | None = None):
        self.repo = ReviewRepo(db)
        self.tokens = token_service or TokenService(db)
        self.customers = CustomerService(db, self.tokens)
        self.products = ProductService(db, self.tokens)

    #commands
    def add_review(self, token: str, payload: ReviewIn) -> ReviewModel:
        customer = self.customers.get_logged_in_customer(token)
        product = self.products.get_product(payload.product_id)
        self._check_rating(payload.rating)

        review = self.repo.get_by_customer_and_product(customer.id, product.id)
        if review and not review.is_deleted:
            raise DuplicateReview("You have already submitted a review for this product")

        now = now_utc()
        if review:
            #usunięta wcześniej -> wskrzeszamy ten sam wiersz (unique customer+product)
            review.rating = payload.rating
            review.title = payload.title
            review.comment = payload.comment
            review.is_deleted = False
            review.is_approved = False
            review.helpful_count = 0
            review.created_at = now
            review.updated_at = now
        else:
            review = ReviewModel(
                rating=payload.rating,
                title=payload.title,
                comment=payload.comment,
                customer_id=customer.id,
                product=product,
                is_deleted=False,
                is_approved=False,
                helpful_count=0,
                created_at=now,
                updated_at=now,
            )
            self.repo.add(review)

        self._recalculate(product)
        self.repo.commit()
        self.repo.refresh(review)

        logger.info(f"Review {review.id} added by customer {customer.id} for product {product.id}")
        return review

    def update_review(self, token: str, review_id: int, payload: ReviewUpdate) -> ReviewModel:
        customer = self.customers.get_logged_in_customer(token)
        review = self._own_review(customer.id, review_id, "update")
        self._check_rating(payload.rating)

        review.rating = payload.rating
        review.title = payload.title
        review.comment = payload.comment
        review.updated_at = now_utc()

        self._recalculate(review.product)
        self.repo.commit()
        self.repo.refresh(review)

        logger.info(f"Review {review.id} updated")
        return review

    def delete_review(self, token: str, review_id: int) -> MessageOut:
        customer = self.customers.get_logged_in_customer(token)
        review = self._own_review(customer.id, review_id, "delete")

        review.is_deleted = True
        review.updated_at = now_utc()

        self._recalculate(review.product)
        self.repo.commit()

        logger.info(f"Review {review_id} deleted")
        return MessageOut(message="Review deleted successfully")

    def approve_review(self, token: str, review_id: int) -> ReviewModel:
        self.tokens.validate(token, Role.SELLER)
        review = self._visible_review(review_id)

        review.is_approved = True
        review.updated_at = now_utc()

        self._recalculate(review.product)
        self.repo.commit()
        self.repo.refresh(review)

        logger.info(f"Review {review.id} approved")
        return review

    #query - odczyt
    def get_product_reviews(self, product_id: int, page: int = 0, size: int = 10) -> ReviewPage:
        self.products.get_product(product_id)
        page, size = max(page, 0), max(size, 1)

        reviews, total = self.repo.list_visible(product_id, page, size)
        return ReviewPage(
            content=[ReviewOut.model_validate(r) for r in reviews],
            total_elements=total,
            current_page=page,
            page_size=size,
        )

    def calculate_product_rating(self, product_id: int) -> ReviewSummary:
        self.products.get_product(product_id)

        average, count = self.repo.rating_stats(product_id)
        return ReviewSummary(
            average_rating=average if average is not None else 0.0,
            total_reviews=count,
            product_id=product_id,
        )

    # =====================================================
    # helpers
    # =====================================================
    def _recalculate(self, product: ProductModel) -> None:
        # autoflush wyłączony, agregat musi widzieć bieżące zmiany
        self.repo.db.flush()
        average, count = self.repo.rating_stats(product.id)

        product.average_rating = average if average is not None else 0.0
        product.review_count = count

    def _visible_review(self, review_id: int) -> ReviewModel:
        review = self.repo.get_review(review_id)
        if not review or review.is_deleted:
            raise ReviewNotFound(f"Review not found with id: {review_id}")
        return review

    def _own_review(self, customer_id: int, review_id: int, action: str) -> ReviewModel:
        review = self._visible_review(review_id)
        if review.customer_id != customer_id:
            raise NotOwner(f"You can only {action} your own reviews")
        return review

    @staticmethod
    def _check_rating(rating: int) -> None:
        if rating < MIN_RATING or rating > MAX_RATING:
            raise InvalidRating(f"Rating must be between {MIN_RATING} and {MAX_RATING}")
