import pytest

from storefront.domain.errors import (
    DuplicateReview,
    InvalidRating,
    InvalidToken,
    NotOwner,
    ProductNotFound,
    ReviewNotFound,
)
from storefront.domain.schemas import ReviewIn, ReviewUpdate
from storefront.services.review_service import ReviewService

COMMENT = "Solid product, would buy again."


def _review(product_id, rating=4, title="Nice"):
    return ReviewIn(product_id=product_id, rating=rating, title=title, comment=COMMENT)


class TestAddReview:
    def test_pending_review_does_not_count(self, db, make_product, customer_token):
        product = make_product()
        svc = ReviewService(db)

        review = svc.add_review(customer_token, _review(product.id))

        assert review.is_approved is False
        summary = svc.calculate_product_rating(product.id)
        assert summary.average_rating == 0.0
        assert summary.total_reviews == 0
        assert product.review_count == 0

    def test_duplicate(self, db, make_product, customer_token):
        product = make_product()
        svc = ReviewService(db)
        svc.add_review(customer_token, _review(product.id))

        with pytest.raises(DuplicateReview):
            svc.add_review(customer_token, _review(product.id, rating=5))

    @pytest.mark.parametrize("rating", [0, 6, -1])
    def test_rating_out_of_range(self, db, make_product, customer_token, rating):
        product = make_product()
        with pytest.raises(InvalidRating):
            ReviewService(db).add_review(customer_token, _review(product.id, rating=rating))

    def test_unknown_product(self, db, customer_token):
        with pytest.raises(ProductNotFound):
            ReviewService(db).add_review(customer_token, _review(99))

    def test_review_again_after_delete(self, db, make_product, customer_token):
        product = make_product()
        svc = ReviewService(db)
        first = svc.add_review(customer_token, _review(product.id, rating=2))
        first_id = first.id
        svc.delete_review(customer_token, first_id)

        again = svc.add_review(customer_token, _review(product.id, rating=5, title="Changed mind"))

        assert again.id == first_id
        assert again.rating == 5
        assert again.is_deleted is False
        assert again.is_approved is False


class TestModeration:
    def test_approval_updates_aggregate(self, db, make_product, customer_token, other_customer_token, seller_token):
        product = make_product()
        svc = ReviewService(db)
        a = svc.add_review(customer_token, _review(product.id, rating=4))
        b = svc.add_review(other_customer_token, _review(product.id, rating=5))

        svc.approve_review(seller_token, a.id)
        assert product.average_rating == 4.0
        assert product.review_count == 1

        svc.approve_review(seller_token, b.id)
        assert product.average_rating == 4.5
        assert product.review_count == 2

        summary = svc.calculate_product_rating(product.id)
        assert (summary.average_rating, summary.total_reviews) == (4.5, 2)

    def test_only_seller_approves(self, db, make_product, customer_token):
        product = make_product()
        svc = ReviewService(db)
        review = svc.add_review(customer_token, _review(product.id))

        with pytest.raises(InvalidToken):
            svc.approve_review(customer_token, review.id)

    def test_update_and_delete_recompute(self, db, make_product, customer_token, seller_token):
        product = make_product()
        svc = ReviewService(db)
        review = svc.add_review(customer_token, _review(product.id, rating=2))
        svc.approve_review(seller_token, review.id)

        svc.update_review(customer_token, review.id, ReviewUpdate(rating=5, title="Better", comment=COMMENT))
        assert product.average_rating == 5.0

        svc.delete_review(customer_token, review.id)
        assert product.average_rating == 0.0
        assert product.review_count == 0
        with pytest.raises(ReviewNotFound):
            svc.update_review(customer_token, review.id, ReviewUpdate(rating=3, title="Again", comment=COMMENT))

    def test_cannot_touch_other_customers_review(self, db, make_product, customer_token, other_customer_token):
        product = make_product()
        svc = ReviewService(db)
        review = svc.add_review(customer_token, _review(product.id))

        with pytest.raises(NotOwner):
            svc.update_review(other_customer_token, review.id, ReviewUpdate(rating=1, title="Mine?", comment=COMMENT))
        with pytest.raises(NotOwner):
            svc.delete_review(other_customer_token, review.id)


class TestListing:
    def test_only_approved_reviews_newest_first(self, db, make_product, customer_token, other_customer_token, seller_token):
        product = make_product()
        svc = ReviewService(db)
        older = svc.add_review(customer_token, _review(product.id, title="Older"))
        newer = svc.add_review(other_customer_token, _review(product.id, title="Newer"))
        svc.approve_review(seller_token, older.id)

        page = svc.get_product_reviews(product.id)
        assert [r.title for r in page.content] == ["Older"]

        svc.approve_review(seller_token, newer.id)
        page = svc.get_product_reviews(product.id, page=0, size=1)
        assert page.total_elements == 2
        assert [r.title for r in page.content] == ["Newer"]
