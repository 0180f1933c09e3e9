# storefront/repos/review_repo.py
from sqlalchemy import select, func

from storefront.data.models.review import ReviewModel
from storefront.repos.base import Repo


class ReviewRepo(Repo):
    def get_review(self, review_id: int) -> ReviewModel | None:
        return self.db.get(ReviewModel, review_id)

    def get_by_customer_and_product(self, customer_id: int, product_id: int) -> ReviewModel | None:
        return self.db.execute(
            select(ReviewModel).where(
                ReviewModel.customer_id == customer_id,
                ReviewModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def _visible(self, product_id: int):
        return (
            ReviewModel.product_id == product_id,
            ReviewModel.is_approved.is_(True),
            ReviewModel.is_deleted.is_(False),
        )

    def rating_stats(self, product_id: int) -> tuple[float | None, int]:
        avg, count = self.db.execute(
            select(func.avg(ReviewModel.rating), func.count(ReviewModel.id)).where(*self._visible(product_id))
        ).one()
        return (float(avg) if avg is not None else None), int(count or 0)

    def list_visible(self, product_id: int, page: int, size: int) -> tuple[list[ReviewModel], int]:
        total = self.db.execute(
            select(func.count(ReviewModel.id)).where(*self._visible(product_id))
        ).scalar_one()
        stmt = (
            select(ReviewModel)
            .where(*self._visible(product_id))
            .order_by(ReviewModel.created_at.desc(), ReviewModel.id.desc())
            .offset(page * size)
            .limit(size)
        )
        return list(self.db.execute(stmt).scalars()), total
