# storefront/repos/wishlist_repo.py
from sqlalchemy import select

from storefront.data.models.wishlist import WishlistModel, WishlistItemModel
from storefront.repos.base import Repo


class WishlistRepo(Repo):
    def get_by_customer(self, customer_id: int) -> WishlistModel | None:
        return self.db.execute(
            select(WishlistModel).where(WishlistModel.customer_id == customer_id)
        ).scalar_one_or_none()

    def get_item(self, wishlist_id: int, product_id: int) -> WishlistItemModel | None:
        return self.db.execute(
            select(WishlistItemModel).where(
                WishlistItemModel.wishlist_id == wishlist_id,
                WishlistItemModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def list_items(self, wishlist_id: int) -> list[WishlistItemModel]:
        #najnowsze na górze
        stmt = (
            select(WishlistItemModel)
            .where(WishlistItemModel.wishlist_id == wishlist_id)
            .order_by(WishlistItemModel.added_at.desc(), WishlistItemModel.id.desc())
        )
        return list(self.db.execute(stmt).scalars())
