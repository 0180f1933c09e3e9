# storefront/repos/cart_repo.py
from sqlalchemy import select

from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.repos.base import Repo


class CartRepo(Repo):
    def get_cart(self, cart_id: int) -> CartModel | None:
        return self.db.get(CartModel, cart_id)

    def get_cart_by_customer(self, customer_id: int) -> CartModel | None:
        return self.db.execute(
            select(CartModel).where(CartModel.customer_id == customer_id)
        ).scalar_one_or_none()

    def get_cart_item(self, cart_id: int, product_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def get_items_for_product(self, product_id: int) -> list[CartItemModel]:
        return list(
            self.db.execute(
                select(CartItemModel).where(CartItemModel.product_id == product_id)
            ).scalars()
        )
