# storefront/services/wishlist_service.py
from sqlalchemy.orm import Session

from storefront.data.models.cart import CartModel
from storefront.data.models.customer import CustomerModel
from storefront.data.models.wishlist import WishlistItemModel, WishlistModel
from storefront.domain.errors import DuplicateWishlistItem, ItemNotFound
from storefront.domain.schemas import MessageOut
from storefront.repos.wishlist_repo import WishlistRepo
from storefront.services.cart_service import CartService
from storefront.services.customer_service import CustomerService
from storefront.services.product_service import ProductService
from storefront.services.token_service import TokenService
from storefront.utils.security import now_utc
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class WishlistService:
    def __init__(self, db: Session, token_service: TokenService | None = None):
        self.repo = WishlistRepo(db)
        self.tokens = token_service or TokenService(db)
        self.customers = CustomerService(db, self.tokens)
        self.products = ProductService(db, self.tokens)
        self.carts = CartService(db, self.tokens, self.products)

    #query - odczyt
    def list(self, token: str) -> list[WishlistItemModel]:
        _, wishlist = self._customer_wishlist(token)
        return self.repo.list_items(wishlist.id)

    def is_wishlisted(self, token: str, product_id: int) -> bool:
        _, wishlist = self._customer_wishlist(token)
        return self.repo.get_item(wishlist.id, product_id) is not None

    #commands
    def add(self, token: str, product_id: int) -> WishlistItemModel:
        _, wishlist = self._customer_wishlist(token)

        if self.repo.get_item(wishlist.id, product_id):
            raise DuplicateWishlistItem("Product is already in your wishlist")
        product = self.products.get_product(product_id)

        item = WishlistItemModel(wishlist=wishlist, product=product, added_at=now_utc())
        self.repo.add(item)
        self.repo.commit()
        self.repo.refresh(item)

        logger.info(f"Wishlist {wishlist.id}: added product {product_id}")
        return item

    def remove(self, token: str, product_id: int) -> MessageOut:
        _, wishlist = self._customer_wishlist(token)

        item = self._item(wishlist, product_id)
        self.repo.delete(item)
        self.repo.commit()

        logger.info(f"Wishlist {wishlist.id}: removed product {product_id}")
        return MessageOut(message="Product removed from wishlist")

    def move_to_cart(self, token: str, product_id: int) -> CartModel:
        customer, wishlist = self._customer_wishlist(token)
        item = self._item(wishlist, product_id)

        # najpierw koszyk: jak produktu brak w magazynie, wishlista zostaje nietknięta
        cart = self.carts.add_product_to_cart(customer, product_id)
        self.repo.delete(item)
        self.repo.commit()
        self.repo.refresh(cart)

        logger.info(f"Wishlist {wishlist.id}: product {product_id} moved to cart {cart.id}")
        return cart

    # =====================================================
    # helpers
    # =====================================================
    def _customer_wishlist(self, token: str) -> tuple[CustomerModel, WishlistModel]:
        customer = self.customers.get_logged_in_customer(token)

        if customer.wishlist is None:
            # konta sprzed wishlisty
            customer.wishlist = WishlistModel()
            self.repo.db.flush()
        return customer, customer.wishlist

    def _item(self, wishlist: WishlistModel, product_id: int) -> WishlistItemModel:
        item = self.repo.get_item(wishlist.id, product_id)
        if not item:
            raise ItemNotFound(f"Product with id {product_id} is not in your wishlist")
        return item
