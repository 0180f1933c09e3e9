# storefront/services/cart_service.py
from decimal import Decimal

from sqlalchemy.orm import Session

from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.customer import CustomerModel
from storefront.data.models.product import ProductModel
from storefront.domain.enums import ProductStatus, Role
from storefront.domain.errors import AccountNotFound, CartEmpty, CartNotFound, ItemNotFound, ProductUnavailable
from storefront.repos.cart_repo import CartRepo
from storefront.repos.customer_repo import CustomerRepo
from storefront.services.product_service import ProductService
from storefront.services.token_service import TokenService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

ZERO = Decimal("0.00")


class CartService:
    """
    Koszyk klienta, prosty podzial cqrs:
    commands (add, remove, clear) modyfikują stan
    query (get) tylko odczyt

    total jest aktualizowany przyrostowo przy każdej zmianie, nigdy
    nie jest liczony od nowa. Zmienia go tylko ten serwis.
    """

    def __init__(
        self,
        db: Session,
        token_service: TokenService | None = None,
        product_service: ProductService | None = None,
    ):
        self.repo = CartRepo(db)
        self.customers = CustomerRepo(db)
        self.tokens = token_service or TokenService(db)
        self.products = product_service or ProductService(db, self.tokens)

    #query - odczyt
    def get_cart(self, token: str) -> CartModel:
        cart = self._customer_cart(token)

        persisted = self.repo.get_cart(cart.id)
        if not persisted:
            raise CartNotFound(f"Cart not found with id {cart.id}")
        return persisted

    #commands
    def add_item(self, token: str, product_id: int, quantity: int = 1) -> CartModel:
        cart = self._customer_cart(token)

        if quantity != 1:
            logger.info(f"Cart {cart.id}: requested quantity {quantity}, adding a single unit")

        self.add_product_to_cart(cart.customer, product_id)
        self.repo.commit()
        self.repo.refresh(cart)
        return cart

    def remove_item(self, token: str, product_id: int) -> CartModel:
        cart = self._customer_cart(token)

        if not cart.items:
            raise CartEmpty("Cart is empty")

        item = next((i for i in cart.items if i.product_id == product_id), None)
        if not item:
            raise ItemNotFound("Product not added to cart")

        cart.total = cart.total - item.product.price
        item.quantity -= 1
        if item.quantity == 0:
            cart.items.remove(item)

        self.repo.commit()
        self.repo.refresh(cart)

        logger.info(f"Cart {cart.id}: removed one unit of product {product_id}, total {cart.total}")
        return cart

    def clear(self, token: str) -> CartModel:
        cart = self._customer_cart(token)

        if not cart.items:
            raise CartEmpty("Cart already empty")

        self.empty_cart(cart)
        self.repo.commit()
        self.repo.refresh(cart)
        return cart

    # =====================================================
    # wewnętrzne, używane przez wishlistę / zamówienia / katalog
    # =====================================================
    def add_product_to_cart(self, customer: CustomerModel, product_id: int) -> CartModel:
        """Adds one unit of the product to the customer's cart. Flushes, does not commit."""
        cart = customer.cart
        if cart is None:
            raise CartNotFound(f"Customer {customer.id} has no cart")

        product = self.products.get_product(product_id)
        if product.status == ProductStatus.OUTOFSTOCK.value or product.quantity <= 0:
            raise ProductUnavailable("Product not available in stock")

        item = self.repo.get_cart_item(cart.id, product.id)
        if item:
            item.quantity += 1
        else:
            cart.items.append(CartItemModel(product=product, quantity=1))

        cart.total = (cart.total or ZERO) + product.price
        self.repo.db.flush()

        logger.info(f"Cart {cart.id}: added product {product.id}, total {cart.total}")
        return cart

    def empty_cart(self, cart: CartModel) -> None:
        cart.items.clear()
        cart.total = ZERO
        self.repo.db.flush()
        logger.info(f"Cart {cart.id} emptied")

    def purge_product(self, product: ProductModel) -> None:
        #produkt znika z katalogu -> znika z koszyków razem ze swoją częścią totalu
        for item in self.repo.get_items_for_product(product.id):
            cart = item.cart
            cart.total = cart.total - product.price * item.quantity
            cart.items.remove(item)
            logger.info(f"Cart {cart.id}: product {product.id} removed from catalog, total {cart.total}")
        self.repo.db.flush()

    def reprice_product(self, product: ProductModel, old_price: Decimal) -> None:
        diff = product.price - old_price
        for item in self.repo.get_items_for_product(product.id):
            item.cart.total = item.cart.total + diff * item.quantity
        self.repo.db.flush()

    # =====================================================
    # helpers
    # =====================================================
    def _customer_cart(self, token: str) -> CartModel:
        session = self.tokens.validate(token, Role.CUSTOMER)

        customer = self.customers.get_customer(session.user_id)
        if not customer:
            raise AccountNotFound("Customer does not exist")
        if customer.cart is None:
            raise CartNotFound(f"Customer {customer.id} has no cart")
        return customer.cart
