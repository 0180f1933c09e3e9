# storefront/services/order_service.py
from datetime import date

from sqlalchemy.orm import Session

from storefront.data.models.customer import CustomerModel
from storefront.data.models.order import OrderItemModel, OrderModel
from storefront.domain.enums import OrderStatus
from storefront.domain.errors import (
    AccountNotFound,
    AddressNotFound,
    AlreadyCancelled,
    EmptyCart,
    NotOwner,
    OrderNotFound,
    StorefrontError,
)
from storefront.domain.schemas import OrderCreate
from storefront.repos.order_repo import OrderRepo
from storefront.services.cart_service import CartService
from storefront.services.customer_service import CustomerService
from storefront.services.notification_service import NotificationService
from storefront.services.product_service import ProductService
from storefront.services.token_service import TokenService
from storefront.utils.security import now_utc
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Serwis odpowiedzialny za domenę zamówień.

    place_order: koszyk -> zamówienie w jednej transakcji
        1. rezerwuje towar (warunkowy UPDATE na każdą pozycję)
        2. zapisuje snapshot pozycji i totalu koszyka
        3. czyści koszyk
        4. wysyła powiadomienie (async)
    cancel_order: oddaje towar do magazynu, CANCELLED jest stanem końcowym
    """

    def __init__(
        self,
        db: Session,
        token_service: TokenService | None = None,
        notification_service: NotificationService | None = None,
    ):
        self.repo = OrderRepo(db)
        self.tokens = token_service or TokenService(db)
        self.customers = CustomerService(db, self.tokens)
        self.products = ProductService(db, self.tokens)
        self.carts = CartService(db, self.tokens, self.products)
        self.notification_service = notification_service or NotificationService()

    #commands
    def place_order(self, token: str, payload: OrderCreate) -> OrderModel:
        customer = self.customers.get_logged_in_customer(token)
        cart = customer.cart

        if cart is None or not cart.items:
            raise EmptyCart("Cart is empty. Add products before placing an order")
        if customer.address_of_type(payload.address_type) is None:
            raise AddressNotFound(f"No address saved with type '{payload.address_type}'")

        lines = [
            OrderItemModel(
                product_id=item.product_id,
                product_name=item.product.name,
                unit_price=item.product.price,
                quantity=item.quantity,
            )
            for item in cart.items
        ]
        total = cart.total

        try:
            for line in lines:
                self.products.decrement_stock(line.product_id, line.quantity)
        except StorefrontError:
            self.repo.rollback()
            raise

        status = self._payment_status(customer, payload.card_number)
        now = now_utc()
        order = OrderModel(
            customer=customer,
            status=status.value,
            total=total,
            address_type=payload.address_type,
            order_date=now.date(),
            created_at=now,
            items=lines,
        )
        self.repo.add(order)
        self.carts.empty_cart(cart)
        self.repo.commit()
        self.repo.refresh(order)

        logger.info(f"Order {order.id} placed by customer {customer.id}: {status.value}, total {order.total}")
        self.notification_service.send_order_notification(customer.id, order.id, order.status)
        return order

    def cancel_order(self, token: str, order_id: int) -> OrderModel:
        customer = self.customers.get_logged_in_customer(token)
        order = self.get_order_by_id(order_id)

        if order.customer_id != customer.id:
            raise NotOwner("Order does not belong to the logged in customer")
        if order.status == OrderStatus.CANCELLED.value:
            raise AlreadyCancelled(f"Order {order.id} is already cancelled")

        # warunkowy UPDATE, towar wraca do magazynu tylko raz
        if not self.repo.mark_cancelled(order.id):
            self.repo.rollback()
            raise AlreadyCancelled(f"Order {order.id} is already cancelled")

        for line in order.items:
            if not self.products.restock(line.product_id, line.quantity):
                logger.warning(f"Order {order.id}: product {line.product_id} no longer exists, not restocked")

        self.repo.commit()
        self.repo.refresh(order)

        logger.info(f"Order {order.id} cancelled by customer {customer.id}")
        self.notification_service.send_order_notification(customer.id, order.id, order.status)
        return order

    #query - odczyt
    def get_order_by_id(self, order_id: int) -> OrderModel:
        order = self.repo.get_order(order_id)
        if not order:
            raise OrderNotFound(f"Order does not exist with id {order_id}")
        return order

    def get_all_orders(self) -> list[OrderModel]:
        orders = self.repo.list_orders()
        if not orders:
            raise OrderNotFound("No orders exist")
        return orders

    def get_orders_by_date(self, day: date) -> list[OrderModel]:
        orders = self.repo.list_by_date(day)
        if not orders:
            raise OrderNotFound(f"No orders placed on {day.isoformat()}")
        return orders

    def get_customer_by_order_id(self, order_id: int) -> CustomerModel:
        order = self.get_order_by_id(order_id)
        if order.customer is None:
            raise AccountNotFound(f"Customer of order {order_id} no longer exists")
        return order.customer

    def get_customer_orders(self, token: str) -> list[OrderModel]:
        customer = self.customers.get_logged_in_customer(token)

        orders = self.repo.list_by_customer(customer.id)
        if not orders:
            raise OrderNotFound("No orders found for the logged in customer")
        return orders

    # =====================================================
    # helpers
    # =====================================================
    @staticmethod
    def _payment_status(customer: CustomerModel, card_number: str) -> OrderStatus:
        if customer.card_number and customer.card_number == card_number:
            return OrderStatus.SUCCESS
        return OrderStatus.PENDING
