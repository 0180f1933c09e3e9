from datetime import timedelta
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from storefront.data.database import Base, make_engine
from storefront.data.models import OrderModel, ProductModel
from storefront.domain.enums import OrderStatus, ProductStatus
from storefront.domain.errors import (
    AddressNotFound,
    AlreadyCancelled,
    CartEmpty,
    EmptyCart,
    InsufficientStock,
    NotOwner,
    OrderNotFound,
)
from storefront.domain.schemas import OrderCreate
from storefront.services.cart_service import CartService
from storefront.services.order_service import OrderService

from tests.conftest import CARD


@pytest.fixture
def notifications():
    return MagicMock()


@pytest.fixture
def orders(db, notifications):
    return OrderService(db, notification_service=notifications)


def _fill_cart(db, token, *products):
    carts = CartService(db)
    for product in products:
        carts.add_item(token, product.id)
    return carts


class TestPlaceOrder:
    def test_checkout_snapshots_cart_and_reserves_stock(self, db, orders, notifications, make_product, customer_token):
        phone = make_product(name="Phone", price="300.00", quantity=5)
        case = make_product(name="Case", price="20.00", quantity=1)
        carts = _fill_cart(db, customer_token, phone, phone, case)

        order = orders.place_order(customer_token, OrderCreate(card_number=CARD, address_type="home"))

        assert order.status == OrderStatus.SUCCESS.value
        assert order.total == Decimal("620.00")
        assert [(i.product_name, i.quantity) for i in order.items] == [("Phone", 2), ("Case", 1)]
        assert phone.quantity == 3
        assert case.quantity == 0
        assert case.status == ProductStatus.OUTOFSTOCK.value

        cart = carts.get_cart(customer_token)
        assert cart.items == []
        assert cart.total == Decimal("0.00")
        notifications.send_order_notification.assert_called_once_with(order.customer_id, order.id, "SUCCESS")

    def test_unknown_card_is_pending(self, db, orders, make_product, customer_token):
        product = make_product()
        _fill_cart(db, customer_token, product)

        order = orders.place_order(customer_token, OrderCreate(card_number="5555555555554444", address_type="home"))

        assert order.status == OrderStatus.PENDING.value

    def test_empty_cart(self, db, orders, customer_token):
        with pytest.raises(EmptyCart):
            orders.place_order(customer_token, OrderCreate(card_number=CARD, address_type="home"))

        assert db.query(OrderModel).count() == 0
        assert issubclass(EmptyCart, CartEmpty)

    def test_unknown_address(self, db, orders, make_product, customer_token):
        _fill_cart(db, customer_token, make_product())

        with pytest.raises(AddressNotFound):
            orders.place_order(customer_token, OrderCreate(card_number=CARD, address_type="office"))

    def test_insufficient_stock_rolls_back_everything(self, db, orders, make_product, customer_token):
        plenty = make_product(name="Plenty", quantity=10)
        scarce = make_product(name="Scarce", quantity=1)
        carts = _fill_cart(db, customer_token, plenty, scarce, scarce)
        plenty_id, scarce_id = plenty.id, scarce.id

        with pytest.raises(InsufficientStock):
            orders.place_order(customer_token, OrderCreate(card_number=CARD, address_type="home"))

        assert db.query(OrderModel).count() == 0
        assert db.get(ProductModel, plenty_id).quantity == 10
        assert db.get(ProductModel, scarce_id).quantity == 1
        assert len(carts.get_cart(customer_token).items) == 2


class TestCancelOrder:
    def _order(self, db, orders, make_product, token, quantity=5):
        product = make_product(price="50.00", quantity=quantity)
        _fill_cart(db, token, product, product)
        order = orders.place_order(token, OrderCreate(card_number=CARD, address_type="home"))
        return product, order

    def test_cancel_restores_stock_once(self, db, orders, make_product, customer_token):
        product, order = self._order(db, orders, make_product, customer_token)
        assert product.quantity == 3

        cancelled = orders.cancel_order(customer_token, order.id)
        assert cancelled.status == OrderStatus.CANCELLED.value
        assert product.quantity == 5

        with pytest.raises(AlreadyCancelled):
            orders.cancel_order(customer_token, order.id)
        assert product.quantity == 5

    def test_cancel_makes_sold_out_product_available(self, db, orders, make_product, customer_token):
        product, order = self._order(db, orders, make_product, customer_token, quantity=2)
        assert product.status == ProductStatus.OUTOFSTOCK.value

        orders.cancel_order(customer_token, order.id)

        assert product.quantity == 2
        assert product.status == ProductStatus.AVAILABLE.value

    def test_cancel_someone_elses_order(self, db, orders, make_product, customer_token, other_customer_token):
        _, order = self._order(db, orders, make_product, customer_token)

        with pytest.raises(NotOwner):
            orders.cancel_order(other_customer_token, order.id)

    def test_cancel_unknown_order(self, orders, customer_token):
        with pytest.raises(OrderNotFound):
            orders.cancel_order(customer_token, 123)

    def test_cancel_after_product_deleted(self, db, orders, make_product, customer_token):
        product, order = self._order(db, orders, make_product, customer_token)
        db.delete(product)
        db.commit()

        assert orders.cancel_order(customer_token, order.id).status == OrderStatus.CANCELLED.value


class TestConcurrentCancel:
    @pytest.fixture
    def engine(self, tmp_path):
        # dwie sesje muszą mieć osobne połączenia, więc plik zamiast :memory:
        eng = make_engine(f"sqlite:///{tmp_path / 'shop.db'}")
        Base.metadata.create_all(eng)
        yield eng
        Base.metadata.drop_all(eng)
        eng.dispose()

    def test_second_cancel_with_stale_order_does_not_restock(
        self, db, session_factory, orders, make_product, customer_token
    ):
        product = make_product(quantity=5)
        _fill_cart(db, customer_token, product)
        order = orders.place_order(customer_token, OrderCreate(card_number=CARD, address_type="home"))
        assert product.quantity == 4

        second = session_factory()
        try:
            other_orders = OrderService(second, notification_service=MagicMock())
            stale = other_orders.get_order_by_id(order.id)
            assert stale.status != OrderStatus.CANCELLED.value

            orders.cancel_order(customer_token, order.id)
            with pytest.raises(AlreadyCancelled):
                other_orders.cancel_order(customer_token, order.id)
        finally:
            second.close()

        db.expire_all()
        assert db.get(ProductModel, product.id).quantity == 5
        assert db.get(OrderModel, order.id).status == OrderStatus.CANCELLED.value


class TestOrderQueries:
    def test_lookups(self, db, orders, make_product, customer, customer_token):
        _fill_cart(db, customer_token, make_product())
        order = orders.place_order(customer_token, OrderCreate(card_number=CARD, address_type="home"))

        assert orders.get_order_by_id(order.id).id == order.id
        assert [o.id for o in orders.get_all_orders()] == [order.id]
        assert [o.id for o in orders.get_orders_by_date(order.order_date)] == [order.id]
        assert [o.id for o in orders.get_customer_orders(customer_token)] == [order.id]
        assert orders.get_customer_by_order_id(order.id).id == customer.id

    def test_missing(self, db, orders, customer_token):
        with pytest.raises(OrderNotFound):
            orders.get_order_by_id(1)
        with pytest.raises(OrderNotFound):
            orders.get_all_orders()
        with pytest.raises(OrderNotFound):
            orders.get_customer_orders(customer_token)

    def test_empty_date(self, db, orders, make_product, customer_token):
        _fill_cart(db, customer_token, make_product())
        order = orders.place_order(customer_token, OrderCreate(card_number=CARD, address_type="home"))

        with pytest.raises(OrderNotFound):
            orders.get_orders_by_date(order.order_date - timedelta(days=1))
