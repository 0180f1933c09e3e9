from decimal import Decimal

import pytest

from storefront.domain.errors import CartEmpty, InvalidToken, ItemNotFound, ProductNotFound, ProductUnavailable
from storefront.services.cart_service import CartService


class TestAddItem:
    def test_same_product_twice(self, db, make_product, customer_token):
        product = make_product(price="100.00")
        svc = CartService(db)

        svc.add_item(customer_token, product.id)
        cart = svc.add_item(customer_token, product.id)

        assert len(cart.items) == 1
        assert cart.items[0].quantity == 2
        assert cart.total == Decimal("200.00")

    def test_quantity_argument_adds_one_unit(self, db, make_product, customer_token):
        product = make_product(price="10.00")
        cart = CartService(db).add_item(customer_token, product.id, quantity=5)

        assert cart.items[0].quantity == 1
        assert cart.total == Decimal("10.00")

    def test_total_is_sum_of_lines(self, db, make_product, customer_token):
        a = make_product(name="A", price="19.99")
        b = make_product(name="B", price="5.01")
        svc = CartService(db)
        for product_id in (a.id, b.id, a.id):
            cart = svc.add_item(customer_token, product_id)

        assert cart.total == sum(i.unit_price * i.quantity for i in cart.items)
        assert cart.total == Decimal("45.99")

    def test_out_of_stock_product(self, db, make_product, customer_token):
        product = make_product(quantity=0)
        with pytest.raises(ProductUnavailable):
            CartService(db).add_item(customer_token, product.id)

    def test_unknown_product(self, db, customer_token):
        with pytest.raises(ProductNotFound):
            CartService(db).add_item(customer_token, 404)

    def test_seller_token_rejected(self, db, make_product, seller_token):
        product = make_product()
        with pytest.raises(InvalidToken):
            CartService(db).add_item(seller_token, product.id)


class TestRemoveAndClear:
    def test_remove_steps_down_then_empties(self, db, make_product, customer_token):
        product = make_product(price="100.00")
        svc = CartService(db)
        svc.add_item(customer_token, product.id)
        svc.add_item(customer_token, product.id)

        cart = svc.remove_item(customer_token, product.id)
        assert cart.items[0].quantity == 1
        assert cart.total == Decimal("100.00")

        cart = svc.remove_item(customer_token, product.id)
        assert cart.items == []
        assert cart.total == Decimal("0.00")

    def test_remove_from_empty_cart(self, db, make_product, customer_token):
        product = make_product()
        with pytest.raises(CartEmpty):
            CartService(db).remove_item(customer_token, product.id)

    def test_remove_product_not_in_cart(self, db, make_product, customer_token):
        a = make_product(name="A")
        b = make_product(name="B")
        svc = CartService(db)
        svc.add_item(customer_token, a.id)

        with pytest.raises(ItemNotFound):
            svc.remove_item(customer_token, b.id)

    def test_clear(self, db, make_product, customer_token):
        product = make_product(price="3.50")
        svc = CartService(db)
        svc.add_item(customer_token, product.id)

        cart = svc.clear(customer_token)

        assert cart.items == []
        assert cart.total == Decimal("0.00")
        with pytest.raises(CartEmpty):
            svc.clear(customer_token)

    def test_get_cart(self, db, customer, customer_token):
        cart = CartService(db).get_cart(customer_token)
        assert cart.customer_id == customer.id
        assert cart.total == 0
