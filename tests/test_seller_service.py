from unittest.mock import MagicMock

import pytest

from storefront.data.models import ProductModel, SellerModel
from storefront.domain.enums import ProductStatus
from storefront.domain.errors import (
    AccountAlreadyExists,
    AccountNotFound,
    InsufficientStock,
    InvalidToken,
    NotOwner,
    ProductUnavailable,
    VerificationFailed,
)
from storefront.domain.schemas import OrderCreate, SellerCreate, SellerCredentials, SellerUpdate
from storefront.services.cart_service import CartService
from storefront.services.order_service import OrderService
from storefront.services.seller_service import SellerService

from tests.conftest import CARD, PASSWORD


class TestSellerAccounts:
    def test_register_and_lookup(self, db):
        svc = SellerService(db)
        seller = svc.register(
            SellerCreate(first_name="Ann", last_name="Lee", mobile="9200000001", email="ann@example.com", password=PASSWORD)
        )

        assert svc.get_seller_by_id(seller.id).email == "ann@example.com"
        assert [s.id for s in svc.get_all_sellers()] == [seller.id]

    def test_duplicate_mobile(self, db, seller):
        with pytest.raises(AccountAlreadyExists):
            SellerService(db).register(
                SellerCreate(first_name="X", last_name="Y", mobile=seller.mobile, email="x@example.com", password=PASSWORD)
            )

    def test_empty_listing_and_unknown_id(self, db):
        svc = SellerService(db)
        with pytest.raises(AccountNotFound):
            svc.get_all_sellers()
        with pytest.raises(AccountNotFound):
            svc.get_seller_by_id(42)

    def test_lookup_by_mobile_needs_seller_session(self, db, seller, seller_token, customer_token):
        svc = SellerService(db)
        assert svc.get_seller_by_mobile(seller_token, seller.mobile).id == seller.id

        with pytest.raises(InvalidToken):
            svc.get_seller_by_mobile(customer_token, seller.mobile)
        with pytest.raises(AccountNotFound):
            svc.get_seller_by_mobile(seller_token, "9999999999")

    def test_update_seller(self, db, seller_token):
        seller = SellerService(db).update_seller(seller_token, SellerUpdate(last_name="Smith"))
        assert seller.full_name == "Sam Smith"

    def test_update_mobile_requires_password(self, db, seller_token):
        svc = SellerService(db)
        with pytest.raises(VerificationFailed):
            svc.update_mobile(seller_token, SellerCredentials(mobile="9300000000", password="nope"))

        seller = svc.update_mobile(seller_token, SellerCredentials(mobile="9300000000", password=PASSWORD))
        assert seller.mobile == "9300000000"

    def test_update_mobile_collision(self, db, seller_token, other_seller):
        with pytest.raises(AccountAlreadyExists):
            SellerService(db).update_mobile(seller_token, SellerCredentials(mobile=other_seller.mobile, password=PASSWORD))

    def test_update_password_logs_out(self, db, seller, seller_token):
        svc = SellerService(db)
        svc.update_password(seller_token, SellerCredentials(mobile=seller.mobile, password="another-pass"))

        with pytest.raises(InvalidToken):
            svc.get_logged_in_seller(seller_token)


class TestSellerDeletion:
    def test_cannot_delete_someone_else(self, db, seller_token, other_seller):
        with pytest.raises(NotOwner):
            SellerService(db).delete_seller(seller_token, other_seller.id)

    def test_delete_own_account_keeps_products(self, db, seller, seller_token, make_product):
        product = make_product()
        seller_id, product_id = seller.id, product.id

        SellerService(db).delete_seller(seller_token, seller_id)

        assert db.get(SellerModel, seller_id) is None
        assert db.get(ProductModel, product_id).seller_id is None
        with pytest.raises(InvalidToken):
            SellerService(db).get_logged_in_seller(seller_token)

    def test_deleted_sellers_products_cannot_be_bought(self, db, seller, seller_token, make_product, customer_token):
        product = make_product(quantity=7)
        carts = CartService(db)
        carts.add_item(customer_token, product.id)
        product_id = product.id

        SellerService(db).delete_seller(seller_token, seller.id)

        orphan = db.get(ProductModel, product_id)
        assert orphan.seller_id is None
        assert orphan.quantity == 0
        assert orphan.status == ProductStatus.OUTOFSTOCK.value
        with pytest.raises(ProductUnavailable):
            carts.add_item(customer_token, product_id)
        with pytest.raises(InsufficientStock):
            OrderService(db, notification_service=MagicMock()).place_order(
                customer_token, OrderCreate(card_number=CARD, address_type="home")
            )
