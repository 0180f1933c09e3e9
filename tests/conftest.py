"""Pytest configuration: in-memory SQLite per test, Celery runs eagerly."""

import os

# settings are read at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"
os.environ["NOTIFICATION_WEBHOOK_URL"] = ""
os.environ["SEED_DEMO_DATA"] = "false"

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import storefront.data.models  # noqa: F401
from storefront.data.database import Base, get_db, make_engine
from storefront.data.models import AddressModel, ProductModel
from storefront.domain.enums import Category
from storefront.domain.schemas import CustomerCreate, CustomerCredentials, SellerCreate, SellerCredentials
from storefront.main import create_app
from storefront.services.auth_service import AuthService
from storefront.services.customer_service import CustomerService
from storefront.services.product_service import derive_status
from storefront.services.seller_service import SellerService

PASSWORD = "secret-pass-1"
CARD = "4111111111111111"


@pytest.fixture
def engine():
    eng = make_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(eng)
    yield eng
    Base.metadata.drop_all(eng)
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


# ---------------------------------------------------------------------------
# accounts
# ---------------------------------------------------------------------------

def _register_seller(db, mobile, email):
    return SellerService(db).register(
        SellerCreate(first_name="Sam", last_name="Seller", mobile=mobile, email=email, password=PASSWORD)
    )


def _register_customer(db, mobile, email):
    customer = CustomerService(db).register(
        CustomerCreate(first_name="Cat", last_name="Customer", mobile_no=mobile, email=email, password=PASSWORD)
    )
    customer.addresses.append(
        AddressModel(address_type="home", city="Krakow", state="Malopolska", pincode="300001")
    )
    customer.card_number = CARD
    customer.card_validity = "12/30"
    customer.card_cvv = "123"
    db.commit()
    return customer


@pytest.fixture
def seller(db):
    return _register_seller(db, "9100000001", "seller1@example.com")


@pytest.fixture
def other_seller(db):
    return _register_seller(db, "9100000002", "seller2@example.com")


@pytest.fixture
def seller_token(db, seller):
    return AuthService(db).login_seller(SellerCredentials(mobile=seller.mobile, password=PASSWORD)).token


@pytest.fixture
def other_seller_token(db, other_seller):
    return AuthService(db).login_seller(SellerCredentials(mobile=other_seller.mobile, password=PASSWORD)).token


@pytest.fixture
def customer(db):
    return _register_customer(db, "8100000001", "customer1@example.com")


@pytest.fixture
def other_customer(db):
    return _register_customer(db, "8100000002", "customer2@example.com")


@pytest.fixture
def customer_token(db, customer):
    return AuthService(db).login_customer(
        CustomerCredentials(mobile_no=customer.mobile_no, password=PASSWORD)
    ).token


@pytest.fixture
def other_customer_token(db, other_customer):
    return AuthService(db).login_customer(
        CustomerCredentials(mobile_no=other_customer.mobile_no, password=PASSWORD)
    ).token


# ---------------------------------------------------------------------------
# catalog
# ---------------------------------------------------------------------------

@pytest.fixture
def make_product(db, seller):
    def _make(name="Widget", price="100.00", quantity=10, category=Category.ELECTRONICS, owner=None, **extra):
        product = ProductModel(
            name=name,
            price=Decimal(price),
            quantity=quantity,
            category=category.value,
            status=derive_status(quantity),
            seller_id=(owner or seller).id,
            average_rating=0.0,
            review_count=0,
            **extra,
        )
        db.add(product)
        db.commit()
        return product

    return _make


# ---------------------------------------------------------------------------
# http
# ---------------------------------------------------------------------------

@pytest.fixture
def client(session_factory):
    app = create_app()

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)
