# storefront/data/seed.py
from decimal import Decimal

from storefront.data.database import SessionLocal
from storefront.data.models import ProductModel, SellerModel
from storefront.domain.enums import Category
from storefront.domain.schemas import AddressIn, CustomerCreate, SellerCreate
from storefront.services.customer_service import CustomerService
from storefront.services.product_service import derive_status
from storefront.services.seller_service import SellerService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

DEMO_PASSWORD = "password123"

SELLERS = [
    {"first_name": "Anna", "last_name": "Nowak", "mobile": "9000000001", "email": "anna@shop.com"},
    {"first_name": "Piotr", "last_name": "Kowalski", "mobile": "9000000002", "email": "piotr@shop.com"},
]

# (seller idx, name, price, manufacturer, quantity, category)
PRODUCTS = [
    (0, "Wireless Headphones", "199.99", "Sonic", 25, Category.ELECTRONICS),
    (0, "USB-C Charger", "29.90", "Voltix", 3, Category.ELECTRONICS),
    (0, "Desk Lamp", "45.00", "Lumen", 0, Category.FURNITURE),
    (1, "Cotton T-Shirt", "15.50", "Basic Wear", 100, Category.FASHION),
    (1, "Python Cookbook", "39.99", "Books & Co", 12, Category.BOOKS),
    (1, "Green Tea 100g", "8.25", "Leaf", 40, Category.GROCERIES),
]

CUSTOMERS = [
    {"first_name": "Jan", "last_name": "Wisniewski", "mobile_no": "8000000001", "email": "jan@mail.com"},
    {"first_name": "Ewa", "last_name": "Lewandowska", "mobile_no": "8000000002", "email": "ewa@mail.com"},
]


def seed():
    db = SessionLocal()
    try:
        # not forcing: only seed if empty
        if db.query(SellerModel).first():
            return

        sellers = [
            SellerService(db).register(SellerCreate(password=DEMO_PASSWORD, **s))
            for s in SELLERS
        ]

        for idx, name, price, manufacturer, quantity, category in PRODUCTS:
            db.add(
                ProductModel(
                    name=name,
                    price=Decimal(price),
                    description=f"{name} by {manufacturer}",
                    manufacturer=manufacturer,
                    quantity=quantity,
                    category=category.value,
                    status=derive_status(quantity),
                    seller_id=sellers[idx].id,
                    average_rating=0.0,
                    review_count=0,
                )
            )
        db.commit()

        customers = CustomerService(db)
        for c in CUSTOMERS:
            customer = customers.register(CustomerCreate(password=DEMO_PASSWORD, **c))
            CustomerService._put_address(
                customer,
                "home",
                AddressIn(street_no="12", locality="Centrum", city="Warszawa", state="Mazowieckie", pincode="000001"),
            )
        db.commit()

        logger.info(f"Seeded {len(SELLERS)} sellers, {len(PRODUCTS)} products, {len(CUSTOMERS)} customers")
    finally:
        db.close()
