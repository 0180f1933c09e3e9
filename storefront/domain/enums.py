# storefront/domain/enums.py
from enum import Enum


class Role(str, Enum):
    CUSTOMER = "customer"
    SELLER = "seller"


class ProductStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    OUTOFSTOCK = "OUTOFSTOCK"


class Category(str, Enum):
    ELECTRONICS = "ELECTRONICS"
    FASHION = "FASHION"
    BOOKS = "BOOKS"
    GROCERIES = "GROCERIES"
    FURNITURE = "FURNITURE"


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    SUCCESS = "SUCCESS"
    CANCELLED = "CANCELLED"
