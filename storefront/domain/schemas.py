# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, EmailStr
from typing import List, Optional
from decimal import Decimal
from datetime import date, datetime

from storefront.domain.enums import Category, OrderStatus, ProductStatus, Role


# =====================================================
# SESSIONS
# =====================================================
class SessionOut(BaseModel):
    token: str
    user_id: int
    role: Role
    start_time: datetime
    end_time: datetime

    model_config = ConfigDict(from_attributes=True)


class MessageOut(BaseModel):
    message: str
    token: Optional[str] = None


class TokenStatusOut(BaseModel):
    valid: bool
    user_id: int
    role: Role
    end_time: datetime


# =====================================================
# ACCOUNTS
# =====================================================
class AddressIn(BaseModel):
    street_no: Optional[str] = Field(None, max_length=20)
    building_name: Optional[str] = Field(None, max_length=100)
    locality: Optional[str] = Field(None, max_length=100)
    city: str = Field(..., min_length=2, max_length=60)
    state: str = Field(..., min_length=2, max_length=60)
    pincode: str = Field(..., pattern=r"^\d{6}$")


class AddressOut(AddressIn):
    address_type: str

    model_config = ConfigDict(from_attributes=True)


class CreditCardIn(BaseModel):
    card_number: str = Field(..., pattern=r"^\d{12,19}$")
    card_validity: str = Field(..., pattern=r"^(0[1-9]|1[0-2])/\d{2}$", description="MM/YY")
    card_cvv: str = Field(..., pattern=r"^\d{3,4}$")


class CustomerCreate(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=60)
    last_name: str = Field(..., min_length=1, max_length=60)
    mobile_no: str = Field(..., pattern=r"^\d{10}$")
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)


class CustomerCredentials(BaseModel):
    """Mobile number plus password: login, password change, account removal."""

    mobile_no: str = Field(..., pattern=r"^\d{10}$")
    password: str = Field(..., min_length=1, max_length=128)


class CustomerUpdate(BaseModel):
    first_name: Optional[str] = Field(None, min_length=1, max_length=60)
    last_name: Optional[str] = Field(None, min_length=1, max_length=60)
    mobile_no: Optional[str] = Field(None, pattern=r"^\d{10}$")
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=8, max_length=128)
    addresses: Optional[dict[str, AddressIn]] = None


class CustomerOut(BaseModel):
    id: int
    first_name: str
    last_name: str
    mobile_no: str
    email: str
    created_on: datetime
    addresses: List[AddressOut] = []
    masked_card: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class SellerCreate(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=60)
    last_name: str = Field(..., min_length=1, max_length=60)
    mobile: str = Field(..., pattern=r"^\d{10}$")
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)


class SellerCredentials(BaseModel):
    mobile: str = Field(..., pattern=r"^\d{10}$")
    password: str = Field(..., min_length=1, max_length=128)


class SellerUpdate(BaseModel):
    first_name: Optional[str] = Field(None, min_length=1, max_length=60)
    last_name: Optional[str] = Field(None, min_length=1, max_length=60)
    email: Optional[EmailStr] = None


class SellerOut(BaseModel):
    id: int
    first_name: str
    last_name: str
    mobile: str
    email: str

    model_config = ConfigDict(from_attributes=True)


# =====================================================
# CATALOG
# =====================================================
class ProductCreate(BaseModel):
    name: str = Field(..., min_length=3, max_length=120)
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    description: Optional[str] = None
    manufacturer: Optional[str] = Field(None, max_length=120)
    quantity: int = Field(..., ge=0)
    category: Category


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=3, max_length=120)
    price: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    description: Optional[str] = None
    manufacturer: Optional[str] = Field(None, max_length=120)
    category: Optional[Category] = None


class QuantityAdjust(BaseModel):
    delta: int = Field(..., description="Units to add (negative to remove)")


class ProductOut(BaseModel):
    id: int
    name: str
    price: Decimal
    description: Optional[str] = None
    manufacturer: Optional[str] = None
    quantity: int
    category: Category
    status: ProductStatus
    seller_id: Optional[int] = None
    average_rating: float
    review_count: int

    model_config = ConfigDict(from_attributes=True)


class ProductSearchFilter(BaseModel):
    keyword: Optional[str] = None
    category: Optional[Category] = None
    status: Optional[ProductStatus] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    min_rating: Optional[float] = None
    manufacturer: Optional[str] = None
    seller_id: Optional[int] = None
    page: int = 0
    size: int = 10


class ProductSearchItem(ProductOut):
    seller_name: str = ""


class ProductPage(BaseModel):
    content: List[ProductSearchItem]
    total_elements: int
    total_pages: int
    current_page: int
    page_size: int
    has_next: bool
    has_previous: bool


# =====================================================
# CART / WISHLIST
# =====================================================
class CartItemIn(BaseModel):
    product_id: int = Field(..., gt=0)
    quantity: int = Field(1, gt=0, description="Accepted for compatibility; each call adds one unit")


class CartItemOut(BaseModel):
    id: int
    product_id: int
    product_name: str
    unit_price: Decimal
    quantity: int

    model_config = ConfigDict(from_attributes=True)


class CartOut(BaseModel):
    id: int
    customer_id: int
    items: List[CartItemOut]
    total: Decimal

    model_config = ConfigDict(from_attributes=True)


class WishlistItemOut(BaseModel):
    id: int
    product_id: int
    product_name: str
    price: Decimal
    description: Optional[str] = None
    manufacturer: Optional[str] = None
    category: Category
    status: ProductStatus
    average_rating: float
    review_count: int
    added_at: datetime

    @classmethod
    def from_item(cls, item) -> "WishlistItemOut":
        p = item.product
        return cls(
            id=item.id,
            product_id=p.id,
            product_name=p.name,
            price=p.price,
            description=p.description,
            manufacturer=p.manufacturer,
            category=p.category,
            status=p.status,
            average_rating=p.average_rating,
            review_count=p.review_count,
            added_at=item.added_at,
        )


class WishlistStatusOut(BaseModel):
    product_id: int
    wishlisted: bool


# =====================================================
# ORDERS
# =====================================================
class OrderCreate(BaseModel):
    card_number: str = Field(..., pattern=r"^\d{12,19}$")
    address_type: str = Field(..., min_length=1, max_length=30)


class OrderItemOut(BaseModel):
    product_id: int
    product_name: str
    unit_price: Decimal
    quantity: int

    model_config = ConfigDict(from_attributes=True)


class OrderOut(BaseModel):
    id: int
    customer_id: Optional[int] = None
    status: OrderStatus
    total: Decimal
    address_type: str
    order_date: date
    created_at: datetime
    items: List[OrderItemOut]

    model_config = ConfigDict(from_attributes=True)


# =====================================================
# REVIEWS
# =====================================================
class ReviewIn(BaseModel):
    product_id: int = Field(..., gt=0)
    # zakres 1-5 sprawdza serwis (InvalidRating)
    rating: int
    title: str = Field(..., min_length=3, max_length=100)
    comment: str = Field(..., min_length=10, max_length=1000)


class ReviewUpdate(BaseModel):
    rating: int
    title: str = Field(..., min_length=3, max_length=100)
    comment: str = Field(..., min_length=10, max_length=1000)


class ReviewOut(BaseModel):
    id: int
    rating: int
    title: str
    comment: str
    created_at: datetime
    updated_at: datetime
    is_approved: bool
    helpful_count: int
    product_id: int
    customer_id: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class ReviewSummary(BaseModel):
    average_rating: float
    total_reviews: int
    product_id: int


class ReviewPage(BaseModel):
    content: List[ReviewOut]
    total_elements: int
    current_page: int
    page_size: int


# =====================================================
# INVENTORY ALERTS
# =====================================================
class InventoryAlertIn(BaseModel):
    product_id: int = Field(..., gt=0)
    threshold_quantity: int = Field(..., ge=0)
    alert_enabled: Optional[bool] = None


class InventoryAlertOut(BaseModel):
    id: int
    product_id: int
    product_name: str
    seller_id: int
    seller_name: str
    threshold_quantity: int
    current_quantity: int
    alert_enabled: bool
    alert_triggered: bool
    created_at: datetime
    updated_at: datetime
    last_alert_sent_at: Optional[datetime] = None
    alert_count: int

    @classmethod
    def from_alert(cls, alert) -> "InventoryAlertOut":
        return cls(
            id=alert.id,
            product_id=alert.product.id,
            product_name=alert.product.name,
            seller_id=alert.seller.id,
            seller_name=alert.seller.full_name,
            threshold_quantity=alert.threshold_quantity,
            current_quantity=alert.product.quantity,
            alert_enabled=alert.alert_enabled,
            alert_triggered=alert.triggered,
            created_at=alert.created_at,
            updated_at=alert.updated_at,
            last_alert_sent_at=alert.last_alert_sent_at,
            alert_count=alert.alert_count or 0,
        )


class InventoryAlertSummary(BaseModel):
    id: int
    product_id: int
    product_name: str
    threshold_quantity: int
    current_quantity: int
    quantity_to_restock: int
    last_alert_sent_at: Optional[datetime] = None

    @classmethod
    def from_alert(cls, alert) -> "InventoryAlertSummary":
        return cls(
            id=alert.id,
            product_id=alert.product.id,
            product_name=alert.product.name,
            threshold_quantity=alert.threshold_quantity,
            current_quantity=alert.product.quantity,
            quantity_to_restock=alert.quantity_to_restock,
            last_alert_sent_at=alert.last_alert_sent_at,
        )
