#import wszystkich modeli, żeby SQLAlchemy je zarejestrował w Base.metadata

from storefront.data.models.session import UserSessionModel
from storefront.data.models.customer import CustomerModel, AddressModel
from storefront.data.models.seller import SellerModel
from storefront.data.models.product import ProductModel
from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.wishlist import WishlistModel, WishlistItemModel
from storefront.data.models.order import OrderModel, OrderItemModel
from storefront.data.models.review import ReviewModel
from storefront.data.models.inventory_alert import InventoryAlertModel

__all__ = [
    "UserSessionModel",
    "CustomerModel",
    "AddressModel",
    "SellerModel",
    "ProductModel",
    "CartModel",
    "CartItemModel",
    "WishlistModel",
    "WishlistItemModel",
    "OrderModel",
    "OrderItemModel",
    "ReviewModel",
    "InventoryAlertModel",
]
