# storefront/services/product_service.py
import math

from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.data.models.seller import SellerModel
from storefront.domain.enums import Category, ProductStatus
from storefront.domain.errors import InsufficientStock, NotOwner, ProductNotFound
from storefront.domain.schemas import (
    MessageOut,
    ProductCreate,
    ProductPage,
    ProductSearchFilter,
    ProductSearchItem,
    ProductUpdate,
)
from storefront.repos.product_repo import ProductRepo
from storefront.services.seller_service import SellerService
from storefront.services.token_service import TokenService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

MAX_PAGE_SIZE = 100


def derive_status(quantity: int) -> str:
    return ProductStatus.AVAILABLE.value if quantity > 0 else ProductStatus.OUTOFSTOCK.value


class ProductService:
    """
    Katalog produktów.

    commands (add, update, delete, adjust_quantity) tylko dla sprzedawcy,
    który jest właścicielem produktu.
    decrement_stock / restock są wewnętrzne: nie commitują, działają
    w transakcji zamówienia.
    """

    def __init__(self, db: Session, token_service: TokenService | None = None):
        self.db = db
        self.repo = ProductRepo(db)
        self.tokens = token_service or TokenService(db)
        self.sellers = SellerService(db, self.tokens)

    #query - odczyt
    def get_product(self, product_id: int) -> ProductModel:
        product = self.repo.get_product(product_id)
        if not product:
            raise ProductNotFound(f"Product not found with given id: {product_id}")
        return product

    def get_all_products(self) -> list[ProductModel]:
        products = self.repo.list_products()
        if not products:
            raise ProductNotFound("No products in catalog")
        return products

    def get_products_by_category(self, category: Category | str) -> list[ProductModel]:
        category = Category(category)
        products = self.repo.list_by_category(category.value)
        if not products:
            raise ProductNotFound(f"No products found with category: {category.value}")
        return products

    def get_products_by_status(self, status: ProductStatus | str) -> list[ProductModel]:
        status = ProductStatus(status)
        products = self.repo.list_by_status(status.value)
        if not products:
            raise ProductNotFound(f"No products found with status: {status.value}")
        return products

    def get_products_of_seller(self, seller_id: int) -> list[ProductModel]:
        products = self.repo.list_by_seller(seller_id)
        if not products:
            raise ProductNotFound(f"No products with seller id: {seller_id}")
        return products

    def search(self, filters: ProductSearchFilter) -> ProductPage:
        page = max(filters.page, 0)
        size = min(max(filters.size, 1), MAX_PAGE_SIZE)

        rows, total = self.repo.search(filters, page, size)
        if total == 0:
            raise ProductNotFound("No products found matching the search and filter criteria")

        total_pages = math.ceil(total / size)
        content = [
            ProductSearchItem.model_validate(product).model_copy(update={"seller_name": seller_name})
            for product, seller_name in rows
        ]
        return ProductPage(
            content=content,
            total_elements=total,
            total_pages=total_pages,
            current_page=page,
            page_size=size,
            has_next=page + 1 < total_pages,
            has_previous=page > 0,
        )

    #commands
    def add_product(self, token: str, payload: ProductCreate) -> ProductModel:
        seller = self.sellers.get_logged_in_seller(token)

        product = ProductModel(
            name=payload.name,
            price=payload.price,
            description=payload.description,
            manufacturer=payload.manufacturer,
            quantity=payload.quantity,
            category=payload.category.value,
            status=derive_status(payload.quantity),
            seller=seller,
            average_rating=0.0,
            review_count=0,
        )
        self.repo.add(product)
        self.repo.commit()
        self.repo.refresh(product)

        logger.info(f"Seller {seller.id} added product {product.id} ({product.quantity} pcs)")
        return product

    def update_product(self, token: str, product_id: int, payload: ProductUpdate) -> ProductModel:
        seller = self.sellers.get_logged_in_seller(token)
        product = self._owned_product(seller, product_id)

        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        old_price = product.price

        for field, value in changes.items():
            if field == "category":
                value = Category(value).value
            setattr(product, field, value)

        if "price" in changes and changes["price"] != old_price:
            # koszyki trzymają total przyrostowo -> przeliczamy różnicę
            from storefront.services.cart_service import CartService

            CartService(self.db, self.tokens, self).reprice_product(product, old_price)

        self.repo.commit()
        self.repo.refresh(product)

        logger.info(f"Product {product.id} updated: {sorted(changes)}")
        return product

    def delete_product(self, token: str, product_id: int) -> MessageOut:
        seller = self.sellers.get_logged_in_seller(token)
        product = self._owned_product(seller, product_id)

        from storefront.services.cart_service import CartService

        CartService(self.db, self.tokens, self).purge_product(product)
        self.repo.delete(product)
        self.repo.commit()

        logger.info(f"Product {product_id} deleted by seller {seller.id}")
        return MessageOut(message=f"Product {product_id} deleted")

    def adjust_quantity(self, token: str, product_id: int, delta: int) -> ProductModel:
        seller = self.sellers.get_logged_in_seller(token)
        product = self._owned_product(seller, product_id)

        new_quantity = product.quantity + delta
        if new_quantity < 0:
            raise InsufficientStock(
                f"Cannot remove {-delta} units from product {product.id}, only {product.quantity} in stock"
            )

        product.quantity = new_quantity
        product.status = derive_status(new_quantity)
        self.repo.commit()
        self.repo.refresh(product)

        logger.info(f"Product {product.id} quantity adjusted by {delta} -> {new_quantity}")
        return product

    # =====================================================
    # stock (wewnętrzne, bez commita)
    # =====================================================
    def decrement_stock(self, product_id: int, qty: int) -> None:
        if self.repo.decrement_if_available(product_id, qty):
            return

        product = self.get_product(product_id)
        raise InsufficientStock(
            f"Insufficient stock for product {product.name}: requested {qty}, available {product.quantity}"
        )

    def restock(self, product_id: int, qty: int) -> bool:
        return bool(self.repo.increment(product_id, qty))

    # =====================================================
    # helpers
    # =====================================================
    def _owned_product(self, seller: SellerModel, product_id: int) -> ProductModel:
        product = self.get_product(product_id)
        if product.seller_id != seller.id:
            raise NotOwner("Product does not belong to the logged in seller")
        return product
