# storefront/repos/product_repo.py
from sqlalchemy import select, update, func, or_, case

from storefront.data.models.product import ProductModel
from storefront.data.models.seller import SellerModel
from storefront.domain.enums import ProductStatus
from storefront.domain.schemas import ProductSearchFilter
from storefront.repos.base import Repo


class ProductRepo(Repo):
    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def list_products(self) -> list[ProductModel]:
        return list(self.db.execute(select(ProductModel).order_by(ProductModel.id)).scalars())

    def list_by_category(self, category: str) -> list[ProductModel]:
        stmt = select(ProductModel).where(ProductModel.category == category).order_by(ProductModel.id)
        return list(self.db.execute(stmt).scalars())

    def list_by_status(self, status: str) -> list[ProductModel]:
        stmt = select(ProductModel).where(ProductModel.status == status).order_by(ProductModel.id)
        return list(self.db.execute(stmt).scalars())

    def list_by_seller(self, seller_id: int) -> list[ProductModel]:
        stmt = select(ProductModel).where(ProductModel.seller_id == seller_id).order_by(ProductModel.id)
        return list(self.db.execute(stmt).scalars())

    # -----------------------------------------------------
    # stock
    # -----------------------------------------------------
    def decrement_if_available(self, product_id: int, qty: int) -> int:
        """
        UPDATE products SET quantity = quantity - :qty
        WHERE id = :id AND quantity >= :qty

        Zwraca rowcount; 0 oznacza brak towaru (albo brak produktu).
        """
        result = self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id, ProductModel.quantity >= qty)
            .values(quantity=ProductModel.quantity - qty)
            .execution_options(synchronize_session="fetch")
        )
        if result.rowcount:
            self._sync_status(product_id)
        return result.rowcount

    def increment(self, product_id: int, qty: int) -> int:
        result = self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id)
            .values(quantity=ProductModel.quantity + qty)
            .execution_options(synchronize_session="fetch")
        )
        if result.rowcount:
            self._sync_status(product_id)
        return result.rowcount

    def _sync_status(self, product_id: int) -> None:
        #status AVAILABLE <=> quantity > 0
        self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id)
            .values(
                status=case(
                    (ProductModel.quantity > 0, ProductStatus.AVAILABLE.value),
                    else_=ProductStatus.OUTOFSTOCK.value,
                )
            )
            .execution_options(synchronize_session="fetch")
        )

    # -----------------------------------------------------
    # search
    # -----------------------------------------------------
    def search(self, f: ProductSearchFilter, page: int, size: int) -> tuple[list[tuple], int]:
        """Returns ``[(product, seller_name), ...]`` for the page and the total match count."""
        seller_name = func.trim(
            func.coalesce(SellerModel.first_name, "") + " " + func.coalesce(SellerModel.last_name, "")
        )
        conditions = []

        if f.keyword:
            like = f"%{f.keyword.lower()}%"
            conditions.append(
                or_(
                    func.lower(ProductModel.name).like(like),
                    func.lower(func.coalesce(ProductModel.description, "")).like(like),
                )
            )
        if f.category is not None:
            conditions.append(ProductModel.category == f.category.value)
        if f.status is not None:
            conditions.append(ProductModel.status == f.status.value)
        if f.min_price is not None:
            conditions.append(ProductModel.price >= f.min_price)
        if f.max_price is not None:
            conditions.append(ProductModel.price <= f.max_price)
        if f.min_rating is not None:
            conditions.append(ProductModel.average_rating >= f.min_rating)
        if f.manufacturer:
            conditions.append(
                func.lower(ProductModel.manufacturer).like(f"%{f.manufacturer.lower()}%")
            )
        if f.seller_id is not None:
            conditions.append(ProductModel.seller_id == f.seller_id)

        total = self.db.execute(
            select(func.count(ProductModel.id)).where(*conditions)
        ).scalar_one()

        stmt = (
            select(ProductModel, seller_name)
            .outerjoin(SellerModel, ProductModel.seller_id == SellerModel.id)
            .where(*conditions)
            .order_by(ProductModel.id)
            .offset(page * size)
            .limit(size)
        )
        rows = [(p, name or "") for p, name in self.db.execute(stmt).all()]
        return rows, total

