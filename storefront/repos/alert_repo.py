# storefront/repos/alert_repo.py
from sqlalchemy import select

from storefront.data.models.inventory_alert import InventoryAlertModel
from storefront.data.models.product import ProductModel
from storefront.repos.base import Repo


class AlertRepo(Repo):
    def get_alert(self, alert_id: int) -> InventoryAlertModel | None:
        return self.db.get(InventoryAlertModel, alert_id)

    def get_by_product(self, product_id: int) -> InventoryAlertModel | None:
        return self.db.execute(
            select(InventoryAlertModel).where(InventoryAlertModel.product_id == product_id)
        ).scalar_one_or_none()

    def list_by_seller(self, seller_id: int, enabled_only: bool = False) -> list[InventoryAlertModel]:
        stmt = select(InventoryAlertModel).where(InventoryAlertModel.seller_id == seller_id)
        if enabled_only:
            stmt = stmt.where(InventoryAlertModel.alert_enabled.is_(True))
        return list(self.db.execute(stmt.order_by(InventoryAlertModel.id)).scalars())

    def list_triggered(self, seller_id: int | None = None) -> list[InventoryAlertModel]:
        #enabled AND product.quantity <= threshold
        stmt = (
            select(InventoryAlertModel)
            .join(ProductModel, InventoryAlertModel.product_id == ProductModel.id)
            .where(
                InventoryAlertModel.alert_enabled.is_(True),
                ProductModel.quantity <= InventoryAlertModel.threshold_quantity,
            )
        )
        if seller_id is not None:
            stmt = stmt.where(InventoryAlertModel.seller_id == seller_id)
        return list(self.db.execute(stmt.order_by(InventoryAlertModel.id)).scalars())
