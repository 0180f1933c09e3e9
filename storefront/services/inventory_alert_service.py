# storefront/services/inventory_alert_service.py
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from storefront.data.models.inventory_alert import InventoryAlertModel
from storefront.data.models.product import ProductModel
from storefront.data.models.seller import SellerModel
from storefront.domain.errors import AlertAlreadyExists, AlertNotFound, NotOwner
from storefront.domain.schemas import InventoryAlertIn, MessageOut
from storefront.repos.alert_repo import AlertRepo
from storefront.services.notification_service import NotificationService
from storefront.services.product_service import ProductService
from storefront.services.seller_service import SellerService
from storefront.services.token_service import TokenService
from storefront.utils.security import now_utc
from storefront.utils.settings import ALERT_COOLDOWN_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class InventoryAlertService:
    """
    Progi niskiego stanu magazynu, per produkt, tylko dla właściciela.

    "triggered" nie jest zapisywany, liczymy go przy każdym odczycie
    (alert włączony i quantity <= threshold). Jedynym zapisującym
    last_alert_sent_at / alert_count jest dispatch_triggered_alerts.
    """

    def __init__(
        self,
        db: Session,
        token_service: TokenService | None = None,
        notification_service: NotificationService | None = None,
        cooldown_seconds: int | None = None,
    ):
        self.repo = AlertRepo(db)
        self.tokens = token_service or TokenService(db)
        self.sellers = SellerService(db, self.tokens)
        self.products = ProductService(db, self.tokens)
        self.notification_service = notification_service or NotificationService()
        if cooldown_seconds is None:
            cooldown_seconds = ALERT_COOLDOWN_SECONDS
        self.cooldown = timedelta(seconds=cooldown_seconds)

    #commands
    def create_alert(self, token: str, payload: InventoryAlertIn) -> InventoryAlertModel:
        seller = self.sellers.get_logged_in_seller(token)
        product = self._own_product(seller, payload.product_id)

        if self.repo.get_by_product(product.id):
            raise AlertAlreadyExists("Alert already exists for this product. Use update instead.")

        now = now_utc()
        alert = InventoryAlertModel(
            product=product,
            seller=seller,
            threshold_quantity=payload.threshold_quantity,
            alert_enabled=True if payload.alert_enabled is None else payload.alert_enabled,
            created_at=now,
            updated_at=now,
            alert_count=0,
        )
        self.repo.add(alert)
        self.repo.commit()
        self.repo.refresh(alert)

        logger.info(f"Alert {alert.id} created for product {product.id}, threshold {alert.threshold_quantity}")
        return alert

    def update_alert(self, token: str, alert_id: int, payload: InventoryAlertIn) -> InventoryAlertModel:
        seller = self.sellers.get_logged_in_seller(token)
        alert = self._own_alert(seller, alert_id, "update")

        if payload.product_id != alert.product_id:
            product = self._own_product(seller, payload.product_id)
            other = self.repo.get_by_product(product.id)
            if other and other.id != alert.id:
                raise AlertAlreadyExists("Alert already exists for the target product")
            alert.product = product

        alert.threshold_quantity = payload.threshold_quantity
        if payload.alert_enabled is not None:
            alert.alert_enabled = payload.alert_enabled
        alert.updated_at = now_utc()

        self.repo.commit()
        self.repo.refresh(alert)

        logger.info(f"Alert {alert.id} updated")
        return alert

    def delete_alert(self, token: str, alert_id: int) -> MessageOut:
        seller = self.sellers.get_logged_in_seller(token)
        alert = self._own_alert(seller, alert_id, "delete")

        self.repo.delete(alert)
        self.repo.commit()

        logger.info(f"Alert {alert_id} deleted")
        return MessageOut(message="Alert deleted successfully")

    def toggle_alert(self, token: str, alert_id: int, enabled: bool) -> InventoryAlertModel:
        seller = self.sellers.get_logged_in_seller(token)
        alert = self._own_alert(seller, alert_id, "modify")

        alert.alert_enabled = enabled
        alert.updated_at = now_utc()
        self.repo.commit()
        self.repo.refresh(alert)

        logger.info(f"Alert {alert.id} {'enabled' if enabled else 'disabled'}")
        return alert

    def dispatch_triggered_alerts(self, now: datetime | None = None) -> int:
        """
        Queues a low-stock notification for every triggered alert outside its
        cooldown window. Returns how many notifications were queued.
        """
        now = now or now_utc()
        sent = 0

        for alert in self.repo.list_triggered():
            if alert.last_alert_sent_at and now - alert.last_alert_sent_at < self.cooldown:
                continue

            self.notification_service.send_low_stock_alert(
                alert.seller_id,
                alert.product_id,
                alert.product.name,
                alert.product.quantity,
                alert.threshold_quantity,
                alert.quantity_to_restock,
            )
            alert.last_alert_sent_at = now
            alert.alert_count = (alert.alert_count or 0) + 1
            sent += 1

        self.repo.commit()
        logger.info(f"Dispatched {sent} low stock alert(s)")
        return sent

    #query - odczyt
    def get_alert(self, token: str, alert_id: int) -> InventoryAlertModel:
        seller = self.sellers.get_logged_in_seller(token)
        return self._own_alert(seller, alert_id, "view")

    def get_alert_for_product(self, token: str, product_id: int) -> InventoryAlertModel:
        seller = self.sellers.get_logged_in_seller(token)
        product = self._own_product(seller, product_id)

        alert = self.repo.get_by_product(product.id)
        if not alert:
            raise AlertNotFound(f"No alert configured for product {product_id}")
        return alert

    def get_alerts(self, token: str) -> list[InventoryAlertModel]:
        seller = self.sellers.get_logged_in_seller(token)
        return self.repo.list_by_seller(seller.id)

    def get_enabled_alerts(self, token: str) -> list[InventoryAlertModel]:
        seller = self.sellers.get_logged_in_seller(token)
        return self.repo.list_by_seller(seller.id, enabled_only=True)

    def get_triggered_alerts(self, token: str) -> list[InventoryAlertModel]:
        seller = self.sellers.get_logged_in_seller(token)
        return self.repo.list_triggered(seller.id)

    def get_all_triggered_alerts(self) -> list[InventoryAlertModel]:
        return self.repo.list_triggered()

    # =====================================================
    # helpers
    # =====================================================
    def _own_product(self, seller: SellerModel, product_id: int) -> ProductModel:
        product = self.products.get_product(product_id)
        if product.seller_id != seller.id:
            raise NotOwner("You can only set alerts for your own products")
        return product

    def _own_alert(self, seller: SellerModel, alert_id: int, action: str) -> InventoryAlertModel:
        alert = self.repo.get_alert(alert_id)
        if not alert:
            raise AlertNotFound(f"Alert not found with id: {alert_id}")
        if alert.seller_id != seller.id:
            raise NotOwner(f"You can only {action} your own alerts")
        return alert
