# storefront/data/models/inventory_alert.py
from sqlalchemy import Column, Integer, Boolean, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class InventoryAlertModel(Base):
    __tablename__ = "inventory_alerts"

    id = Column(Integer, primary_key=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), unique=True, nullable=False)
    seller_id = Column(Integer, ForeignKey("sellers.id", ondelete="CASCADE"), nullable=False, index=True)

    threshold_quantity = Column(Integer, nullable=False)
    alert_enabled = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    last_alert_sent_at = Column(DateTime, nullable=True)
    alert_count = Column(Integer, nullable=False, default=0)

    product = relationship("ProductModel")
    seller = relationship("SellerModel")

    __table_args__ = (CheckConstraint("threshold_quantity >= 0", name="ck_alert_threshold_non_negative"),)

    @property
    def triggered(self) -> bool:
        #liczone przy każdym odczycie, nic nie jest cache'owane
        return bool(self.alert_enabled) and self.product.quantity <= self.threshold_quantity

    @property
    def quantity_to_restock(self) -> int:
        return max(0, self.threshold_quantity - self.product.quantity + 1)
