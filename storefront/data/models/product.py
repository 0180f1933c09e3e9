# storefront/data/models/product.py
from sqlalchemy import Column, Integer, String, Text, Numeric, Float, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    name = Column(String(120), nullable=False, index=True)
    price = Column(Numeric(10, 2), nullable=False)
    description = Column(Text, nullable=True)
    manufacturer = Column(String(120), nullable=True)

    quantity = Column(Integer, nullable=False, default=0)
    category = Column(String(20), nullable=False)
    status = Column(String(20), nullable=False, default="AVAILABLE")  # AVAILABLE, OUTOFSTOCK

    seller_id = Column(Integer, ForeignKey("sellers.id", ondelete="SET NULL"), nullable=True, index=True)

    average_rating = Column(Float, nullable=False, default=0.0)
    review_count = Column(Integer, nullable=False, default=0)

    seller = relationship("SellerModel", back_populates="products")

    __table_args__ = (CheckConstraint("quantity >= 0", name="ck_product_quantity_non_negative"),)
