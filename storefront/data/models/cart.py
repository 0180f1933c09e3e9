# storefront/data/models/cart.py
from decimal import Decimal

from sqlalchemy import Column, Integer, ForeignKey, Numeric
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class CartModel(Base):
    __tablename__ = "carts"

    id = Column(Integer, primary_key=True)
    customer_id = Column(Integer, ForeignKey("customers.id", ondelete="CASCADE"), unique=True, nullable=False)

    #total trzymany przyrostowo, nigdy nie liczony od nowa
    total = Column(Numeric(10, 2), nullable=False, default=Decimal("0.00"))

    customer = relationship("CustomerModel", back_populates="cart")
    items = relationship(
        "CartItemModel",
        back_populates="cart",
        cascade="all, delete-orphan",
        order_by="CartItemModel.id",
    )
