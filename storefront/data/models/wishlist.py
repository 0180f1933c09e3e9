# storefront/data/models/wishlist.py
from sqlalchemy import Column, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class WishlistModel(Base):
    __tablename__ = "wishlists"

    id = Column(Integer, primary_key=True)
    customer_id = Column(Integer, ForeignKey("customers.id", ondelete="CASCADE"), unique=True, nullable=False)

    customer = relationship("CustomerModel", back_populates="wishlist")
    items = relationship(
        "WishlistItemModel",
        back_populates="wishlist",
        cascade="all, delete-orphan",
    )


class WishlistItemModel(Base):
    __tablename__ = "wishlist_items"

    id = Column(Integer, primary_key=True)
    wishlist_id = Column(Integer, ForeignKey("wishlists.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    added_at = Column(DateTime, nullable=False)

    wishlist = relationship("WishlistModel", back_populates="items")
    product = relationship("ProductModel")

    __table_args__ = (UniqueConstraint("wishlist_id", "product_id", name="u_wishlist_product"),)
