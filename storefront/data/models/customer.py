# storefront/data/models/customer.py
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class CustomerModel(Base):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True)
    first_name = Column(String(60), nullable=False)
    last_name = Column(String(60), nullable=False)
    mobile_no = Column(String(15), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_on = Column(DateTime, nullable=False)

    card_number = Column(String(19), nullable=True)
    card_validity = Column(String(7), nullable=True)
    card_cvv = Column(String(4), nullable=True)

    addresses = relationship(
        "AddressModel",
        back_populates="customer",
        cascade="all, delete-orphan",
    )
    cart = relationship(
        "CartModel",
        back_populates="customer",
        uselist=False,
        cascade="all, delete-orphan",
    )
    wishlist = relationship(
        "WishlistModel",
        back_populates="customer",
        uselist=False,
        cascade="all, delete-orphan",
    )
    orders = relationship("OrderModel", back_populates="customer")

    @property
    def masked_card(self) -> str | None:
        if not self.card_number:
            return None
        return "*" * (len(self.card_number) - 4) + self.card_number[-4:]

    def address_of_type(self, address_type: str):
        for a in self.addresses:
            if a.address_type == address_type:
                return a
        return None


class AddressModel(Base):
    __tablename__ = "addresses"

    id = Column(Integer, primary_key=True)
    customer_id = Column(Integer, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False)
    address_type = Column(String(30), nullable=False)

    street_no = Column(String(20), nullable=True)
    building_name = Column(String(100), nullable=True)
    locality = Column(String(100), nullable=True)
    city = Column(String(60), nullable=False)
    state = Column(String(60), nullable=False)
    pincode = Column(String(10), nullable=False)

    customer = relationship("CustomerModel", back_populates="addresses")

    __table_args__ = (UniqueConstraint("customer_id", "address_type", name="u_customer_address_type"),)
