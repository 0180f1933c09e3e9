# storefront/data/models/seller.py
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class SellerModel(Base):
    __tablename__ = "sellers"

    id = Column(Integer, primary_key=True)
    first_name = Column(String(60), nullable=False)
    last_name = Column(String(60), nullable=False)
    mobile = Column(String(15), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)

    products = relationship("ProductModel", back_populates="seller")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
