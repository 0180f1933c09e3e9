# storefront/data/models/session.py
from sqlalchemy import Column, Integer, String, DateTime, UniqueConstraint

from storefront.data.database import Base


class UserSessionModel(Base):
    __tablename__ = "user_sessions"

    id = Column(Integer, primary_key=True)
    token = Column(String(64), unique=True, nullable=False, index=True)
    user_id = Column(Integer, nullable=False)
    role = Column(String(16), nullable=False)  # customer, seller

    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)

    #jedna sesja na konto, customer i seller mają osobne sekwencje id
    __table_args__ = (UniqueConstraint("user_id", "role", name="u_session_user_role"),)
