# storefront/services/auth_service.py
from sqlalchemy.orm import Session

from storefront.data.models.session import UserSessionModel
from storefront.domain.enums import Role
from storefront.domain.errors import AccountNotFound, VerificationFailed
from storefront.domain.schemas import CustomerCredentials, MessageOut, SellerCredentials
from storefront.repos.customer_repo import CustomerRepo
from storefront.repos.seller_repo import SellerRepo
from storefront.services.token_service import TokenService
from storefront.utils.security import verify_password
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class AuthService:
    """Login/logout for both roles on top of TokenService."""

    def __init__(self, db: Session, token_service: TokenService | None = None):
        self.customers = CustomerRepo(db)
        self.sellers = SellerRepo(db)
        self.tokens = token_service or TokenService(db)

    def login_customer(self, payload: CustomerCredentials) -> UserSessionModel:
        customer = self.customers.get_by_mobile(payload.mobile_no)
        if not customer:
            raise AccountNotFound("Customer record does not exist with given mobile number")

        if not verify_password(payload.password, customer.password_hash):
            logger.warning(f"Failed login for customer {customer.id}")
            raise VerificationFailed("Password incorrect. Try again.")

        return self.tokens.issue(customer.id, Role.CUSTOMER)

    def login_seller(self, payload: SellerCredentials) -> UserSessionModel:
        seller = self.sellers.get_by_mobile(payload.mobile)
        if not seller:
            raise AccountNotFound("Seller record does not exist with given mobile number")

        if not verify_password(payload.password, seller.password_hash):
            logger.warning(f"Failed login for seller {seller.id}")
            raise VerificationFailed("Password incorrect. Try again.")

        return self.tokens.issue(seller.id, Role.SELLER)

    def logout_customer(self, token: str) -> MessageOut:
        self.tokens.invalidate(token, Role.CUSTOMER)
        return MessageOut(message="Logged out successfully", token=token)

    def logout_seller(self, token: str) -> MessageOut:
        self.tokens.invalidate(token, Role.SELLER)
        return MessageOut(message="Logged out successfully", token=token)

    def check_token(self, token: str) -> UserSessionModel:
        return self.tokens.validate_any(token)
