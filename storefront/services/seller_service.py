# storefront/services/seller_service.py
from sqlalchemy.orm import Session

from storefront.data.models.seller import SellerModel
from storefront.domain.enums import ProductStatus, Role
from storefront.domain.errors import AccountAlreadyExists, AccountNotFound, NotOwner, VerificationFailed
from storefront.domain.schemas import MessageOut, SellerCreate, SellerCredentials, SellerUpdate
from storefront.repos.seller_repo import SellerRepo
from storefront.services.token_service import TokenService
from storefront.utils.security import hash_password, verify_password
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class SellerService:
    def __init__(self, db: Session, token_service: TokenService | None = None):
        self.repo = SellerRepo(db)
        self.tokens = token_service or TokenService(db)

    #query - odczyt
    def get_all_sellers(self) -> list[SellerModel]:
        sellers = self.repo.list_sellers()
        if not sellers:
            raise AccountNotFound("No seller found")
        return sellers

    def get_seller_by_id(self, seller_id: int) -> SellerModel:
        seller = self.repo.get_seller(seller_id)
        if not seller:
            raise AccountNotFound(f"Seller not found for this ID: {seller_id}")
        return seller

    def get_seller_by_mobile(self, token: str, mobile: str) -> SellerModel:
        self.tokens.validate(token, Role.SELLER)

        seller = self.repo.get_by_mobile(mobile)
        if not seller:
            raise AccountNotFound(f"Seller not found with mobile: {mobile}")
        return seller

    def get_logged_in_seller(self, token: str) -> SellerModel:
        session = self.tokens.validate(token, Role.SELLER)
        seller = self.repo.get_seller(session.user_id)
        if not seller:
            raise AccountNotFound("Seller does not exist")
        return seller

    #commands
    def register(self, payload: SellerCreate) -> SellerModel:
        if self.repo.get_by_mobile(payload.mobile):
            raise AccountAlreadyExists("Seller already exists with this mobile number. Please try to login.")
        if self.repo.get_by_email(payload.email):
            raise AccountAlreadyExists("Seller already exists with this email")

        seller = SellerModel(
            first_name=payload.first_name,
            last_name=payload.last_name,
            mobile=payload.mobile,
            email=payload.email,
            password_hash=hash_password(payload.password),
        )
        self.repo.add(seller)
        self.repo.commit()
        self.repo.refresh(seller)

        logger.info(f"Seller {seller.id} registered")
        return seller

    def update_seller(self, token: str, payload: SellerUpdate) -> SellerModel:
        seller = self.get_logged_in_seller(token)

        if payload.email and payload.email != seller.email:
            other = self.repo.get_by_email(payload.email)
            if other and other.id != seller.id:
                raise AccountAlreadyExists("Email already registered to another seller")
            seller.email = payload.email
        if payload.first_name:
            seller.first_name = payload.first_name
        if payload.last_name:
            seller.last_name = payload.last_name

        self.repo.commit()
        self.repo.refresh(seller)
        return seller

    def update_mobile(self, token: str, payload: SellerCredentials) -> SellerModel:
        seller = self.get_logged_in_seller(token)

        if not verify_password(payload.password, seller.password_hash):
            raise VerificationFailed("Error occurred in updating mobile number. Password does not match")

        other = self.repo.get_by_mobile(payload.mobile)
        if other and other.id != seller.id:
            raise AccountAlreadyExists("Mobile number already registered to another seller")

        seller.mobile = payload.mobile
        self.repo.commit()
        self.repo.refresh(seller)

        logger.info(f"Seller {seller.id} changed mobile number")
        return seller

    def update_password(self, token: str, payload: SellerCredentials) -> MessageOut:
        seller = self.get_logged_in_seller(token)

        if payload.mobile != seller.mobile:
            raise VerificationFailed("Verification error. Mobile number does not match")

        seller.password_hash = hash_password(payload.password)
        self.tokens.invalidate(token, Role.SELLER)

        logger.info(f"Seller {seller.id} changed password")
        return MessageOut(message="Password updated successfully. Login again")

    def delete_seller(self, token: str, seller_id: int) -> MessageOut:
        session = self.tokens.validate(token, Role.SELLER)
        seller = self.get_seller_by_id(seller_id)

        if seller.id != session.user_id:
            raise NotOwner("Verification error in deleting seller account")

        # produkty zostają w katalogu z seller_id = NULL, bez stanu nie da się ich kupić
        for product in seller.products:
            product.quantity = 0
            product.status = ProductStatus.OUTOFSTOCK.value
        self.repo.delete(seller)
        self.tokens.invalidate(token, Role.SELLER)

        logger.info(f"Seller {seller_id} deleted")
        return MessageOut(message="Seller account deleted successfully")
