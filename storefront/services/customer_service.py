# storefront/services/customer_service.py
from decimal import Decimal

from sqlalchemy.orm import Session

from storefront.data.models.cart import CartModel
from storefront.data.models.customer import AddressModel, CustomerModel
from storefront.data.models.wishlist import WishlistModel
from storefront.domain.enums import Role
from storefront.domain.errors import (
    AccountAlreadyExists,
    AccountNotFound,
    AddressNotFound,
    VerificationFailed,
)
from storefront.domain.schemas import (
    AddressIn,
    CreditCardIn,
    CustomerCreate,
    CustomerCredentials,
    CustomerUpdate,
    MessageOut,
)
from storefront.repos.customer_repo import CustomerRepo
from storefront.services.token_service import TokenService
from storefront.utils.security import hash_password, now_utc, verify_password
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CustomerService:
    """
    Konta klientów.

    Rejestracja zakłada od razu pusty koszyk i wishlistę, reszta operacji
    działa na zalogowanym kliencie (token z nagłówka).
    """

    def __init__(self, db: Session, token_service: TokenService | None = None):
        self.repo = CustomerRepo(db)
        self.tokens = token_service or TokenService(db)

    #query - odczyt
    def get_logged_in_customer(self, token: str) -> CustomerModel:
        session = self.tokens.validate(token, Role.CUSTOMER)
        customer = self.repo.get_customer(session.user_id)
        if not customer:
            raise AccountNotFound("Customer does not exist")
        return customer

    def get_all_customers(self, seller_token: str) -> list[CustomerModel]:
        self.tokens.validate(seller_token, Role.SELLER)

        customers = self.repo.list_customers()
        if not customers:
            raise AccountNotFound("No record exists")
        return customers

    #commands
    def register(self, payload: CustomerCreate) -> CustomerModel:
        if self.repo.get_by_mobile(payload.mobile_no):
            raise AccountAlreadyExists("Customer already exists. Please try to login with your mobile no")
        if self.repo.get_by_email(payload.email):
            raise AccountAlreadyExists("Customer already exists with this email")

        customer = CustomerModel(
            first_name=payload.first_name,
            last_name=payload.last_name,
            mobile_no=payload.mobile_no,
            email=payload.email,
            password_hash=hash_password(payload.password),
            created_on=now_utc(),
        )
        customer.cart = CartModel(total=Decimal("0.00"))
        customer.wishlist = WishlistModel()

        self.repo.add(customer)
        self.repo.commit()
        self.repo.refresh(customer)

        logger.info(f"Customer {customer.id} registered")
        return customer

    def update_customer(self, token: str, payload: CustomerUpdate) -> CustomerModel:
        customer = self.get_logged_in_customer(token)

        if payload.mobile_no and payload.mobile_no != customer.mobile_no:
            other = self.repo.get_by_mobile(payload.mobile_no)
            if other and other.id != customer.id:
                raise AccountAlreadyExists("Mobile number already registered to another account")
            customer.mobile_no = payload.mobile_no

        if payload.email and payload.email != customer.email:
            other = self.repo.get_by_email(payload.email)
            if other and other.id != customer.id:
                raise AccountAlreadyExists("Email already registered to another account")
            customer.email = payload.email

        if payload.first_name:
            customer.first_name = payload.first_name
        if payload.last_name:
            customer.last_name = payload.last_name
        if payload.password:
            customer.password_hash = hash_password(payload.password)

        for address_type, address in (payload.addresses or {}).items():
            self._put_address(customer, address_type, address)

        self.repo.commit()
        self.repo.refresh(customer)

        logger.info(f"Customer {customer.id} updated")
        return customer

    def update_password(self, token: str, payload: CustomerCredentials) -> MessageOut:
        customer = self.get_logged_in_customer(token)

        if payload.mobile_no != customer.mobile_no:
            raise VerificationFailed("Verification error. Mobile number does not match")

        customer.password_hash = hash_password(payload.password)
        # zmiana hasła = wylogowanie, invalidate robi commit
        self.tokens.invalidate(token, Role.CUSTOMER)

        logger.info(f"Customer {customer.id} changed password")
        return MessageOut(message="Password updated successfully. Login again")

    def update_address(self, token: str, address_type: str, address: AddressIn) -> CustomerModel:
        customer = self.get_logged_in_customer(token)
        self._put_address(customer, address_type, address)

        self.repo.commit()
        self.repo.refresh(customer)
        return customer

    def delete_address(self, token: str, address_type: str) -> CustomerModel:
        customer = self.get_logged_in_customer(token)

        address = customer.address_of_type(address_type)
        if not address:
            raise AddressNotFound(f"No address saved with type '{address_type}'")

        customer.addresses.remove(address)
        self.repo.commit()
        self.repo.refresh(customer)
        return customer

    def update_credit_card(self, token: str, card: CreditCardIn) -> CustomerModel:
        customer = self.get_logged_in_customer(token)

        customer.card_number = card.card_number
        customer.card_validity = card.card_validity
        customer.card_cvv = card.card_cvv

        self.repo.commit()
        self.repo.refresh(customer)

        logger.info(f"Customer {customer.id} updated card ending {card.card_number[-4:]}")
        return customer

    def delete_customer(self, token: str, payload: CustomerCredentials) -> MessageOut:
        customer = self.get_logged_in_customer(token)

        if payload.mobile_no != customer.mobile_no or not verify_password(payload.password, customer.password_hash):
            raise VerificationFailed("Verification error in deleting account. Please re-check details")

        customer_id = customer.id
        # koszyk, wishlista i adresy idą kaskadowo, zamówienia zostają z NULL
        self.repo.delete(customer)
        self.tokens.invalidate(token, Role.CUSTOMER)

        logger.info(f"Customer {customer_id} deleted")
        return MessageOut(message="Account deleted successfully")

    # =====================================================
    # helpers
    # =====================================================
    @staticmethod
    def _put_address(customer: CustomerModel, address_type: str, address: AddressIn) -> None:
        existing = customer.address_of_type(address_type)
        if existing:
            for field, value in address.model_dump().items():
                setattr(existing, field, value)
            return
        customer.addresses.append(AddressModel(address_type=address_type, **address.model_dump()))
