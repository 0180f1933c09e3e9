# storefront/repos/customer_repo.py
from sqlalchemy import select

from storefront.data.models.customer import CustomerModel
from storefront.repos.base import Repo


class CustomerRepo(Repo):
    def get_customer(self, customer_id: int) -> CustomerModel | None:
        return self.db.get(CustomerModel, customer_id)

    def get_by_mobile(self, mobile_no: str) -> CustomerModel | None:
        return self.db.execute(
            select(CustomerModel).where(CustomerModel.mobile_no == mobile_no)
        ).scalar_one_or_none()

    def get_by_email(self, email: str) -> CustomerModel | None:
        return self.db.execute(
            select(CustomerModel).where(CustomerModel.email == email)
        ).scalar_one_or_none()

    def list_customers(self) -> list[CustomerModel]:
        return list(self.db.execute(select(CustomerModel).order_by(CustomerModel.id)).scalars())
