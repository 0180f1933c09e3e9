# storefront/repos/seller_repo.py
from sqlalchemy import select

from storefront.data.models.seller import SellerModel
from storefront.repos.base import Repo


class SellerRepo(Repo):
    def get_seller(self, seller_id: int) -> SellerModel | None:
        return self.db.get(SellerModel, seller_id)

    def get_by_mobile(self, mobile: str) -> SellerModel | None:
        return self.db.execute(
            select(SellerModel).where(SellerModel.mobile == mobile)
        ).scalar_one_or_none()

    def get_by_email(self, email: str) -> SellerModel | None:
        return self.db.execute(
            select(SellerModel).where(SellerModel.email == email)
        ).scalar_one_or_none()

    def list_sellers(self) -> list[SellerModel]:
        return list(self.db.execute(select(SellerModel).order_by(SellerModel.id)).scalars())
