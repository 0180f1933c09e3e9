# storefront/repos/order_repo.py
from datetime import date

from sqlalchemy import select, update

from storefront.data.models.order import OrderModel
from storefront.domain.enums import OrderStatus
from storefront.repos.base import Repo


class OrderRepo(Repo):
    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def list_orders(self) -> list[OrderModel]:
        return list(self.db.execute(select(OrderModel).order_by(OrderModel.id)).scalars())

    def list_by_date(self, day: date) -> list[OrderModel]:
        stmt = select(OrderModel).where(OrderModel.order_date == day).order_by(OrderModel.id)
        return list(self.db.execute(stmt).scalars())

    def list_by_customer(self, customer_id: int) -> list[OrderModel]:
        stmt = select(OrderModel).where(OrderModel.customer_id == customer_id).order_by(OrderModel.id)
        return list(self.db.execute(stmt).scalars())

    def mark_cancelled(self, order_id: int) -> int:
        """
        UPDATE orders SET status = 'CANCELLED'
        WHERE id = :id AND status != 'CANCELLED'

        Zwraca rowcount; 0 oznacza, że ktoś inny już anulował zamówienie.
        """
        result = self.db.execute(
            update(OrderModel)
            .where(OrderModel.id == order_id, OrderModel.status != OrderStatus.CANCELLED.value)
            .values(status=OrderStatus.CANCELLED.value)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount
