# storefront/repos/session_repo.py
from datetime import datetime

from sqlalchemy import select, delete

from storefront.data.models.session import UserSessionModel
from storefront.repos.base import Repo


class SessionRepo(Repo):
    def get_by_token(self, token: str) -> UserSessionModel | None:
        return self.db.execute(
            select(UserSessionModel).where(UserSessionModel.token == token)
        ).scalar_one_or_none()

    def get_by_user(self, user_id: int, role: str) -> UserSessionModel | None:
        return self.db.execute(
            select(UserSessionModel).where(
                UserSessionModel.user_id == user_id,
                UserSessionModel.role == role,
            )
        ).scalar_one_or_none()

    def delete_expired(self, now: datetime) -> int:
        result = self.db.execute(
            delete(UserSessionModel)
            .where(UserSessionModel.end_time < now)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount or 0
