# storefront/services/token_service.py
import secrets
from datetime import datetime, timedelta
from typing import Callable

from sqlalchemy.orm import Session

from storefront.data.models.session import UserSessionModel
from storefront.domain.enums import Role
from storefront.domain.errors import AlreadyLoggedIn, InvalidToken, SessionExpired
from storefront.repos.session_repo import SessionRepo
from storefront.utils.security import now_utc
from storefront.utils.settings import SESSION_DURATION_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

CUSTOMER_PREFIX = "customer_"
SELLER_PREFIX = "seller_"

_PREFIXES = {
    Role.CUSTOMER: CUSTOMER_PREFIX,
    Role.SELLER: SELLER_PREFIX,
}


class TokenService:
    """
    Sesje logowania: token -> (user_id, rola, okno ważności).

    - issue: jedna aktywna sesja na konto, przeterminowana jest nadpisywana
    - validate: prefiks tokenu + rola zapisana w sesji + czas
    - invalidate: wylogowanie
    - sweep_expired: sprzątanie, odpalane z celery beat

    Prefiks "customer_"/"seller_" to tylko szybki filtr, o uprawnieniach
    decyduje pole ``role`` w wierszu sesji.
    """

    def __init__(
        self,
        db: Session,
        duration_seconds: int | None = None,
        clock: Callable[[], datetime] = now_utc,
    ):
        self.repo = SessionRepo(db)
        if duration_seconds is None:
            duration_seconds = SESSION_DURATION_SECONDS
        self.duration = timedelta(seconds=duration_seconds)
        self.clock = clock

    # =====================================================
    # COMMANDS
    # =====================================================
    def issue(self, user_id: int, role: Role | str) -> UserSessionModel:
        role = Role(role)
        now = self.clock()

        existing = self.repo.get_by_user(user_id, role.value)
        if existing:
            if not self._expired(existing, now):
                raise AlreadyLoggedIn("User already logged in")
            # stara sesja wygasła, traktujemy usera jako wylogowanego
            logger.info(f"Dropping stale {role.value} session for user {user_id}")
            self.repo.delete(existing)

        session = UserSessionModel(
            token=_PREFIXES[role] + secrets.token_urlsafe(24),
            user_id=user_id,
            role=role.value,
            start_time=now,
            end_time=now + self.duration,
        )
        self.repo.add(session)
        self.repo.commit()

        logger.info(f"Issued {role.value} session for user {user_id}, valid until {session.end_time}")
        return session

    def invalidate(self, token: str, expected_role: Role | str) -> UserSessionModel:
        """Logout. Requires a currently valid session; unknown tokens raise InvalidToken."""
        session = self.validate(token, expected_role)
        owner = f"{session.role} {session.user_id}"
        self.repo.delete(session)
        self.repo.commit()

        logger.info(f"Session closed for {owner}")
        return session

    def sweep_expired(self) -> int:
        removed = self.repo.delete_expired(self.clock())
        self.repo.commit()
        logger.info(f"Removed {removed} expired session(s)")
        return removed

    # =====================================================
    # QUERY
    # =====================================================
    def validate(self, token: str | None, expected_role: Role | str) -> UserSessionModel:
        role = Role(expected_role)
        token = (token or "").strip()

        if not token:
            raise InvalidToken(f"Invalid {role.value} token")
        if not token.startswith(_PREFIXES[role]):
            raise InvalidToken(f"Invalid {role.value} token")

        session = self._load(token)
        if session.role != role.value:
            raise InvalidToken(f"Invalid {role.value} token")
        return session

    def validate_any(self, token: str | None) -> UserSessionModel:
        token = (token or "").strip()
        if not token:
            raise InvalidToken("Token cannot be null or empty")
        return self._load(token)

    # =====================================================
    # helpers
    # =====================================================
    def _load(self, token: str) -> UserSessionModel:
        session = self.repo.get_by_token(token)
        if not session:
            raise InvalidToken("Invalid or expired session token")

        if self._expired(session, self.clock()):
            #wygasła -> kasujemy od razu, zanim zwrócimy błąd
            owner = f"{session.role} {session.user_id}"
            self.repo.delete(session)
            self.repo.commit()
            logger.info(f"Session of {owner} expired, removed")
            raise SessionExpired("Session expired. Login again")

        return session

    @staticmethod
    def _expired(session: UserSessionModel, now: datetime) -> bool:
        return session.end_time < now
