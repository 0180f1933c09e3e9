from datetime import timedelta

import pytest

from storefront.data.models import UserSessionModel
from storefront.domain.enums import Role
from storefront.domain.errors import AlreadyLoggedIn, InvalidToken, SessionExpired
from storefront.services.token_service import CUSTOMER_PREFIX, SELLER_PREFIX, TokenService
from storefront.utils.security import now_utc


def _past_clock(hours=2):
    moment = now_utc() - timedelta(hours=hours)
    return lambda: moment


class TestIssue:
    def test_issue_creates_prefixed_token_with_window(self, db):
        session = TokenService(db, duration_seconds=3600).issue(7, Role.CUSTOMER)

        assert session.token.startswith(CUSTOMER_PREFIX)
        assert session.user_id == 7
        assert session.role == "customer"
        assert session.end_time - session.start_time == timedelta(hours=1)

    def test_seller_token_prefix(self, db):
        session = TokenService(db).issue(7, "seller")
        assert session.token.startswith(SELLER_PREFIX)

    def test_second_login_is_rejected(self, db):
        tokens = TokenService(db)
        tokens.issue(1, Role.CUSTOMER)

        with pytest.raises(AlreadyLoggedIn):
            tokens.issue(1, Role.CUSTOMER)

    def test_customer_and_seller_with_same_id_are_separate(self, db):
        tokens = TokenService(db)
        a = tokens.issue(1, Role.CUSTOMER)
        b = tokens.issue(1, Role.SELLER)
        assert a.token != b.token

    def test_expired_session_does_not_block_login(self, db):
        TokenService(db, clock=_past_clock()).issue(1, Role.CUSTOMER)

        fresh = TokenService(db).issue(1, Role.CUSTOMER)

        assert fresh.end_time > now_utc()
        assert db.query(UserSessionModel).count() == 1


class TestValidate:
    def test_valid_token_returns_session(self, db):
        tokens = TokenService(db)
        issued = tokens.issue(3, Role.SELLER)

        session = tokens.validate(issued.token, Role.SELLER)
        assert session.user_id == 3

    @pytest.mark.parametrize("token", [None, "", "   "])
    def test_blank_token(self, db, token):
        with pytest.raises(InvalidToken):
            TokenService(db).validate(token, Role.CUSTOMER)

    def test_wrong_prefix(self, db):
        tokens = TokenService(db)
        issued = tokens.issue(3, Role.SELLER)

        with pytest.raises(InvalidToken):
            tokens.validate(issued.token, Role.CUSTOMER)

    def test_unknown_token(self, db):
        with pytest.raises(InvalidToken):
            TokenService(db).validate(CUSTOMER_PREFIX + "nope", Role.CUSTOMER)

    def test_role_field_is_checked_not_just_prefix(self, db):
        tokens = TokenService(db)
        tokens.issue(3, Role.SELLER)
        # forged: customer prefix on a seller session
        row = db.query(UserSessionModel).one()
        row.token = CUSTOMER_PREFIX + "forged"
        db.commit()

        with pytest.raises(InvalidToken):
            tokens.validate(CUSTOMER_PREFIX + "forged", Role.CUSTOMER)

    def test_expired_token_is_deleted(self, db):
        issued = TokenService(db, clock=_past_clock()).issue(5, Role.CUSTOMER)
        token = issued.token

        with pytest.raises(SessionExpired):
            TokenService(db).validate(token, Role.CUSTOMER)

        assert db.query(UserSessionModel).filter_by(token=token).first() is None

    def test_validate_any_skips_role_check(self, db):
        tokens = TokenService(db)
        issued = tokens.issue(9, Role.SELLER)

        assert tokens.validate_any(issued.token).role == "seller"


class TestInvalidateAndSweep:
    def test_invalidate_removes_session(self, db):
        tokens = TokenService(db)
        issued = tokens.issue(1, Role.CUSTOMER)
        token = issued.token

        tokens.invalidate(token, Role.CUSTOMER)

        with pytest.raises(InvalidToken):
            tokens.validate(token, Role.CUSTOMER)
        # wylogowany może się zalogować ponownie
        tokens.issue(1, Role.CUSTOMER)

    def test_invalidate_unknown_token(self, db):
        with pytest.raises(InvalidToken):
            TokenService(db).invalidate(SELLER_PREFIX + "missing", Role.SELLER)

    def test_sweep_removes_only_expired(self, db):
        old = TokenService(db, clock=_past_clock())
        old.issue(1, Role.CUSTOMER)
        old.issue(2, Role.SELLER)
        TokenService(db).issue(3, Role.CUSTOMER)

        removed = TokenService(db).sweep_expired()

        assert removed == 2
        remaining = db.query(UserSessionModel).all()
        assert [s.user_id for s in remaining] == [3]
