# storefront/utils/security.py
from datetime import datetime, timezone

from passlib.context import CryptContext

pwd_ctx = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(p: str) -> str:
    return pwd_ctx.hash(p)


def verify_password(p: str, h: str) -> bool:
    if not p or not h:
        return False
    return pwd_ctx.verify(p, h)


def now_utc() -> datetime:
    # naive UTC, sqlite nie trzyma strefy
    return datetime.now(timezone.utc).replace(tzinfo=None)
