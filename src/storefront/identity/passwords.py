"""Password hashing with bcrypt."""

import bcrypt

from storefront.domain import storefront


def hash_password(password: str) -> str:
    rounds = int(getattr(storefront, "BCRYPT_ROUNDS", 12))
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str | None) -> bool:
    if not password or not password_hash:
        return False
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
