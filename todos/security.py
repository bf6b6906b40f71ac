import bcrypt


def hash_password(password: str) -> str:
    """Salted bcrypt hash suitable for users.password_hash."""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return bcrypt.checkpw(plain_password.encode(), hashed_password.encode())
