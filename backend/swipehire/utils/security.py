import bcrypt

# bcrypt ignores (newer builds: rejects) input past 72 bytes.
_BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes | None:
    raw = (password or "").encode("utf-8")
    if not raw or len(raw) > _BCRYPT_MAX_BYTES:
        return None
    return raw


def hash_password(password: str) -> str:
    raw = _password_bytes(password)
    if raw is None:
        raise ValueError("Password must be between 1 and 72 bytes")
    return bcrypt.hashpw(raw, bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """False for anything that can't match, including a malformed stored hash."""
    raw = _password_bytes(password)
    if raw is None or not hashed:
        return False
    try:
        return bcrypt.checkpw(raw, hashed.encode("utf-8"))
    except ValueError:
        return False
