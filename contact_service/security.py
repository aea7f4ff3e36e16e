from werkzeug.security import check_password_hash, generate_password_hash

from .settings import Settings

def hash_password(password: str, settings: Settings) -> str:
    return generate_password_hash(
        password,
        method=settings.password_hash_method,
        salt_length=settings.password_salt_length,
    )

def verify_password(pwhash: str, password: str) -> bool:
    return check_password_hash(pwhash, password)
