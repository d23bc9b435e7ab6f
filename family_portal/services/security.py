from datetime import datetime, timedelta, timezone
from passlib.context import CryptContext
import jwt
from ..core.config import settings
pin_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

def hash_pin(pin: str) -> str:
    return pin_context.hash(pin)

def verify_pin(pin: str, hashed: str) -> bool:
    return pin_context.verify(pin, hashed)

def create_access_token(sub: str, minutes: int | None = None) -> str:
    exp_min = minutes if minutes is not None else settings.ACCESS_TOKEN_MIN
    expire = datetime.now(timezone.utc) + timedelta(minutes=exp_min)
    payload = {"sub": sub, "exp": expire}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm="HS256")

def decode_access_token(token: str) -> dict:
    return jwt.decode(token, settings.SECRET_KEY, algorithms=["HS256"])
