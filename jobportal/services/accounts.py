# jobportal/services/accounts.py
import hashlib
import logging
import secrets
from typing import Optional

from jobportal.core.config import settings
from jobportal.models.user import User, UserType, UserUpdate
from jobportal.services.database_service import DatabaseService

logger = logging.getLogger(__name__)

# Password hashing using PBKDF2-HMAC-SHA256 (avoids bcrypt backend issues)
_PBKDF2_ITERATIONS = settings.PASSWORD_HASH_ITERATIONS


class UserAlreadyExistsError(Exception):
    def __init__(self, email: str):
        super().__init__(f"User already exists with email {email}")
        self.email = email


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def hash_password(password: str, iterations: int = _PBKDF2_ITERATIONS) -> str:
    if password is None:
        password = ""
    salt = secrets.token_hex(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("utf-8"), iterations)
    return f"pbkdf2_sha256${iterations}${salt}${dk.hex()}"


def verify_password(plain: str, hashed: str) -> bool:
    if plain is None:
        plain = ""
    try:
        scheme, iterations, salt, hashhex = hashed.split("$")
        iterations = int(iterations)
    except (AttributeError, ValueError):
        return False
    if scheme != "pbkdf2_sha256":
        return False
    dk = hashlib.pbkdf2_hmac("sha256", plain.encode("utf-8"), salt.encode("utf-8"), iterations)
    return secrets.compare_digest(dk.hex(), hashhex)


async def register_user(
    service: DatabaseService,
    email: str,
    password: str,
    full_name: str,
    user_type: UserType,
    phone_number: Optional[str] = None,
) -> User:
    """
    Create an unverified account. Email uniqueness is checked here, before the
    insert; the store itself does not enforce unique indexes.
    """
    email = normalize_email(email)
    if await service.get_user_by_email(email):
        raise UserAlreadyExistsError(email)
    user = await service.create_user(
        {
            "email": email,
            "password_hash": hash_password(password),
            "full_name": full_name,
            "user_type": user_type,
            "phone_number": phone_number,
            "is_verified": False,
            "profile": {},
        }
    )
    logger.info("Registered %s account %s", user_type, user.id)
    return user


async def authenticate_user(service: DatabaseService, email: str, password: str) -> Optional[User]:
    user = await service.get_user_by_email(normalize_email(email))
    if user is None or not verify_password(password, user.password_hash):
        return None
    return user


async def mark_verified(service: DatabaseService, user_id: str, user_type: Optional[UserType] = None) -> Optional[User]:
    """Flag the account verified and clear any pending OTP."""
    changes = {"is_verified": True, "otp_code": None, "otp_expires_at": None}
    if user_type is not None:
        changes["user_type"] = user_type
    return await service.update_user(user_id, UserUpdate(**changes))
