"""
NoteKeep Backend — Password Hashing
====================================

What:  Hash and verify passwords with passlib's CryptContext (bcrypt).
Who:   UserService.register (hash) and UserService.authenticate (verify).

bcrypt only reads the first 72 bytes of a password; the 100-character
input limit means very long multi-byte passwords are truncated by the
algorithm, not by this module.
"""

from passlib.context import CryptContext

from notekeep.config import settings

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    return pwd_context.verify(plain_password, password_hash)


# Verified against when the email is unknown, so a failed login costs the
# same time whether or not the account exists
DUMMY_HASH = pwd_context.hash("notekeep-timing-equalizer")
