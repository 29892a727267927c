import argon2
from password_strength import PasswordPolicy, PasswordStats

MIN_USERNAME_LENGTH = 6
MAX_USERNAME_LENGTH = 15
MIN_PASSWORD_LENGTH = 8

password_policy = PasswordPolicy.from_names(
    length=MIN_PASSWORD_LENGTH,
    uppercase=1,
    numbers=1,
    special=1,
)


class PasswordHasher:
    def __init__(self):
        self.hasher = argon2.PasswordHasher(
            time_cost=3,
            memory_cost=65536,
            parallelism=1,
            hash_len=32,
            salt_len=16
        )

    def hash_password(self, password: str) -> str:
        return self.hasher.hash(password)

    def verify_password(self, hashed_password: str, password: str) -> bool:
        try:
            return self.hasher.verify(hashed_password, password)
        except (argon2.exceptions.VerifyMismatchError,
                argon2.exceptions.VerificationError,
                argon2.exceptions.InvalidHashError):
            return False


def is_valid_username(name) -> bool:
    if not isinstance(name, str):
        return False
    return MIN_USERNAME_LENGTH <= len(name) <= MAX_USERNAME_LENGTH


def is_valid_password(password) -> bool:
    """Strong password: 8+ chars with a lowercase, an uppercase, a digit and a symbol."""
    if not isinstance(password, str):
        return False

    # The policy has no lowercase test of its own
    if password_policy.test(password):
        return False
    return PasswordStats(password).letters_lowercase >= 1
