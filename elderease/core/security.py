# Use bcrypt directly to avoid passlib/bcrypt version conflicts
import bcrypt

# =====================================================
# Application Settings
# =====================================================
from elderease.core.config import settings


# =====================================================
# Password Hashing Context
# =====================================================
class PasswordContext:
    """
    Salted, slow password hashing with bcrypt.

    The cost factor comes from BCRYPT_ROUNDS so tests can run with a
    cheap hash while production keeps ~250ms per verification.
    """

    def __init__(self, rounds: int):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """Salted bcrypt hash at the configured cost, as a UTF-8 string."""
        return bcrypt.hashpw(
            password.encode("utf-8"),
            bcrypt.gensalt(rounds=self.rounds)
        ).decode("utf-8")

    @staticmethod
    def verify(plain_password: str, hashed_password: str) -> bool:
        """True only for a matching password; a damaged hash never matches."""
        try:
            return bcrypt.checkpw(
                plain_password.encode("utf-8"),
                hashed_password.encode("utf-8")
            )
        except ValueError:
            # Malformed stored hash
            return False


# Password context instance
pwd_context = PasswordContext(rounds=settings.BCRYPT_ROUNDS)

# Compared against when no account matches, so unknown e-mails cost
# the same bcrypt work as wrong passwords.
_DUMMY_HASH = pwd_context.hash("elderease-timing-guard")


# =====================================================
# Password Utility Functions
# =====================================================
def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Empty input on either side is a mismatch, not an error."""
    if not plain_password or not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def burn_password_check(plain_password: str) -> None:
    """Run a throwaway verification to equalise login timing."""
    pwd_context.verify(plain_password or "", _DUMMY_HASH)


def get_password_hash(password: str) -> str:
    if not password:
        raise ValueError("Password cannot be empty")
    return pwd_context.hash(password)
