from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import jwt, JWTError
from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    if len(password.encode("utf-8")) > 72:
        raise ValueError("Password too long for bcrypt (max 72 bytes). Please use a shorter password.")
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return pwd_context.verify(password, password_hash)
    except ValueError:
        return False


class InvalidToken(Exception):
    pass


@dataclass(frozen=True)
class TokenIdentity:
    id: int
    username: str
    role: str


class TokenService:
    """Issues and verifies signed, time-limited access tokens.

    Verification is stateless: there is no revocation list. The role carried in
    the token is advisory, authorization re-reads it from the database.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 24 * 60):
        self._secret_key = secret_key
        self._algorithm = algorithm
        self.lifetime = timedelta(minutes=expire_minutes)

    def issue(self, identity: TokenIdentity, now: datetime | None = None) -> str:
        now = now or datetime.now(timezone.utc)
        exp = now + self.lifetime
        payload = {
            "sub": str(identity.id),
            "username": identity.username,
            "role": identity.role,
            "iat": int(now.timestamp()),
            "exp": int(exp.timestamp()),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str, now: datetime | None = None) -> TokenIdentity:
        try:
            # expiry is checked below against `now` so callers can pin the clock
            claims = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"verify_exp": False},
            )
        except JWTError as e:
            raise InvalidToken(str(e)) from e

        try:
            exp = int(claims["exp"])
            identity = TokenIdentity(
                id=int(claims["sub"]),
                username=str(claims["username"]),
                role=str(claims["role"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidToken("Malformed token claims") from e

        now = now or datetime.now(timezone.utc)
        if now.timestamp() >= exp:
            raise InvalidToken("Token expired")
        return identity
