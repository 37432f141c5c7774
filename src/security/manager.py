from datetime import timedelta, datetime, timezone
from typing import Optional

from jose import jwt, ExpiredSignatureError, JWTError

from exceptions.security import TokenExpiredError, InvalidTokenError
from security.interfaces import CallerTokenManagerInterface


class CallerTokenManager(CallerTokenManagerInterface):
    """python-jose implementation of caller token issuing and verification."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str,
        issuer: str,
        expires_minutes: int
    ) -> None:
        """Initialize the caller token manager.

        Args:
            secret_key (str): Key the tokens are signed with.
            algorithm (str): JWT signing algorithm, e.g. 'HS256'.
            issuer (str): Expected value of the ``iss`` claim.
            expires_minutes (int): Default token lifetime in minutes.
        """
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._issuer = issuer
        self._lifetime = timedelta(minutes=expires_minutes)

    def issue_caller_token(
        self,
        caller_id: str,
        expires_delta: Optional[timedelta] = None
    ) -> str:
        issued_at = datetime.now(timezone.utc)
        claims = {
            "sub": caller_id,
            "iss": self._issuer,
            "iat": issued_at,
            "exp": issued_at + (expires_delta or self._lifetime),
        }
        return jwt.encode(claims, key=self._secret_key, algorithm=self._algorithm)

    def verify_caller_token(self, token: str) -> str:
        try:
            claims = jwt.decode(
                token,
                key=self._secret_key,
                algorithms=[self._algorithm],
                issuer=self._issuer
            )
        except ExpiredSignatureError:
            raise TokenExpiredError()
        except JWTError:
            raise InvalidTokenError()

        caller_id = claims.get("sub")
        if not isinstance(caller_id, str) or not caller_id:
            raise InvalidTokenError("Token does not identify a caller.")
        return caller_id
