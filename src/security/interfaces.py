from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Optional


class CallerTokenManagerInterface(ABC):
    """Abstract interface for the caller tokens checked by the authentication gate.

    A caller token identifies the client application user calling a payment
    operation. It carries the caller ID as its subject and is only accepted
    when it was issued by the configured issuer.
    """

    @abstractmethod
    def issue_caller_token(
        self,
        caller_id: str,
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """Issue a signed token for a caller.

        Args:
            caller_id (str): ID of the caller, stored as the token subject.
            expires_delta (Optional[timedelta]): Custom lifetime of the token.

        Returns:
            str: Encoded caller token.
        """
        pass

    @abstractmethod
    def verify_caller_token(self, token: str) -> str:
        """Verify a caller token and return the caller it identifies.

        Args:
            token (str): The encoded caller token.

        Returns:
            str: The caller ID.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the token is malformed, badly signed, from
                another issuer or has no subject.
        """
        pass
