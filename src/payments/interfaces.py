from abc import ABC, abstractmethod
from typing import Dict, Any

from payments.models import IntentLookup, PaymentIntentRecord


class PaymentProviderInterface(ABC):
    """Abstract interface for payment provider clients.

    This interface defines the only two provider operations the service
    relies on: creating a payment intent and retrieving one by ID.
    """

    @abstractmethod
    async def create_intent(
        self,
        params: Dict[str, Any]
    ) -> PaymentIntentRecord:
        """Create a payment intent with the payment provider.

        Args:
            params (Dict[str, Any]): Provider creation payload.

        Returns:
            PaymentIntentRecord: The created payment intent.

        Raises:
            ProviderError: If the provider rejects or fails the request.
        """
        pass

    @abstractmethod
    async def retrieve_intent(self, intent_id: str) -> IntentLookup:
        """Retrieve a payment intent from the payment provider.

        Args:
            intent_id (str): ID of the payment intent.

        Returns:
            IntentLookup: ``IntentFound`` with the record, ``IntentNotFound``
                when the provider does not know the ID, or ``ProviderFailure``
                for any other provider error.
        """
        pass
