"""Payments module for the Booking Payments service.

This module provides the payment intent orchestration layer: it creates
payment intents for bookings and validates existing ones against the
payment provider, translating provider outcomes into a stable result and
error taxonomy.

The module includes:
- PaymentProviderInterface: Narrow abstract interface for payment providers
- StripePaymentProvider: Stripe implementation of the provider interface
- SecretResolver: Provider secret key lookup from runtime config or environment
- Error translation from provider failures to caller-facing errors
- PaymentIntentService: The create and validate operations

The provider interface keeps the operations testable with an in-memory
provider and leaves room for providers other than Stripe.
"""
