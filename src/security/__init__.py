"""Security module for the Booking Payments service.

This module provides the bearer-token verification used by the optional
authentication gate in front of the payment operations.

The module includes:
- CallerTokenManagerInterface: Abstract interface for caller tokens
- CallerTokenManager: python-jose implementation of the interface

The gate is disabled by default, leaving both payment operations open to
guest bookings.
"""
