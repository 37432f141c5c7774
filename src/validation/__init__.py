"""Validation module for the Booking Payments service.

This module provides request validation for the payment operations.
Validation runs before any call to the payment provider is made and turns
loosely-typed request bodies into typed request records.

The module includes:
- Payment intent creation payload validation
- Payment intent lookup payload validation

Checks run in a fixed order and the first failing check determines the
error reported to the caller.
"""
