"""Custom exceptions module for the Booking Payments service.

This module contains all custom exception classes used throughout the service.
These exceptions provide specific error handling for different domains:

- Payment exceptions forming the caller-facing error taxonomy
- Provider exceptions raised at the payment provider boundary
- Security exceptions for the optional authentication gate

Every payment exception carries an error kind which the HTTP layer turns
into a status code and a machine-readable error status.
"""
