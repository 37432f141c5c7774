"""Configuration module for the Booking Payments service.

This module contains all configuration settings and dependency injection
functions for the service. It provides:

- Application settings management with environment variable support
- Structured JSON logging setup
- Dependency injection functions for FastAPI
- Payment provider and payment intent service wiring
- The optional bearer-token authentication gate

The module uses Pydantic settings for type-safe configuration management
and automatic environment variable loading.
"""
