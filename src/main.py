from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from config.logging import configure_logging
from config.settings import get_settings
from routers import payments


def create_app() -> FastAPI:
    """Create and configure the FastAPI application with OpenAPI documentation.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    configure_logging(get_settings())

    app = FastAPI(
        title="Booking Payments API",
        description="""
        # Booking Payments API Documentation

        ## Overview
        This API creates and validates Stripe payment intents for bookings.

        ## Features
        - **Create Payment Intent**: Validate a booking payment request and create a payment intent
        - **Validate Payment Intent**: Check whether an existing payment intent allows the booking to proceed

        ## Authentication
        Both operations are open to guest bookings by default. When `PAYMENTS_REQUIRE_AUTH` is enabled, a JWT access token is required in the Authorization header.

        ## Error Handling
        Errors carry a status (`INVALID_ARGUMENT`, `FAILED_PRECONDITION`, `INTERNAL`, `UNAUTHENTICATED`) and a human-readable message. An unknown payment intent ID is not an error.

        ## Versioning
        This is version 1.0 of the API. All endpoints are prefixed with `/api/v1/`.
        """,
        version="1.0.0",
        servers=[
            {
                "url": "http://localhost:8000",
                "description": "Development server"
            }
        ],
    )

    api_version_index = "/api/v1"

    app.include_router(
        payments.router,
        prefix=f"{api_version_index}/payments",
        tags=["payments"]
    )

    @app.get(
        "/health",
        tags=["system"],
        summary="Health Check",
        description="Check if the API is running and healthy",
        response_description="API health status",
        responses={
            200: {
                "description": "API is healthy and operational",
                "content": {
                    "application/json": {
                        "example": {
                            "status": "healthy",
                            "version": "1.0.0"
                        }
                    }
                }
            }
        }
    )
    async def health_check():
        """Check API health status.

        Returns:
            dict: Health status information
        """
        return {
            "status": "healthy",
            "version": app.version
        }

    def custom_openapi():
        """Generate custom OpenAPI schema with the bearer security definition.

        Returns:
            dict: Custom OpenAPI schema
        """
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title=app.title,
            version=app.version,
            description=app.description,
            routes=app.routes,
        )

        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "BearerAuth": {
                "type": "http",
                "scheme": "bearer",
                "bearerFormat": "JWT",
                "description": "JWT access token, required only when "
                               "PAYMENTS_REQUIRE_AUTH is enabled"
            }
        }

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi

    return app


app = create_app()
