from fastapi import FastAPI
from mentorlink.common.api_endpoints import API_PREFIX, HEALTH_ENDPOINT
from mentorlink.common.fast_api_error_handler import register_exception_handlers
from mentorlink.utils.auth_middleware import AuthMiddleware


class FastAppFactory:
    """
    Factory class for creating and configuring a FastAPI application.

    This class encapsulates the setup of the FastAPI app, including
    routing, dependencies, and any middleware or configuration.
    """

    def __init__(
        self,
        authentication_controller,
        authentication_service,
        mentorship_controller,
        database=None,
    ):
        """
        Initialize the factory.

        Args:
            authentication_controller: Controller instance responsible for registration, login and `/users/me`.
            authentication_service: AuthenticationService instance used by middleware to validate requests.
            mentorship_controller: MentorshipController serving preferences, requests, decisions and the directory.
            database: Optional Database whose engine is disposed on shutdown.
        """
        self.authentication_controller = authentication_controller
        self.authentication_service = authentication_service
        self.mentorship_controller = mentorship_controller
        self.database = database

    def create_app(self, is_prod: bool = False) -> FastAPI:
        """
        Create and configure a FastAPI application instance.

        This method performs the following setup steps:
            1. Initializes the FastAPI application.
                - In production mode (is_prod=True), disables Swagger UI, ReDoc,
                    and the OpenAPI schema endpoints.
            2. Registers exception handlers (domain errors first, then the global one).
            3. Adds authentication middleware using AuthMiddleware.
            4. Registers the controller routes under the '/api' prefix.
            5. Adds a simple health check endpoint at '/fastapi/health'.

        Args:
            is_prod (bool): Whether the application is running in production mode.

        Returns:
            FastAPI: A fully configured FastAPI application instance.
        """
        app = FastAPI(
            docs_url=None if is_prod else "/docs",
            redoc_url=None if is_prod else "/redoc",
            openapi_url=None if is_prod else "/openapi.json",
        )

        register_exception_handlers(app)

        app.add_middleware(AuthMiddleware, auth_service=self.authentication_service)

        app.include_router(self.authentication_controller.router, prefix=API_PREFIX)
        app.include_router(self.mentorship_controller.router, prefix=API_PREFIX)

        @app.get(HEALTH_ENDPOINT)
        def health_check():
            """
            Health check endpoint.

            Returns:
                dict: JSON containing the health status.
            """
            return {"Hello": "World!"}

        if self.database is not None:
            app.add_event_handler("shutdown", self.database.close)

        return app
