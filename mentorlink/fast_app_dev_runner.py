"""
Development ASGI entry point for the mentorship service.

This script performs the following steps:
1. Builds application dependencies via AppDependencyBuilder.
2. Creates the FastAPI application instance with all controllers/services injected
   and the interactive docs enabled.
3. Runs the application using Uvicorn ASGI server with auto-reload.

Sign in through POST /api/auth/login with a seeded account (see tools/seed_db.py)
and pass the returned token as `Authorization: Bearer <token>`.
"""

import uvicorn
from mentorlink.utils.app_dependency_builder import AppDependencyBuilder

# Build application dependencies
builder = AppDependencyBuilder()

# Create FastAPI app with injected dependencies
app = builder.fast_app_factory.create_app()

# Run the ASGI server (development mode)
if __name__ == "__main__":
    uvicorn.run(
        "mentorlink.fast_app_dev_runner:app", host="0.0.0.0", port=5001, reload=True
    )
