"""Users service entry point: registration, authentication and profiles."""

import os
from dotenv import load_dotenv

# Must run before importing modules that read env vars (api.security)
load_dotenv()

from api.application import create_app
from api.routes import auth, users
from utils.logging import setup_structured_logging

SERVICE_NAME = "users-service"

setup_structured_logging(SERVICE_NAME)

app = create_app(
    SERVICE_NAME,
    "User registration, authentication and profile management",
    [users.router, auth.router],
)


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port, access_log=False)
