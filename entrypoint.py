"""Backend entrypoint. Starts uvicorn with host and port from the environment."""
import os
import uvicorn

# Import the app object directly; uvicorn's string-based import is not needed here.
from virtual_trading.main import app


def main() -> None:
    host = os.environ.get("BACKEND_HOST", "127.0.0.1")
    port = int(os.environ.get("BACKEND_PORT", "8001"))
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
