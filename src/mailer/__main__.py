"""
Run the service with uvicorn: ``python -m mailer``.
"""

import os

import uvicorn


def main() -> None:
    uvicorn.run(
        "mailer.main:create_app",
        factory=True,
        host=os.getenv("MAILER_BIND_HOST", "127.0.0.1"),
        port=int(os.getenv("MAILER_BIND_PORT", "8001")),
    )


if __name__ == "__main__":
    main()
