"""
Lance l'API storefront en local: python -m storefront_api
- PORT (8000), UVICORN_RELOAD ("1"/"true"/"yes"), LOG_LEVEL ("info")
Le client storefront pointe dessus via API_BASE_URL.
"""
import os

import uvicorn


def main() -> None:
    uvicorn.run(
        "storefront_api.asgi:app",
        host=os.environ.get("HOST", "127.0.0.1"),
        port=int(os.environ.get("PORT", 8000)),
        reload=os.environ.get("UVICORN_RELOAD", "").lower() in ("1", "true", "yes"),
        log_level=os.environ.get("LOG_LEVEL", "info"),
    )


if __name__ == "__main__":
    main()
