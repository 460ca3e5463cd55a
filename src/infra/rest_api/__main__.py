"""python -m src.infra.rest_api でサーバーを起動する"""

import uvicorn

from src.infra.config import Settings


def main() -> None:
    settings = Settings()
    uvicorn.run(
        "src.infra.rest_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "development",
    )


if __name__ == "__main__":
    main()
