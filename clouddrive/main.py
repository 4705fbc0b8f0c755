import uvicorn

from clouddrive.configs.setup import create_app
from clouddrive.configs.settings import settings

app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "clouddrive.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.APP_ENV == "dev",
    )
