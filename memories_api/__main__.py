import uvicorn

from memories_api.core.config import settings


def main() -> None:
    uvicorn.run(
        'memories_api.main:app',
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_config=None,
    )


if __name__ == '__main__':
    main()
