import uvicorn

from role_model_matcher.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run("role_model_matcher.api.app:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
