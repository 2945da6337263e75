from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    ENV: str = "local"
    DATABASE_URL: str = "sqlite:///./catalog.db"
    LOG_LEVEL: str = "INFO"

    # search paging
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    # ratings / reviews
    TOP_RATED_DEFAULT_LIMIT: int = 5
    TOP_RATED_MAX_LIMIT: int = 100
    REVIEW_MAX_LENGTH: int = 2000

    @property
    def database_url(self):
        return self.DATABASE_URL

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "allow"

settings = Settings()
