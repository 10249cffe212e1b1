from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    github_token: str = ""
    github_api_url: str = "https://api.github.com/rate_limit"
    github_accept: str = "application/vnd.github.v3+json"
    upstream_timeout: float = 10.0
    host: str = "127.0.0.1"
    port: int = 8000
    log_format: str = "text"
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
