from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "Recipe Engine"
    log_level: str = "INFO"

    # Input bounds (checked before the engine runs)
    max_input_chars: int = 20000
    max_input_lines: int = 500

    # Rate limiting (slowapi syntax)
    parse_rate_limit: str = "100/minute"

    # Parser
    brand_detection: bool = True  # Leading capitalized tokens -> brand

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost",
        "http://127.0.0.1",
    ]


settings = Settings()
