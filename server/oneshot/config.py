from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Fixed delay (seconds) between submitting a keyword and the deck preview
    generation_delay_secs: float = 3.0

    # Theme selected when a new session starts ("modern", "creative", "minimal")
    default_theme: str = "modern"

    # App
    cors_origins: list[str] = ["http://localhost:3000"]
    debug: bool = True

    # Upper bound on concurrently hosted sessions
    max_sessions: int = 1000

    # Seconds a session survives after its last socket disconnects; a reconnect
    # inside this window keeps it alive
    session_disconnect_grace_secs: float = 30.0

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
