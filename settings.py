from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_PROCESS_NAME = "msmdsrv.exe"


class ExtractorSettings(BaseSettings):
    """Defaults for a run, overridable with SYMBOL_EXTRACTOR_* env vars or a .env file.

    Command-line flags take precedence over anything loaded here.
    """

    port: int = 0  # 0 means auto-detect
    output: str = "output.json"
    host: str = "localhost"
    process_name: str = DEFAULT_PROCESS_NAME

    model_config = SettingsConfigDict(
        env_prefix="SYMBOL_EXTRACTOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
