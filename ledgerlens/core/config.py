"""Application configuration using pydantic settings with structured sections."""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 3000
    reload: bool = False


class ChainSettings(BaseModel):
    url: str = "wss://commune-archive-node-0.communeai.net"
    ss58_format: int = Field(default=42, ge=0, le=16383)
    page_size: int = Field(default=100, ge=1, le=1000)
    finalized: bool = False
    block_hash: Optional[str] = None
    max_retries: int = 5
    retry_timeout: float = 60.0


class SnapshotSettings(BaseModel):
    directory: Path = Field(default=Path("snapshots"))


class ReportSettings(BaseModel):
    existential_deposit: int = Field(default=500, ge=0)
    top_n: int = Field(default=10, ge=1)
    token_decimals: int = Field(default=9, ge=0)


class SignatureSettings(BaseModel):
    context: str = "substrate"
    default_scheme: Literal["sr25519", "ed25519"] = "sr25519"


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"
    project_name: str = "LedgerLens"
    api_prefix: str = ""

    server: ServerSettings = ServerSettings()
    chain: ChainSettings = ChainSettings()
    snapshots: SnapshotSettings = SnapshotSettings()
    report: ReportSettings = ReportSettings()
    signatures: SignatureSettings = SignatureSettings()

    @property
    def host(self) -> str:
        return self.server.host

    @property
    def port(self) -> int:
        return self.server.port

    @property
    def chain_url(self) -> str:
        return self.chain.url

    @property
    def ss58_format(self) -> int:
        return self.chain.ss58_format

    @property
    def snapshot_dir(self) -> Path:
        return self.snapshots.directory

    @property
    def signing_context(self) -> bytes:
        return self.signatures.context.encode("utf-8")


@lru_cache()
def get_settings() -> Settings:
    return Settings()
