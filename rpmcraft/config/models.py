from pydantic import BaseModel, Field
from typing import Literal


class PayloadConfig(BaseModel):
    chunk_size: int = Field(default=1024, gt=0)


class PluginsConfig(BaseModel):
    analyzer: str | None = None


class RpmcraftConfig(BaseModel):
    payload: PayloadConfig = Field(default_factory=PayloadConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
