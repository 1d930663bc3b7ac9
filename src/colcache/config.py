from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageConfig(BaseModel):
    """On-disk layout of a table.

    Passed explicitly to the storage collaborators so that the key
    derivation never reads process-wide state.
    """

    model_config = {"frozen": True}

    metadata_dir: str = "Metadata"
    table_status_file: str = "tablestatus"
    segments_dir: str = "segments"
    fact_dir: str = "Fact"
    partition_dir: str = "Part0"
    segment_prefix: str = "Segment_"

    index_file_ext: str = ".carbonindex"
    merge_index_file_ext: str = ".carbonindexmerge"

    # Bloom datamap shard layout
    merge_shard_name: str = "mergeShard"
    merge_shard_inprogress: str = "mergeShard.inprogress"

    @property
    def index_extensions(self) -> tuple[str, str]:
        return (self.index_file_ext, self.merge_index_file_ext)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="COLCACHE_",
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # Redis (cache invalidation target)
    redis_url: str = Field(default="redis://localhost:6379/0", validation_alias="REDIS_URL")
    cache_key_prefix: str = "colcache"
    invalidation_batch_size: int = Field(default=500, ge=1)

    # Table layout
    storage: StorageConfig = Field(default_factory=StorageConfig)


settings = Settings()
