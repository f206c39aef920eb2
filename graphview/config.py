from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings."""

    # Database Configuration
    neo4j_uri: str = Field(default="bolt://localhost:7687", env="NEO4J_URI")
    neo4j_username: str = Field(default="neo4j", env="NEO4J_USERNAME")
    neo4j_password: str = Field(default="neo4j", env="NEO4J_PASSWORD")
    neo4j_database: Optional[str] = Field(default="neo4j", env="NEO4J_DATABASE")

    # Server Configuration
    host: str = Field(default="0.0.0.0", env="HOST")
    port: int = Field(default=3000, env="PORT")
    upload_dir: str = Field(default="uploads", env="UPLOAD_DIR")
    static_dir: str = Field(
        default=str(Path(__file__).resolve().parent.parent / "static"),
        env="STATIC_DIR",
    )

    # Graph Loading Configuration
    snapshot_limit: int = Field(default=500, env="SNAPSHOT_LIMIT")
    fallback_limit: int = Field(default=300, env="FALLBACK_LIMIT")
    node_list_limit: int = Field(default=1000, env="NODE_LIST_LIMIT")

    # Rendering Configuration
    edge_curvature_base: float = Field(default=0.15, env="EDGE_CURVATURE_BASE")
    edge_curvature_step: float = Field(default=0.15, env="EDGE_CURVATURE_STEP")

    # Logging Configuration
    log_level: str = Field(default="INFO", env="LOG_LEVEL")
    log_file: str = Field(default="logs/app.log", env="LOG_FILE")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def log_dir(self) -> Path:
        """Get log directory path."""
        return Path(self.log_file).parent

    @property
    def upload_path(self) -> Path:
        """Get upload directory path."""
        return Path(self.upload_dir)

    def ensure_directories(self):
        """Ensure necessary directories exist."""
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.upload_path.mkdir(parents=True, exist_ok=True)


settings = Settings()
settings.ensure_directories()
