from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings pulled from environment variables."""

    # Canvas
    canvas_width: int = Field(default=800, gt=0, description="Default canvas width")
    canvas_height: int = Field(default=600, gt=0, description="Default canvas height")

    # Export
    svg_precision: int = Field(default=2, ge=0, le=6, description="Decimal places for SVG coordinates")
    output_dir: str = Field(default="./output", description="Directory for exported SVG files")

    # Seeding
    max_random_seed: int = Field(default=10000, gt=0, description="Exclusive upper bound for random seeds")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Logging format (e.g., plain, json)")

    model_config = SettingsConfigDict(
        env_prefix="PLOTGEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Instantiate singleton settings object
settings = Settings()
