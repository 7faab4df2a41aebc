import tempfile
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """إعدادات التطبيق العامة مع تحميل القيم من ملف .env عند توفره."""

    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[2] / ".env",
        env_file_encoding="utf-8",
        env_prefix="FILE_MERGER_",
        extra="ignore",
    )

    app_name: str = "File Merger API"
    app_version: str = "0.1.0"
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 8080

    temp_root: Optional[Path] = None
    temp_dir_prefix: str = "file-merger-tmp-"
    output_dir: Optional[Path] = None

    default_pdf_output: str = "merged.pdf"
    default_md_output: str = "merged.md"

    allow_origins: list[str] = Field(default_factory=lambda: ["*"])

    def configure_paths(self) -> None:
        """تهيئة المسارات الافتراضية وإنشاء المجلدات في حال غيابها."""
        self.temp_root = (self.temp_root or Path(tempfile.gettempdir())).resolve()
        self.output_dir = (self.output_dir or Path.cwd()).resolve()

        for directory in (self.temp_root, self.output_dir):
            directory.mkdir(parents=True, exist_ok=True)


@lru_cache()
def get_settings() -> Settings:
    settings = Settings()
    settings.configure_paths()
    return settings
