"""ตั้งค่าแอปพลิเคชันจาก environment variable และไฟล์ .env ไว้ที่เดียว"""

from pydantic_settings import BaseSettings
from typing import List
from pathlib import Path


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./taxonomy_portal.db"
    DEBUG: bool = True
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Search
    SEARCH_PAGE_SIZES: List[int] = [10, 20, 50]
    SEARCH_DEFAULT_PAGE_SIZE: int = 10
    HIGHLIGHT_TAG: str = "mark"

    # Admin listings
    ADMIN_MAX_PAGE_SIZE: int = 100

    def default_page_size(self) -> int:
        if self.SEARCH_DEFAULT_PAGE_SIZE in self.SEARCH_PAGE_SIZES:
            return self.SEARCH_DEFAULT_PAGE_SIZE
        return min(self.SEARCH_PAGE_SIZES)

    class Config:
        # โหลด backend/.env ไม่ว่าจะรันจาก cwd ใด
        env_file = str(Path(__file__).resolve().parents[1] / ".env")


settings = Settings()
