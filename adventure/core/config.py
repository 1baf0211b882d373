import os
from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

class Settings(BaseModel):
    data_dir: str = Field(default_factory=lambda: os.getenv("ADVENTURE_DATA_DIR", "./data"))
    db_name: str = os.getenv("ADVENTURE_DB_NAME", "adventure.db")
    log_level: str = os.getenv("ADVENTURE_LOG_LEVEL", "INFO")
    toast_duration_ms: int = int(os.getenv("ADVENTURE_TOAST_MS", "3000"))
    catalog_path: str = os.getenv("ADVENTURE_CATALOG", "")

    def db_path(self) -> str:
        # Chemin absolu (évite les surprises avec ./)
        return os.path.join(os.path.abspath(self.data_dir), self.db_name)

settings = Settings()
