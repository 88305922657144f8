from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./carpark.db"
    DATABASE_ECHO: bool = False

    # Application
    PROJECT_NAME: str = "Car Park Booking System"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Billing & reporting
    FEE_MODE: str = "accrued"  # "accrued" caps at today, "projected" bills the full month
    UNKNOWN_EMPLOYEE_LABEL: str = "Unknown"
    ZONE_ORDER: List[str] = [
        "แถวแรกในลานจอด",
        "แถวสองในลานจอด",
        "แถวสามในลานจอด",
        "แถวสี่ในลานจอด",
        "แถวห้าในลานจอด",
        "แถวหกในลานจอด",
        "จอดซ้อนแถวสองในลาน",
        "จอดซ้อนแถวสี่ในลาน",
        "ริมถนน",
        "ศรีสมานฝั่ง MM",
        "ศรีสมานฝั่งใหม่",
    ]

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
