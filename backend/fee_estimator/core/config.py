# backend/fee_estimator/core/config.py (Pydantic V2)
import math
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    应用配置类，使用 Pydantic 的 BaseSettings 来自动从环境变量读取配置。
    """

    # --- 应用基本配置 ---
    ENVIRONMENT: str = "development"
    PROJECT_NAME: str = "fee_estimator"
    VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    # 逗号分隔的字符串，例如 "http://localhost:3000,http://localhost:5173"
    BACKEND_CORS_ORIGINS: str = ""

    # --- 报酬计算配置 ---
    DEFAULT_TAX_RATE: float = 0.10  # 消費税率（0.10 = 10%）

    # --- 見積書默认值 ---
    ESTIMATE_OFFICE_NAME: str = "○○法律事務所"
    ESTIMATE_LAWYER_NAME: str = "弁護士 ○○ ○○"
    ESTIMATE_CLIENT_NAME: str = "○○ 様"
    ESTIMATE_CASE_TITLE: str = "○○事件について"
    ESTIMATE_NOTES: str = (
        "・実費（印紙代、郵券代、交通費等）は別途ご請求いたします。\n"
        "・上記金額は概算であり、事件の進行により変動する場合がございます。"
    )
    ESTIMATE_VALIDITY: str = "発行日より30日間"

    @field_validator("DEFAULT_TAX_RATE")
    @classmethod
    def check_tax_rate(cls, v: float) -> float:
        if not math.isfinite(v) or v < 0:
            raise ValueError("DEFAULT_TAX_RATE must be a finite, non-negative number")
        return v

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        return str(v).strip().upper() if v else "INFO"

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.BACKEND_CORS_ORIGINS.split(",") if origin.strip()]

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


# 创建配置实例
settings = Settings()
