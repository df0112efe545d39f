import json
import os
from typing import List, Optional, Union

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings

project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
env_path = os.path.join(project_root, '.env')
load_dotenv(env_path)


class Settings(BaseSettings):
    # 基本设置
    PROJECT_NAME: str = "resource-api"
    API_PREFIX: str = "/api"

    # 生成链接用的 base URL，为空时按请求的 Host 动态生成
    BASE_URL: str = ""

    # 分页设置
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    # CORS 设置
    # 支持JSON数组或逗号分隔字符串
    CORS_ORIGINS: Union[List[str], str] = ["*"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        if isinstance(v, str):
            # 先按JSON数组解析，失败则按逗号分隔处理
            try:
                parsed = json.loads(v)
            except json.JSONDecodeError:
                return [i.strip() for i in v.split(",") if i.strip()]
            if isinstance(parsed, list):
                return [str(i) for i in parsed]
            return [str(parsed)]

        if isinstance(v, list):
            return v

        return []

    @field_validator("DEFAULT_PAGE_SIZE", "MAX_PAGE_SIZE")
    @classmethod
    def positive_page_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError("分页大小必须大于0")
        return v

    # 数据库设置，默认使用项目目录下的SQLite文件
    DATABASE_URI: Optional[str] = None

    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        """
        获取数据库URI
        """
        if self.DATABASE_URI:
            return self.DATABASE_URI
        return f"sqlite:///{os.path.join(project_root, 'resource_api.db')}"

    # 是否自动创建数据库表结构
    CREATE_TABLES: bool = True

    # 日志设置
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    # 服务器启动配置
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    RELOAD: bool = False

    class Config:
        case_sensitive = True
        env_file = ".env"


# 创建设置实例
settings = Settings()
