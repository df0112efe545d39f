from datetime import datetime, timezone

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from resource_api.core.config import settings


def get_utc_datetime():
    """获取当前的UTC时间"""
    return datetime.now(timezone.utc)


def build_engine(uri: str) -> Engine:
    """
    创建数据库引擎

    SQLite 需要允许跨线程使用连接；内存库共用同一个连接，否则每个连接都是一个空库。
    """
    if uri.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if uri in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(uri, echo=False, **kwargs)

    return create_engine(
        uri,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
        pool_recycle=3600,
        echo=False
    )


# 创建数据库引擎
engine = build_engine(settings.SQLALCHEMY_DATABASE_URI)

# 创建数据库会话
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# 创建基本模型类
Base = declarative_base()
