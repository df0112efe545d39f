import logging

from sqlalchemy.engine import Engine

from resource_api.core.config import settings
from resource_api.db.base import Base, engine

logger = logging.getLogger(__name__)


def init_db(bind: Engine = engine) -> None:
    """
    初始化数据库，如果表不存在则创建
    """
    if not settings.CREATE_TABLES:
        logger.info("自动创建表功能已禁用")
        return

    # 导入模型，确保表已注册到 Base.metadata
    from resource_api.models import user  # noqa: F401

    Base.metadata.create_all(bind=bind)
    logger.info("所有表已创建或已存在")
