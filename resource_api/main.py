import logging
import sys
import traceback

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from resource_api.api import API
from resource_api.core.config import settings
from resource_api.db.init_db import init_db
from resource_api.infrastructure.resource import StaticURLResolver
from resource_api.schemas.user import UserSchema
from resource_api.services.core.user_service import UserResource

# 降低watchfiles日志级别，避免频繁输出
logging.getLogger('watchfiles').setLevel(logging.ERROR)
logging.getLogger('watchfiles.main').setLevel(logging.ERROR)

# 配置日志
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)


def create_api() -> API:
    """
    创建资源API并注册示例资源

    配置了 BASE_URL 时所有链接使用固定地址，否则按请求的 Host 生成。
    """
    resolver = StaticURLResolver(settings.BASE_URL) if settings.BASE_URL else None
    api = API(
        prefix=settings.API_PREFIX,
        resolver=resolver,
        default_page_size=settings.DEFAULT_PAGE_SIZE,
        max_page_size=settings.MAX_PAGE_SIZE,
    )
    api.add_resource("users", UserSchema, UserResource())
    return api


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="0.1.0",
    description="JSON:API 风格的资源服务"
)

# 配置CORS - 必须在其他中间件之前添加
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Location"]
)

# 挂载资源路由
create_api().install(app)


@app.on_event("startup")
async def startup_db_client():
    """
    应用启动时初始化数据库
    """
    logger.info("正在初始化数据库...")
    try:
        init_db()
        logger.info("数据库初始化成功")
    except Exception as e:
        logger.error(f"数据库初始化失败: {str(e)}")
        logger.error(traceback.format_exc())
        logger.warning("应用将继续启动，但资源接口可能不可用")


@app.get("/")
async def root():
    """健康检查接口"""
    return {
        "status": "online",
        "version": "0.1.0",
        "resources": [f"{settings.API_PREFIX}/users"],
    }
