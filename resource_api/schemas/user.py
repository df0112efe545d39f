from typing import Optional

from pydantic import BaseModel, Field


class UserSchema(BaseModel):
    """
    用户资源模型

    既是请求体 data 的校验模型，也是响应中返回的记录。
    更新时只修改客户端实际提交的字段。
    """
    id: Optional[str] = Field(default=None, min_length=1, max_length=64, description="用户ID，创建时可由客户端提供")
    name: Optional[str] = Field(default=None, min_length=1, max_length=255, description="用户名")
    email: Optional[str] = Field(default=None, max_length=255, description="邮箱，服务端统一转为小写")
