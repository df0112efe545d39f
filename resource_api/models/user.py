from typing import Any, Dict

from sqlalchemy import Column, DateTime, SmallInteger, VARCHAR

from resource_api.db.base import Base, get_utc_datetime


class User(Base):
    """
    用户数据库模型

    示例资源 users 的存储表，删除为软删除
    """
    __tablename__ = "t_user"

    id = Column(VARCHAR(64), primary_key=True, index=True)
    name = Column(VARCHAR(255), nullable=False)
    email = Column(VARCHAR(255), nullable=True)
    del_flag = Column(SmallInteger, default=0)  # 删除标志：0-正常，1-已删除
    create_time = Column(DateTime, default=get_utc_datetime)

    def to_dict(self) -> Dict[str, Any]:
        """将用户转换为字典表示形式"""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
        }
