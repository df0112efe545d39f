"""
用户资源提供者

基于 SQLAlchemy 的示例实现，覆盖全部增删改查以及两种集合查询接口。
"""
import logging
from typing import Callable, Optional, Tuple

from sqlalchemy.orm import Query, Session

from resource_api.db.base import SessionLocal
from resource_api.infrastructure.exceptions import ErrorObject, HTTPError, conflict_error, not_found_error
from resource_api.infrastructure.resource import ICRUD, IFindAll, IPaginatedFindAll, Request
from resource_api.infrastructure.response import (
    Created,
    CreateOutcome,
    DeleteOutcome,
    Found,
    IResponder,
    NoContent,
    Updated,
    UpdateOutcome,
)
from resource_api.models.user import User as UserModel
from resource_api.schemas.user import UserSchema
from resource_api.utils.snowflake_id import generate_snowflake_string_id

logger = logging.getLogger(__name__)


def normalize_email(email: Optional[str]) -> Optional[str]:
    if email is None:
        return None
    return email.strip().lower()


class UserResource(ICRUD, IFindAll, IPaginatedFindAll):
    """
    用户资源

    服务端唯一会修改的字段是 email（统一为小写），
    因此是否返回 201/200 还是 204 取决于 ID 的来源和 email 是否被改写。
    """

    def __init__(self, session_factory: Callable[[], Session] = SessionLocal):
        self.session_factory = session_factory

    @staticmethod
    def _active(db: Session) -> Query:
        return db.query(UserModel).filter(UserModel.del_flag == 0)

    @staticmethod
    def _filtered(query: Query, request: Request) -> Query:
        # 支持 filter[name] 模糊匹配
        name = request.query("filter[name]")
        if name:
            query = query.filter(UserModel.name.ilike(f"%{name}%"))
        return query.order_by(UserModel.create_time, UserModel.id)

    @staticmethod
    def _to_schema(user: UserModel) -> UserSchema:
        return UserSchema(**user.to_dict())

    async def find_one(self, resource_id: str, request: Request) -> IResponder:
        db = self.session_factory()
        try:
            user = self._active(db).filter(UserModel.id == resource_id).first()
            if not user:
                raise not_found_error("user", resource_id)
            return Found(self._to_schema(user))
        finally:
            db.close()

    async def find_all(self, request: Request) -> IResponder:
        db = self.session_factory()
        try:
            users = self._filtered(self._active(db), request).all()
            return Found([self._to_schema(user) for user in users])
        finally:
            db.close()

    async def paginated_find_all(self, request: Request) -> Tuple[int, IResponder]:
        pagination = request.pagination
        db = self.session_factory()
        try:
            query = self._filtered(self._active(db), request)
            # 计算总数，与当前窗口无关
            total = query.count()
            users = query.offset(pagination.offset).limit(pagination.limit).all()
            return total, Found([self._to_schema(user) for user in users])
        finally:
            db.close()

    async def create(self, obj: UserSchema, request: Request) -> CreateOutcome:
        if not obj.name:
            raise HTTPError(
                "user name is required",
                status=422,
                errors=[ErrorObject(
                    status="422",
                    title="Invalid Attribute",
                    detail="name is required",
                    source={"pointer": "/data/name"},
                )],
            )

        email = normalize_email(obj.email)
        client_id = obj.id
        db = self.session_factory()
        try:
            if client_id is not None and db.query(UserModel).filter(UserModel.id == client_id).first():
                raise conflict_error(f"user {client_id} already exists", pointer="/data/id")

            user = UserModel(
                id=client_id if client_id is not None else generate_snowflake_string_id(),
                name=obj.name,
                email=email,
            )
            db.add(user)
            db.commit()
            db.refresh(user)
            logger.info(f"创建用户: {user.id}")

            if client_id is not None and email == obj.email:
                return NoContent()
            return Created(self._to_schema(user))
        except HTTPError:
            raise
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    async def update(self, obj: UserSchema, request: Request) -> UpdateOutcome:
        fields = obj.model_fields_set - {"id"}
        db = self.session_factory()
        try:
            user = self._active(db).filter(UserModel.id == obj.id).first()
            if not user:
                raise not_found_error("user", obj.id)

            if "name" in fields:
                if not obj.name:
                    raise HTTPError(
                        "user name cannot be empty",
                        status=422,
                        errors=[ErrorObject(
                            status="422",
                            title="Invalid Attribute",
                            detail="name cannot be empty",
                            source={"pointer": "/data/name"},
                        )],
                    )
                user.name = obj.name
            email_rewritten = False
            if "email" in fields:
                user.email = normalize_email(obj.email)
                email_rewritten = user.email != obj.email

            db.commit()
            db.refresh(user)
            logger.info(f"更新用户: {user.id} ({', '.join(sorted(fields)) or '无字段'})")

            if email_rewritten:
                return Updated(self._to_schema(user))
            return NoContent()
        except HTTPError:
            raise
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    async def delete(self, resource_id: str, request: Request) -> DeleteOutcome:
        db = self.session_factory()
        try:
            user = self._active(db).filter(UserModel.id == resource_id).first()
            if not user:
                raise not_found_error("user", resource_id)
            user.del_flag = 1
            db.commit()
            logger.info(f"删除用户: {resource_id}")
            return NoContent()
        except HTTPError:
            raise
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()
