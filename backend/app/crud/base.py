from typing import Any, Dict, Generic, List, Optional, Type, TypeVar, Union
from pydantic import BaseModel
from sqlalchemy.orm import Session
from sqlalchemy import asc

# 导入SQLAlchemy模型基类
from app.db.base_class import Base

# 定义泛型类型变量
ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    def __init__(self, model: Type[ModelType]):
        """
        具有默认创建、读取、更新、删除（CRUD）操作的CRUD对象。

        写操作默认立即提交；传入 ``commit=False`` 时只 flush，
        由调用方在同一个事务里统一提交或回滚。

        **参数**

        * `model`: SQLAlchemy模型类
        """
        self.model = model

    def _filtered(self, db: Session, filter_conditions: Optional[Dict[str, Any]]):
        query = db.query(self.model)
        if filter_conditions:
            for field, value in filter_conditions.items():
                if not hasattr(self.model, field):
                    raise ValueError(f"{self.model.__name__} has no column '{field}'")
                # 简单相等筛选
                query = query.filter(getattr(self.model, field) == value)
        return query

    def get_by(
        self,
        db: Session,
        *,
        filter_conditions: Dict[str, Any],
        for_update: bool = False
    ) -> Optional[ModelType]:
        """
        按条件获取第一条记录，不存在时返回None。

        Args:
            db: 数据库会话
            filter_conditions: 筛选条件字典，例如 {"user_id": "u1", "day_number": 3}
            for_update: 是否加行锁（SELECT ... FOR UPDATE）
        """
        query = self._filtered(db, filter_conditions)
        if for_update:
            query = query.with_for_update()
        return query.first()

    def get_multi(
        self,
        db: Session,
        *,
        skip: int = 0,
        limit: int = 100,
        filter_conditions: Optional[Dict[str, Any]] = None,
        sort_by: Optional[str] = None
    ) -> List[ModelType]:
        """
        获取多个记录（支持分页、筛选和排序）。

        Args:
            db: 数据库会话
            skip: 跳过的记录数，默认为0
            limit: 返回的记录数限制，默认为100
            filter_conditions: 筛选条件字典，例如 {"user_id": "user123"}
            sort_by: 排序字段名，按升序排列

        Returns:
            List[ModelType]: 记录列表
        """
        query = self._filtered(db, filter_conditions)

        # 应用排序（升序）
        if sort_by:
            query = query.order_by(asc(getattr(self.model, sort_by)))

        # 应用分页
        return query.offset(skip).limit(limit).all()

    def get_count(
        self,
        db: Session,
        *,
        filter_conditions: Optional[Dict[str, Any]] = None
    ) -> int:
        """
        获取符合条件的记录总数。
        """
        return self._filtered(db, filter_conditions).count()

    def create(
        self,
        db: Session,
        *,
        obj_in: Union[CreateSchemaType, Dict[str, Any]],
        commit: bool = True
    ) -> ModelType:
        """
        创建一个新的记录。

        Args:
            db: 数据库会话
            obj_in: 创建记录的数据对象
            commit: 是否立即提交

        Returns:
            ModelType: 创建的记录
        """
        obj_in_data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump()
        db_obj = self.model(**obj_in_data)  # SQLAlchemy model
        db.add(db_obj)
        self._persist(db, db_obj, commit)
        return db_obj

    def update(
        self,
        db: Session,
        *,
        db_obj: ModelType,
        obj_in: Union[UpdateSchemaType, Dict[str, Any]],
        commit: bool = True
    ) -> ModelType:
        """
        更新一个已存在的记录。

        Args:
            db: 数据库会话
            db_obj: 要更新的数据库对象
            obj_in: 更新数据对象，可以是UpdateSchemaType或字典
            commit: 是否立即提交

        Returns:
            ModelType: 更新后的记录
        """
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            # exclude_unset=True 表示只获取被显式设置了值的字段
            update_data = obj_in.model_dump(exclude_unset=True)

        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        db.add(db_obj)
        self._persist(db, db_obj, commit)
        return db_obj

    @staticmethod
    def _persist(db: Session, db_obj: ModelType, commit: bool) -> None:
        if commit:
            db.commit()
            db.refresh(db_obj)
        else:
            db.flush()
