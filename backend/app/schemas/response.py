# backend/app/schemas/response.py
from pydantic import BaseModel
from typing import Any, Generic, TypeVar, Optional

T = TypeVar('T')
class StandardResponse(BaseModel, Generic[T]):
    """标准响应模型

    所有接口统一的响应格式。

    Attributes:
        code: 状态码，默认200表示成功
        message: 响应消息，成功时为'success'，完成课程时为提示语
        data: 数据载荷，泛型类型，可选字段
    """
    code: int = 200
    message: str = 'success'
    data: Optional[T] = None


class ErrorResponse(BaseModel):
    """错误响应模型

    在标准格式之外保留 FastAPI 的 detail 字段，兼容直接读取 detail 的前端代码。
    """
    code: int
    message: str
    data: None = None
    detail: Any = None
