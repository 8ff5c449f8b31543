from pydantic import BaseModel, Field
from enum import Enum


class ContentFormat(str, Enum):
    """课程文档格式"""
    HTML = "html"
    MARKDOWN = "md"

    @property
    def media_type(self) -> str:
        return "text/html" if self is ContentFormat.HTML else "text/markdown"


class LessonContent(BaseModel):
    """单日课程文档

    Attributes:
        day_number: 课程天数
        topic: 当天主题
        format: 文档格式，html 或 md
        body: 文档原文，不做渲染
    """
    day_number: int = Field(..., ge=1)
    topic: str = Field(..., min_length=1)
    format: ContentFormat
    body: str
