# backend/app/services/content_loader.py
import logging
from pathlib import Path
from functools import lru_cache
from typing import Optional

from app.core.config import settings
from app.core.exceptions import ContentNotFound
from app.schemas.content import ContentFormat, LessonContent

logger = logging.getLogger(__name__)

# 30天课程主题，下标为 day_number - 1
DAY_TOPICS = (
    'Introduction',
    'Variables, Built-in Functions',
    'Operators',
    'Strings',
    'Lists',
    'Tuples',
    'Sets',
    'Dictionaries',
    'Conditionals',
    'Loops',
    'Functions',
    'Modules',
    'List Comprehension',
    'Higher Order Functions',
    'Python Type Errors',
    'Python Date time',
    'Exception Handling',
    'Regular Expressions',
    'File Handling',
    'Python Package Manager',
    'Classes and Objects',
    'Web Scraping',
    'Virtual Environment',
    'Statistics',
    'Pandas',
    'Python web',
    'Python with MongoDB',
    'API',
    'Building API',
    'Conclusions',
)

# 同一天同时存在两种格式时优先使用 HTML
_FORMAT_PRIORITY = (ContentFormat.HTML, ContentFormat.MARKDOWN)


def is_valid_day(day_number: int) -> bool:
    return 1 <= day_number <= min(settings.TOTAL_DAYS, len(DAY_TOPICS))


def topic_for(day_number: int) -> str:
    """返回某一天的主题名称"""
    if not is_valid_day(day_number):
        raise ContentNotFound(day_number)
    return DAY_TOPICS[day_number - 1]


def lesson_title(day_number: int) -> str:
    return f"Day {day_number} - {topic_for(day_number)}"


def lesson_path(day_number: int, content_dir: Optional[str] = None) -> Path:
    """
    按 day-<n> 命名约定查找课程文件。

    Raises:
        ContentNotFound: 天数越界或文件不存在
    """
    if not is_valid_day(day_number):
        raise ContentNotFound(day_number)
    base_dir = Path(content_dir or settings.CONTENT_DIR)
    for fmt in _FORMAT_PRIORITY:
        candidate = base_dir / f"day-{day_number}.{fmt.value}"
        if candidate.is_file():
            return candidate
    raise ContentNotFound(day_number)


# 使用LRU缓存来避免重复读取文件
@lru_cache(maxsize=64)
def load_lesson(day_number: int, content_dir: Optional[str] = None) -> LessonContent:
    """
    一个带缓存的函数，用于读取某一天的课程原文（不做渲染）。
    """
    path = lesson_path(day_number, content_dir)
    logger.info(f"ContentLoader: loading {path}")
    return LessonContent(
        day_number=day_number,
        topic=topic_for(day_number),
        format=ContentFormat(path.suffix.lstrip(".")),
        body=path.read_text(encoding="utf-8"),
    )
