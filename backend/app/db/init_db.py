#!/usr/bin/env python3
"""
数据库初始化脚本

这个脚本用于创建 user_progress 和 user_streaks 两张表。
应用启动时也会调用 init_db()。
"""

import sys
import os
import logging

if __name__ == "__main__":
    # 添加项目根目录到Python路径
    project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
    sys.path.insert(0, project_root)

    # 确保在导入任何其他模块之前加载环境变量
    from dotenv import load_dotenv
    env_path = os.path.join(project_root, '.env')
    if os.path.exists(env_path):
        load_dotenv(env_path)
    else:
        # 如果没有.env文件，尝试使用.env.example
        env_example_path = os.path.join(project_root, '.env.example')
        if os.path.exists(env_example_path):
            load_dotenv(env_example_path)

from sqlalchemy.engine import Engine
from app.db.base_class import Base
from app.core.config import settings

# 导入所有模型，确保它们被正确注册
from app.models.user_progress import UserProgress  # noqa: F401
from app.models.user_streak import UserStreak  # noqa: F401

logger = logging.getLogger(__name__)


def init_db(bind: Engine = None):
    """初始化数据库，创建所有表"""
    if bind is None:
        from app.db.database import engine as bind
    logger.info(f"Using database URL: {settings.DATABASE_URL}")
    Base.metadata.create_all(bind=bind)
    logger.info("数据库表创建成功！")

if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL)
    init_db()
