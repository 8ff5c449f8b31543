from pydantic import BaseModel
from typing import List

class FrontendConfig(BaseModel):
    """
    前端配置模型

    定义向前端暴露的非敏感配置变量。

    Attributes:
        api_base_url: API基础URL，供前端使用，用于构建完整的API请求地址
        backend_port: 后端服务端口号，供前端动态构建完整URL使用
        total_days: 课程总天数
        streak_window_hours: 连续学习判定窗口（小时）
        oauth_providers: 可用的第三方登录方式
    """
    # API基础URL，供前端使用
    api_base_url: str

    # 后端服务端口号
    backend_port: int

    total_days: int
    streak_window_hours: float
    oauth_providers: List[str]
