from datetime import timedelta

from app.core.config import Settings, settings


def test_settings_are_loaded_correctly():
    """
    测试关键配置项是否从 .env 或环境变量中正确加载到 settings 对象
    """
    required_attributes = ["AUTH_API_URL", "AUTH_API_KEY", "DATABASE_URL", "API_V1_STR"]

    missing_or_empty_settings = [attr for attr in required_attributes if not getattr(settings, attr, None)]

    assert not missing_or_empty_settings, (
        f"The following required settings are missing or empty in your configuration "
        f"(check .env file or environment variables): {missing_or_empty_settings}"
    )


def test_streak_window_is_configurable(monkeypatch):
    monkeypatch.setenv("STREAK_WINDOW_HOURS", "36")
    assert Settings().streak_window == timedelta(hours=36)
    assert settings.TOTAL_DAYS == 30
