"""配置管理模块。

支持从环境变量（ROCKETCHAT_ 前缀）、.env 以及 config.yaml 加载配置。
"""

import os
import warnings
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _load_config_from_yaml() -> Dict[str, Any]:
    """从 config.yaml 加载配置（若存在）。"""
    candidates = []
    explicit = os.getenv("ROCKETCHAT_CONFIG_FILE")
    if explicit:
        candidates.append(Path(explicit).expanduser())
    candidates.extend([
        Path.cwd() / "config.yaml",
        Path(__file__).resolve().parents[2] / "config.yaml",
    ])

    seen: set[Path] = set()
    for path in candidates:
        if not path or path in seen:
            continue
        seen.add(path)
        try:
            if path.exists():
                data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
                if isinstance(data, dict):
                    # 允许 yaml 中整体嵌套在 rocketchat: 下
                    section = data.get("rocketchat", data)
                    if isinstance(section, dict):
                        return section
                warnings.warn(f"Config file {path} is not a mapping, ignored")
        except (OSError, yaml.YAMLError) as exc:
            warnings.warn(f"Failed to read config file {path}: {exc}")
    return {}


class RocketSettings(BaseSettings):
    """客户端配置（使用 Pydantic）。"""

    # ---- 服务端 ----
    server_url: str = Field(
        default="http://localhost:3000",
        description="Rocket.Chat 服务地址，形如 https://chat.example.com",
    )

    # ---- 认证 ----
    # 个人访问令牌方式：user_id + auth_token
    user_id: Optional[str] = Field(default=None, description="X-User-Id")
    auth_token: Optional[str] = Field(default=None, description="X-Auth-Token")
    # 账号密码方式：create_client 时自动 login
    username: Optional[str] = Field(default=None, description="登录用户名或邮箱")
    password: Optional[str] = Field(default=None, description="登录密码")

    http_timeout: float = Field(default=30.0, ge=1.0, description="HTTP 超时时间（秒）")
    log_dir: str = Field(default="logs", description="日志目录")
    log_redact_content: bool = Field(default=False, description="是否脱敏日志内容")
    debug: bool = Field(default=False, description="是否记录请求/响应体")

    model_config = SettingsConfigDict(
        env_prefix="ROCKETCHAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @staticmethod
    def _config_source() -> Dict[str, Any]:
        return _load_config_from_yaml()

    @field_validator("server_url")
    @classmethod
    def validate_server_url(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if not v.startswith(("http://", "https://")):
            raise ValueError("server_url must start with http:// or https://")
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            cls._config_source,
            file_secret_settings,
        )


settings = RocketSettings()

# 类型别名，让外部代码可以使用 Settings 类型
Settings = RocketSettings
