"""Rocket.Chat REST 接口层。

该包下的模块负责：
- 定义传输协议 (base) 与共享的 HTTP 实现 (client)。
- 定义响应信封 (responses)。
- 按接口分组提供具体方法 (messages、channels、users、information)。
"""

from typing import Optional

from rocketchat_rest.config.settings import settings
from rocketchat_rest.domain.models import UserCredentials
from rocketchat_rest.rest.base import RestTransport
from rocketchat_rest.rest.channels import ChannelsMixin
from rocketchat_rest.rest.client import BaseClient
from rocketchat_rest.rest.information import InformationMixin
from rocketchat_rest.rest.messages import MessagesMixin
from rocketchat_rest.rest.users import UsersMixin


class Client(MessagesMixin, ChannelsMixin, UsersMixin, InformationMixin, BaseClient):
    """完整的 Rocket.Chat REST 客户端。"""


def create_client(cfg: Optional[object] = None) -> Client:
    """根据配置创建客户端，默认取全局 settings。

    配置里没有 token 但有账号密码时，会立即登录。
    """

    cfg = cfg or settings
    client = Client(cfg)
    username = getattr(cfg, "username", None)
    password = getattr(cfg, "password", None)
    if not client.authenticated and username and password:
        client.login(UserCredentials(name=username, password=password))
    return client


__all__ = ["BaseClient", "Client", "RestTransport", "create_client"]
