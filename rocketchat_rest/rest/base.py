"""REST 传输层协议。

各个接口分组（messages、channels、users ...）以 mixin 的形式写在各自模块里，
它们不直接依赖 httpx，而是依赖此协议：

- get(api, params, response_cls): 发起 GET，返回解析好的响应对象。
- post(api, body, response_cls): 发起 POST（JSON 请求体），返回解析好的响应对象。
- user_id / auth_token / authenticated / set_auth: 当前会话的认证信息，供登录接口读写。

BaseClient 是唯一的实现；测试里也可以用任意满足协议的桩对象替换。
"""

from typing import Any, Dict, Mapping, Optional, Protocol, Type, TypeVar

from rocketchat_rest.rest.responses import Status

R = TypeVar("R", bound=Status)


class RestTransport(Protocol):
    """Rocket.Chat REST 传输协议。"""

    @property
    def user_id(self) -> Optional[str]:
        ...

    @property
    def auth_token(self) -> Optional[str]:
        ...

    @property
    def authenticated(self) -> bool:
        ...

    def set_auth(self, user_id: Optional[str], auth_token: Optional[str]) -> None:
        ...

    def get(self, api: str, params: Optional[Mapping[str, Any]], response_cls: Type[R]) -> R:
        ...

    def post(self, api: str, body: Optional[Dict[str, Any]], response_cls: Type[R]) -> R:
        ...
