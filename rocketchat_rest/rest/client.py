"""Rocket.Chat REST 客户端核心。

BaseClient 负责所有接口共享的部分：

1. 拼接 {server_url}/api/v1/{api} 地址。
2. 附加 Content-Type 与认证头（X-User-Id / X-Auth-Token）。
3. 发送请求并把网络错误、401、429 以及其他 HTTP 错误包装成统一异常。
4. 把 JSON 解析为响应对象，并检查 success/status 信封。

各接口分组只负责拼参数和选择响应类型，见 messages.py、channels.py 等。
"""

from typing import Any, Dict, Mapping, Optional, Type, TypeVar

import httpx

from rocketchat_rest.config.settings import settings
from rocketchat_rest.domain.exceptions import ApiError, AuthenticationError, NetworkError, RateLimitError
from rocketchat_rest.infrastructure.logging.logger import logger
from rocketchat_rest.rest.responses import Status

R = TypeVar("R", bound=Status)

API_PREFIX = "/api/v1/"

# 请求体中不能落盘的字段
SECRET_KEYS = frozenset({"password", "resume", "authToken"})


class BaseClient:
    """共享的 HTTP 传输实现（满足 RestTransport 协议）。"""

    def __init__(self, cfg=settings):
        self._settings = cfg
        self._base_url = str(getattr(cfg, "server_url", "")).rstrip("/") + API_PREFIX
        self._user_id: Optional[str] = getattr(cfg, "user_id", None)
        self._auth_token: Optional[str] = getattr(cfg, "auth_token", None)

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def user_id(self) -> Optional[str]:
        return self._user_id

    @property
    def auth_token(self) -> Optional[str]:
        return self._auth_token

    @property
    def authenticated(self) -> bool:
        return bool(self._user_id and self._auth_token)

    def set_auth(self, user_id: Optional[str], auth_token: Optional[str]) -> None:
        self._user_id = user_id
        self._auth_token = auth_token

    # ---- 请求入口 ----

    def get(self, api: str, params: Optional[Mapping[str, Any]], response_cls: Type[R]) -> R:
        return self._request("GET", api, response_cls, params=params)

    def post(self, api: str, body: Optional[Dict[str, Any]], response_cls: Type[R]) -> R:
        return self._request("POST", api, response_cls, body=body)

    # ---- 辅助方法 ----

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.authenticated:
            headers["X-User-Id"] = self._user_id or ""
            headers["X-Auth-Token"] = self._auth_token or ""
        return headers

    def _request(
        self,
        method: str,
        api: str,
        response_cls: Type[R],
        params: Optional[Mapping[str, Any]] = None,
        body: Optional[Dict[str, Any]] = None,
    ) -> R:
        url = self._base_url + api
        self._log("rest.request", method=method, api=api, params=dict(params or {}), body=body)
        try:
            with httpx.Client(timeout=self._settings.http_timeout, trust_env=False) as client:
                if method == "GET":
                    resp = client.get(url, params=params, headers=self._headers())
                else:
                    resp = client.post(url, json=body if body is not None else {}, headers=self._headers())
        except httpx.RequestError as e:
            logger.error("rest.error", extra={"extra": {"api": api, "error": str(e)}})
            raise NetworkError(code="NETWORK_ERROR", message=str(e), api=api)

        logger.info("rest.response", extra={"extra": {"method": method, "api": api, "status": resp.status_code}})
        if resp.status_code >= 400:
            logger.error("rest.error", extra={"extra": {"api": api, "status": resp.status_code}})
        if resp.status_code == 401:
            raise AuthenticationError(code="UNAUTHORIZED", message=resp.text, http_status=401, api=api)
        if resp.status_code == 429:
            raise RateLimitError(code="RATE_LIMIT", message="Rocket.Chat rate limit", http_status=429, api=api)
        if resp.status_code >= 400:
            raise ApiError(code="API_ERROR", message=resp.text, http_status=resp.status_code, api=api)

        try:
            data = resp.json()
        except ValueError as e:
            # JSONDecodeError 与非 UTF-8 响应的 UnicodeDecodeError 都是 ValueError
            raise ApiError(code="INVALID_JSON", message=str(e), http_status=resp.status_code, api=api)
        if not isinstance(data, dict):
            raise ApiError(code="INVALID_JSON", message="response is not a JSON object", api=api)

        response = response_cls.from_dict(data)
        response.ok()
        return response

    def _log(self, event: str, **payload: Any) -> None:
        body = payload.pop("body", None)
        if body is not None and getattr(self._settings, "debug", False):
            payload["body"] = _mask_secrets(body)
        logger.info(event, extra={"extra": payload})


def _mask_secrets(body: Dict[str, Any]) -> Dict[str, Any]:
    return {k: ("***" if k in SECRET_KEYS else v) for k, v in body.items()}
