"""REST 响应信封。

Rocket.Chat 的每个响应都带有 success / status / error 等字段，
具体接口在此基础上附加自己的数据（messages、message、channels ...）。
BaseClient 解析 JSON 后会调用 ok() 检查信封，失败时抛出 ApiError。
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from rocketchat_rest.domain.exceptions import ApiError
from rocketchat_rest.domain.models import Channel, Message, Pagination, Permission, ServerInfo


@dataclass
class Status:
    success: bool = False
    error: str = ""
    status: str = ""
    message: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Status":
        return cls(**cls._status_fields(data))

    @staticmethod
    def _status_fields(data: Dict[str, Any]) -> Dict[str, Any]:
        # 部分接口在失败时把 message 放成对象，这里只保留字符串
        message = data.get("message")
        return {
            "success": bool(data.get("success", False)),
            "error": data.get("error") or "",
            "status": data.get("status") or "",
            "message": message if isinstance(message, str) else "",
        }

    def ok(self) -> None:
        """信封表示成功时返回 None，否则抛出 ApiError。"""

        if self.success:
            return
        if self.error:
            raise ApiError(code="STATUS_NOT_OK", message=self.error)
        if self.status == "success":
            return
        if self.message:
            raise ApiError(
                code="STATUS_NOT_OK",
                message=f"status: {self.status}, message: {self.message}",
            )
        raise ApiError(code="STATUS_NOT_OK", message=f"status: {self.status}")


@dataclass
class MessagesResponse(Status):
    messages: List[Message] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MessagesResponse":
        return cls(
            **cls._status_fields(data),
            messages=[Message.from_dict(m) for m in data.get("messages") or []],
        )


@dataclass
class MessageResponse(Status):
    # chat.postMessage / chat.update / chat.getMessage 都返回单条 message，
    # 与信封里的 message（错误说明）同名，这里改叫 chat_message
    chat_message: Message = field(default_factory=Message)
    room_id: str = ""
    channel: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MessageResponse":
        raw_message = data.get("message")
        return cls(
            **cls._status_fields(data),
            chat_message=Message.from_dict(raw_message if isinstance(raw_message, dict) else None),
            room_id=data.get("roomId", ""),
            channel=data.get("channel", ""),
        )


@dataclass
class ChannelsResponse(Status):
    channels: List[Channel] = field(default_factory=list)
    page: Pagination = field(default_factory=Pagination)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChannelsResponse":
        return cls(
            **cls._status_fields(data),
            channels=[Channel.from_dict(c) for c in data.get("channels") or []],
            page=Pagination(
                count=data.get("count", 0) or 0,
                offset=data.get("offset", 0) or 0,
                total=data.get("total", 0) or 0,
            ),
        )


@dataclass
class ChannelResponse(Status):
    channel: Channel = field(default_factory=Channel)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChannelResponse":
        return cls(
            **cls._status_fields(data),
            channel=Channel.from_dict(data.get("channel") or {}),
        )


@dataclass
class LoginResponse(Status):
    user_id: str = ""
    auth_token: str = ""
    me: Optional[Dict[str, Any]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoginResponse":
        inner = data.get("data") or {}
        return cls(
            **cls._status_fields(data),
            user_id=inner.get("userId", ""),
            auth_token=inner.get("authToken", ""),
            me=inner.get("me"),
        )


@dataclass
class InfoResponse(Status):
    info: ServerInfo = field(default_factory=ServerInfo)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InfoResponse":
        # 新版本服务端把版本号放在顶层，旧版本放在 info 下
        raw = data.get("info") or {"version": data.get("version", "")}
        return cls(**cls._status_fields(data), info=ServerInfo.from_dict(raw))


@dataclass
class PermissionsResponse(Status):
    permissions: List[Permission] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PermissionsResponse":
        raw = data.get("update")
        if raw is None:
            raw = data.get("permissions") or []
        return cls(
            **cls._status_fields(data),
            permissions=[Permission.from_dict(p) for p in raw],
        )
