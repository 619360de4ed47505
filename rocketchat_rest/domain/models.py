"""Rocket.Chat 数据模型。

本模块定义了与 Rocket.Chat REST JSON 一一对应的数据结构：

- Message / PostMessage / Attachment: 消息相关。
- Channel / User: 房间与用户。
- Pagination: 分页参数。

这些对象只负责「JSON ⇄ Python 对象」的转换，不包含任何业务逻辑：
- from_dict(data): 从服务端返回的字典构造，多余字段忽略、缺失字段取默认值。
- to_payload(): 生成请求体，空的可选字段不会出现在 JSON 中。
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


def _parse_time(raw: Any) -> Optional[datetime]:
    """解析 Rocket.Chat 的时间字段。

    REST 接口一般返回 ISO 字符串（"2016-12-09T12:50:51.555Z"），
    个别接口沿用 Meteor 的 {"$date": <毫秒>} 格式。
    """

    if not raw:
        return None
    if isinstance(raw, dict) and "$date" in raw:
        return datetime.fromtimestamp(raw["$date"] / 1000, tz=timezone.utc)
    if isinstance(raw, str):
        try:
            return datetime.fromisoformat(raw.replace("Z", "+00:00"))
        except ValueError:
            return None
    return None


def _compact(payload: Dict[str, Any]) -> Dict[str, Any]:
    """去掉值为空的字段（对应 omitempty）。"""

    return {k: v for k, v in payload.items() if v not in (None, "", [], {}, False)}


@dataclass
class User:
    """消息作者 / 房间创建者等场景下的用户摘要。"""

    id: str = ""
    name: str = ""
    username: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["User"]:
        if not data:
            return None
        return cls(
            id=data.get("_id", ""),
            name=data.get("name", ""),
            username=data.get("username", ""),
        )


@dataclass
class Channel:
    """房间（频道）。

    发送消息只需要 name，查询历史只需要 id；其余字段由服务端返回时填充。
    """

    id: str = ""
    name: str = ""
    fname: str = ""
    type: str = ""  # c: 公开频道, p: 私有组, d: 私聊
    msgs: int = 0
    read_only: bool = False
    default: bool = False
    user: Optional[User] = None
    topic: str = ""
    updated_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Channel":
        return cls(
            id=data.get("_id", ""),
            name=data.get("name", ""),
            fname=data.get("fname", ""),
            type=data.get("t", ""),
            msgs=data.get("msgs", 0) or 0,
            read_only=bool(data.get("ro", False)),
            default=bool(data.get("default", False)),
            user=User.from_dict(data.get("u")),
            topic=data.get("topic", "") or "",
            updated_at=_parse_time(data.get("_updatedAt")),
        )


@dataclass
class AttachmentField:
    short: bool = False
    title: str = ""
    value: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AttachmentField":
        return cls(
            short=bool(data.get("short", False)),
            title=data.get("title", ""),
            value=data.get("value", ""),
        )

    def to_payload(self) -> Dict[str, Any]:
        return {"short": self.short, "title": self.title, "value": self.value}


@dataclass
class Attachment:
    """消息附件，对应 Rocket.Chat 的 attachments 数组元素。"""

    color: str = ""
    text: str = ""
    timestamp: str = ""
    thumb_url: str = ""
    message_link: str = ""
    collapsed: bool = False

    author_name: str = ""
    author_link: str = ""
    author_icon: str = ""

    title: str = ""
    title_link: str = ""
    title_link_download: str = ""

    image_url: str = ""
    audio_url: str = ""
    video_url: str = ""

    fields: List[AttachmentField] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Attachment":
        ts = data.get("ts", "")
        return cls(
            color=data.get("color", ""),
            text=data.get("text", ""),
            timestamp=ts if isinstance(ts, str) else "",
            thumb_url=data.get("thumb_url", ""),
            message_link=data.get("message_link", ""),
            collapsed=bool(data.get("collapsed", False)),
            author_name=data.get("author_name", ""),
            author_link=data.get("author_link", ""),
            author_icon=data.get("author_icon", ""),
            title=data.get("title", ""),
            title_link=data.get("title_link", ""),
            title_link_download=data.get("title_link_download", ""),
            image_url=data.get("image_url", ""),
            audio_url=data.get("audio_url", ""),
            video_url=data.get("video_url", ""),
            fields=[AttachmentField.from_dict(f) for f in data.get("fields") or []],
        )

    def to_payload(self) -> Dict[str, Any]:
        payload = _compact(
            {
                "color": self.color,
                "text": self.text,
                "ts": self.timestamp,
                "thumb_url": self.thumb_url,
                "message_link": self.message_link,
                "collapsed": self.collapsed,
                "author_name": self.author_name,
                "author_link": self.author_link,
                "author_icon": self.author_icon,
                "title": self.title,
                "title_link": self.title_link,
                "title_link_download": self.title_link_download,
                "image_url": self.image_url,
                "audio_url": self.audio_url,
                "video_url": self.video_url,
            }
        )
        if self.fields:
            payload["fields"] = [f.to_payload() for f in self.fields]
        return payload


@dataclass
class Message:
    """服务端返回的一条消息。

    - reactions: emoji -> 点了该表情的用户名列表。
    - thread_id: 所属讨论串的根消息 id（tmid），不在讨论串中时为空。
    """

    id: str = ""
    room_id: str = ""
    msg: str = ""
    edited_by: Optional[User] = None
    groupable: bool = False

    timestamp: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    edited_at: Optional[datetime] = None

    user: Optional[User] = None

    alias: str = ""
    emoji: str = ""
    avatar: str = ""
    attachments: List[Attachment] = field(default_factory=list)
    reactions: Dict[str, List[str]] = field(default_factory=dict)
    thread_id: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Message":
        data = data or {}
        reactions: Dict[str, List[str]] = {}
        for emoji, info in (data.get("reactions") or {}).items():
            reactions[emoji] = list((info or {}).get("usernames") or [])
        return cls(
            id=data.get("_id", ""),
            room_id=data.get("rid", ""),
            msg=data.get("msg", ""),
            edited_by=User.from_dict(data.get("editedBy")),
            groupable=bool(data.get("groupable", False)),
            timestamp=_parse_time(data.get("ts")),
            updated_at=_parse_time(data.get("_updatedAt")),
            edited_at=_parse_time(data.get("editedAt")),
            user=User.from_dict(data.get("u")),
            alias=data.get("alias", ""),
            emoji=data.get("emoji", ""),
            avatar=data.get("avatar", ""),
            attachments=[Attachment.from_dict(a) for a in data.get("attachments") or []],
            reactions=reactions,
            thread_id=data.get("tmid", ""),
        )


@dataclass
class PostMessage:
    """chat.postMessage 的请求体。

    room_id 与 channel 至少填写一个；channel 可以是 "#general"、"@user" 或房间 id。
    """

    room_id: str = ""
    channel: str = ""
    text: str = ""
    parse_urls: bool = False
    alias: str = ""
    emoji: str = ""
    avatar: str = ""
    attachments: List[Attachment] = field(default_factory=list)
    thread_id: str = ""

    def to_payload(self) -> Dict[str, Any]:
        payload = _compact(
            {
                "roomId": self.room_id,
                "channel": self.channel,
                "text": self.text,
                "parseUrls": self.parse_urls,
                "alias": self.alias,
                "emoji": self.emoji,
                "avatar": self.avatar,
                "tmid": self.thread_id,
            }
        )
        if self.attachments:
            payload["attachments"] = [a.to_payload() for a in self.attachments]
        return payload


@dataclass
class Pagination:
    count: int = 0
    offset: int = 0
    total: int = 0


@dataclass
class UserCredentials:
    """登录凭证：账号密码或已有的 token 二选一。"""

    id: str = ""
    token: str = ""

    email: str = ""
    name: str = ""
    password: str = ""

    def to_payload(self) -> Dict[str, Any]:
        if self.token:
            return {"resume": self.token}
        return {"user": self.email or self.name, "password": self.password}


@dataclass
class ServerInfo:
    version: str = ""
    build: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ServerInfo":
        data = data or {}
        return cls(version=data.get("version", ""), build=dict(data.get("build") or {}))


@dataclass
class Permission:
    id: str = ""
    roles: List[str] = field(default_factory=list)
    updated_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Permission":
        return cls(
            id=data.get("_id", ""),
            roles=list(data.get("roles") or []),
            updated_at=_parse_time(data.get("_updatedAt")),
        )
