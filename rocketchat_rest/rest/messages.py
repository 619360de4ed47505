"""消息相关接口。

https://developer.rocket.chat/reference/api/rest-api/endpoints/messaging/chat-endpoints
"""

import html
from typing import Dict, List, Optional

from rocketchat_rest.domain.exceptions import ValidationError
from rocketchat_rest.domain.models import Channel, Message, Pagination, PostMessage
from rocketchat_rest.rest.base import RestTransport
from rocketchat_rest.rest.responses import MessageResponse, MessagesResponse, Status


class MessagesMixin:
    """chat.* 以及 channels.history。"""

    def send(self: RestTransport, channel: Channel, msg: str) -> None:
        """向频道发送一条纯文本消息，频道 name 不能为空。文本会先做 HTML 转义。"""

        if not channel.name:
            raise ValidationError(code="MISSING_CHANNEL", message="channel name is required")
        body = {"channel": channel.name, "text": html.escape(msg)}
        self.post("chat.postMessage", body, MessageResponse)

    def post_message(self: RestTransport, msg: PostMessage) -> MessageResponse:
        """发送结构化消息（别名、头像、附件、讨论串等），room_id 或 channel 至少有一个。"""

        if not (msg.room_id or msg.channel):
            raise ValidationError(code="MISSING_ROOM", message="room_id or channel is required")
        return self.post("chat.postMessage", msg.to_payload(), MessageResponse)

    def get_messages(self: RestTransport, channel: Channel, page: Optional[Pagination] = None) -> List[Message]:
        """获取频道历史消息。

        频道 id 不能为空；传入 page 时用 page.count 限制返回条数，
        page.offset 大于 0 时一并带上。
        """

        if not channel.id:
            raise ValidationError(code="MISSING_ROOM_ID", message="channel id is required")
        params: Dict[str, str] = {"roomId": channel.id}
        if page is not None:
            params["count"] = str(page.count)
            if page.offset > 0:
                params["offset"] = str(page.offset)

        response = self.get("channels.history", params, MessagesResponse)
        return response.messages

    def set_reaction(self: RestTransport, message_id: str, emoji: str, should_react: bool) -> None:
        """切换当前用户对某条消息的表情回应。"""

        body = {
            "messageId": message_id,
            "emoji": emoji,
            "shouldReact": should_react,
        }
        self.post("chat.react", body, Status)

    def update_message(self: RestTransport, message_id: str, room_id: str, new_text: str) -> MessageResponse:
        body = {
            "messageId": message_id,
            "roomId": room_id,
            "text": new_text,
        }
        return self.post("chat.update", body, MessageResponse)

    def get_message(self: RestTransport, message_id: str) -> MessageResponse:
        return self.get("chat.getMessage", {"messageId": message_id}, MessageResponse)
