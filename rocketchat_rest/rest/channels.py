"""频道接口。"""

from typing import Any, Mapping, Optional

from rocketchat_rest.domain.exceptions import ValidationError
from rocketchat_rest.domain.models import Channel
from rocketchat_rest.rest.base import RestTransport
from rocketchat_rest.rest.responses import ChannelResponse, ChannelsResponse


class ChannelsMixin:
    """channels.list / channels.list.joined / channels.leave / channels.info。"""

    def get_public_channels(self: RestTransport) -> ChannelsResponse:
        return self.get("channels.list", None, ChannelsResponse)

    def get_joined_channels(self: RestTransport, params: Optional[Mapping[str, Any]] = None) -> ChannelsResponse:
        """当前用户已加入的频道，params 透传给服务端（count、offset、query 等）。"""

        return self.get("channels.list.joined", params, ChannelsResponse)

    def leave_channel(self: RestTransport, channel: Channel) -> ChannelResponse:
        if not channel.id:
            raise ValidationError(code="MISSING_ROOM_ID", message="channel id is required")
        return self.post("channels.leave", {"roomId": channel.id}, ChannelResponse)

    def get_channel_info(self: RestTransport, channel: Channel) -> Channel:
        if not channel.id:
            raise ValidationError(code="MISSING_ROOM_ID", message="channel id is required")
        response = self.get("channels.info", {"roomId": channel.id}, ChannelResponse)
        return response.channel
