"""服务端信息与权限接口。"""

from typing import List

from rocketchat_rest.domain.models import Permission, ServerInfo
from rocketchat_rest.rest.base import RestTransport
from rocketchat_rest.rest.responses import InfoResponse, PermissionsResponse


class InformationMixin:
    def get_server_info(self: RestTransport) -> ServerInfo:
        """GET info，不需要登录。"""

        return self.get("info", None, InfoResponse).info

    def get_permissions(self: RestTransport) -> List[Permission]:
        return self.get("permissions.listAll", None, PermissionsResponse).permissions
