"""用户与认证接口。"""

from rocketchat_rest.domain.exceptions import ValidationError
from rocketchat_rest.domain.models import UserCredentials
from rocketchat_rest.infrastructure.logging.logger import logger
from rocketchat_rest.rest.base import RestTransport
from rocketchat_rest.rest.responses import LoginResponse, Status


class UsersMixin:
    """login / logout / users.createToken。"""

    def login(self: RestTransport, credentials: UserCredentials) -> LoginResponse:
        """登录并保存 userId / authToken，后续请求自动带上认证头。

        已经认证过时直接返回，不会重复登录。
        """

        if self.authenticated:
            return LoginResponse(success=True, user_id=self.user_id or "", auth_token=self.auth_token or "")
        if not credentials.token and not ((credentials.email or credentials.name) and credentials.password):
            raise ValidationError(code="MISSING_CREDENTIALS", message="username/password or token is required")

        response = self.post("login", credentials.to_payload(), LoginResponse)
        self.set_auth(response.user_id, response.auth_token)
        logger.info("rest.login", extra={"extra": {"user_id": response.user_id}})
        return response

    def logout(self: RestTransport) -> Status:
        """注销当前会话并清空本地认证信息。"""

        if not self.authenticated:
            return Status(success=True, status="success")
        try:
            return self.post("logout", None, Status)
        finally:
            self.set_auth(None, None)

    def create_token(self: RestTransport, user_id: str, username: str) -> LoginResponse:
        """为指定用户创建登录 token（需要管理员权限）。"""

        body = {"userId": user_id, "username": username}
        return self.post("users.createToken", body, LoginResponse)
