"""统一业务异常模型。

客户端抛出的所有错误都继承自 BusinessError，
调用方可以只捕获 BusinessError，也可以按子类区分网络、限流、认证等情况。
"""


class BusinessError(Exception):
    """业务异常基类。

    Attributes:
        code: 机器可读错误码（如 "STATUS_NOT_OK"）。
        message: 用户可读错误信息。
        http_status: 对应的 HTTP 状态码，默认 400。
        extra: 其他补充字段（例如 endpoint）。
    """

    def __init__(self, code: str, message: str, http_status: int = 400, **extra):
        self.code = code
        self.message = message
        self.http_status = http_status
        self.extra = extra
        super().__init__(message)


class NetworkError(BusinessError):
    """网络层错误，例如连接失败、超时等。"""


class ApiError(BusinessError):
    """Rocket.Chat 返回非 2xx，或响应 JSON 无法解析、status 非 success 时抛出。"""


class AuthenticationError(ApiError):
    """401：令牌缺失、过期或账号密码错误。"""


class RateLimitError(ApiError):
    """服务端限流（429），由调用方负责重试/退避策略。"""


class ValidationError(BusinessError):
    """参数或配置校验失败，请求不会被发出。"""
