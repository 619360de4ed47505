"""Rocket.Chat REST 客户端顶层包。

该包把 Rocket.Chat 的 REST 接口（/api/v1）封装为普通的 Python 方法，
包括配置加载、数据模型、统一异常、日志以及按接口分组的请求方法。
"""

from rocketchat_rest.rest import Client, create_client

__all__ = ["Client", "create_client"]
