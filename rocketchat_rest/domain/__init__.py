"""领域层模型与异常。

包含：
- models: Message / PostMessage / Channel 等与 JSON 对应的数据结构。
- exceptions: 业务异常类型定义。
"""
