"""Feishu/Lark open platform connector."""

from .rest import FeishuRESTConnector

__all__ = ["FeishuRESTConnector"]
