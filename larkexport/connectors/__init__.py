"""Platform connectors."""

from .feishu import FeishuRESTConnector

__all__ = ["FeishuRESTConnector"]
