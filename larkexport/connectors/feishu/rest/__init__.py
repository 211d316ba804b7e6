"""Feishu REST connector and endpoints."""

from .provider import FeishuRESTConnector

__all__ = ["FeishuRESTConnector"]
