"""Feishu REST endpoint registry."""

from __future__ import annotations

from larkexport.runtime.rest import ResponseAdapter, RestEndpointSpec

from . import chat_list, message_list

_ENDPOINTS: dict[str, tuple[RestEndpointSpec, type[ResponseAdapter]]] = {
    chat_list.SPEC.id: (chat_list.SPEC, chat_list.Adapter),
    message_list.SPEC.id: (message_list.SPEC, message_list.Adapter),
}


def get_endpoint_spec(endpoint_id: str) -> RestEndpointSpec | None:
    entry = _ENDPOINTS.get(endpoint_id)
    return entry[0] if entry else None


def get_endpoint_adapter(endpoint_id: str) -> type[ResponseAdapter] | None:
    entry = _ENDPOINTS.get(endpoint_id)
    return entry[1] if entry else None


__all__ = ["get_endpoint_spec", "get_endpoint_adapter"]
