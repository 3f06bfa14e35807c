"""Render hints for stdlib node kinds and edge protocols."""

from __future__ import annotations

from dataclasses import dataclass

from sdl_layout.parser.model import EdgeProtocol, NodeCategory, NodeKind, ProtocolKind


@dataclass(frozen=True)
class NodeHint:
    icon: str
    color: str


@dataclass(frozen=True)
class ProtocolHint:
    line: str
    color: str


NODE_RENDER_HINTS: dict[NodeKind, NodeHint] = {
    NodeKind.MICROSERVICE: NodeHint("box", "blue"),
    NodeKind.MONOLITH: NodeHint("layers", "gray"),
    NodeKind.SERVERLESS_FUNCTION: NodeHint("zap", "yellow"),
    NodeKind.DATABASE: NodeHint("database", "green"),
    NodeKind.CACHE: NodeHint("clock", "orange"),
    NodeKind.OBJECT_STORAGE: NodeHint("hard-drive", "green"),
    NodeKind.MESSAGE_QUEUE: NodeHint("list", "purple"),
    NodeKind.MESSAGE_BROKER: NodeHint("share", "purple"),
    NodeKind.GATEWAY: NodeHint("shield", "blue"),
    NodeKind.LOAD_BALANCER: NodeHint("sliders", "blue"),
    NodeKind.CDN: NodeHint("globe", "blue"),
    NodeKind.IDENTITY_PROVIDER: NodeHint("lock", "red"),
    NodeKind.EXTERNAL_API: NodeHint("cloud", "gray"),
    NodeKind.FRONTEND: NodeHint("monitor", "teal"),
    NodeKind.MOBILE_APP: NodeHint("phone", "teal"),
    NodeKind.CLI: NodeHint("terminal", "gray"),
    NodeKind.ACTOR: NodeHint("user", "gray"),
    NodeKind.SCHEDULER: NodeHint("clock", "yellow"),
    NodeKind.DATA_PIPELINE: NodeHint("filter", "orange"),
    NodeKind.ML_MODEL: NodeHint("cpu", "purple"),
    NodeKind.CUSTOM: NodeHint("box", "gray"),
}

PROTOCOL_RENDER_HINTS: dict[ProtocolKind, ProtocolHint] = {
    ProtocolKind.REST: ProtocolHint("solid", "blue"),
    ProtocolKind.GRPC: ProtocolHint("solid", "blue"),
    ProtocolKind.GRAPHQL: ProtocolHint("solid", "pink"),
    ProtocolKind.WEBSOCKET: ProtocolHint("dashed", "teal"),
    ProtocolKind.KAFKA: ProtocolHint("dashed", "purple"),
    ProtocolKind.RABBITMQ: ProtocolHint("dashed", "orange"),
    ProtocolKind.SQS: ProtocolHint("dashed", "orange"),
    ProtocolKind.PUBSUB: ProtocolHint("dashed", "purple"),
    ProtocolKind.NATS: ProtocolHint("dashed", "purple"),
    ProtocolKind.TCP: ProtocolHint("solid", "gray"),
    ProtocolKind.UDP: ProtocolHint("dotted", "gray"),
    ProtocolKind.SMTP: ProtocolHint("dashed", "gray"),
    ProtocolKind.DATABASE: ProtocolHint("solid", "green"),
    ProtocolKind.FILESYSTEM: ProtocolHint("dashed", "gray"),
    ProtocolKind.SHARED_MEMORY: ProtocolHint("solid", "gray"),
    ProtocolKind.CUSTOM: ProtocolHint("dashed", "gray"),
}


def node_hint(category: NodeCategory) -> NodeHint:
    return NODE_RENDER_HINTS.get(category.kind, NODE_RENDER_HINTS[NodeKind.CUSTOM])


def protocol_hint(protocol: EdgeProtocol) -> ProtocolHint:
    return PROTOCOL_RENDER_HINTS.get(
        protocol.kind, PROTOCOL_RENDER_HINTS[ProtocolKind.CUSTOM]
    )
