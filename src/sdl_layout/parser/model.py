"""Data model for SDL architecture graphs."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class NodeKind(Enum):
    """Stdlib node kinds. Anything else is carried as CUSTOM."""

    ACTOR = "actor"
    FRONTEND = "frontend"
    MOBILE_APP = "mobile-app"
    CLI = "cli"
    CDN = "cdn"
    LOAD_BALANCER = "load-balancer"
    GATEWAY = "gateway"
    IDENTITY_PROVIDER = "identity-provider"
    MICROSERVICE = "microservice"
    MONOLITH = "monolith"
    SERVERLESS_FUNCTION = "serverless-function"
    SCHEDULER = "scheduler"
    DATA_PIPELINE = "data-pipeline"
    ML_MODEL = "ml-model"
    MESSAGE_BROKER = "message-broker"
    MESSAGE_QUEUE = "message-queue"
    DATABASE = "database"
    CACHE = "cache"
    OBJECT_STORAGE = "object-storage"
    EXTERNAL_API = "external-api"
    CUSTOM = "custom"


class ProtocolKind(Enum):
    """Stdlib edge protocols. Anything else is carried as CUSTOM."""

    REST = "rest"
    GRPC = "grpc"
    GRAPHQL = "graphql"
    WEBSOCKET = "websocket"
    KAFKA = "kafka"
    RABBITMQ = "rabbitmq"
    SQS = "sqs"
    PUBSUB = "pubsub"
    NATS = "nats"
    TCP = "tcp"
    UDP = "udp"
    SMTP = "smtp"
    DATABASE = "database"
    FILESYSTEM = "filesystem"
    SHARED_MEMORY = "shared-memory"
    CUSTOM = "custom"


_KINDS_BY_VALUE = {k.value: k for k in NodeKind}
_PROTOCOLS_BY_VALUE = {p.value: p for p in ProtocolKind}


@dataclass(frozen=True)
class NodeCategory:
    """A node kind, with the original tag kept for custom kinds."""

    kind: NodeKind
    tag: str

    @classmethod
    def parse(cls, text: str | None) -> NodeCategory:
        tag = (text or NodeKind.CUSTOM.value).strip()
        return cls(_KINDS_BY_VALUE.get(tag, NodeKind.CUSTOM), tag)

    @property
    def is_custom(self) -> bool:
        return self.kind is NodeKind.CUSTOM

    def __str__(self) -> str:
        return self.tag


@dataclass(frozen=True)
class EdgeProtocol:
    """An edge protocol, with the original tag kept for custom protocols."""

    kind: ProtocolKind
    tag: str

    @classmethod
    def parse(cls, text: str | None) -> EdgeProtocol:
        tag = (text or ProtocolKind.CUSTOM.value).strip()
        return cls(_PROTOCOLS_BY_VALUE.get(tag, ProtocolKind.CUSTOM), tag)

    def __str__(self) -> str:
        return self.tag


class PortSide(Enum):
    """Side of a node boundary where an edge attaches."""

    LEFT = "left"
    RIGHT = "right"


@dataclass
class Node:
    """A component in the architecture (service, store, actor, ...)."""

    id: str
    category: NodeCategory
    label: str
    description: str = ""
    responsibilities: list[str] = field(default_factory=list)


@dataclass
class Edge:
    """A communication link between two nodes."""

    id: str
    source: str
    target: str
    protocol: EdgeProtocol
    bidirectional: bool = False
    label: str = ""


@dataclass
class Trigger:
    """Something that starts a flow (user action, schedule, event)."""

    id: str
    label: str
    kind: str = ""


@dataclass
class FlowStep:
    id: str
    actor: str
    action: str = ""
    via: str | None = None


@dataclass
class Flow:
    """An ordered walk through the graph started by a trigger."""

    id: str
    label: str
    trigger: str = ""
    steps: list[FlowStep] = field(default_factory=list)


@dataclass
class Position:
    """Top-left corner of a node on the canvas, plus its layer."""

    x: float
    y: float
    layer: int = 0


@dataclass
class SdlGraph:
    """Complete SDL architecture definition."""

    title: str = ""
    nodes: dict[str, Node] = field(default_factory=dict)
    edges: list[Edge] = field(default_factory=list)
    triggers: dict[str, Trigger] = field(default_factory=dict)
    flows: list[Flow] = field(default_factory=list)

    def add_node(self, node: Node) -> None:
        self.nodes[node.id] = node

    def add_edge(self, edge: Edge) -> None:
        self.edges.append(edge)

    def add_trigger(self, trigger: Trigger) -> None:
        self.triggers[trigger.id] = trigger

    def add_flow(self, flow: Flow) -> None:
        self.flows.append(flow)

    def dangling_edges(self) -> list[Edge]:
        """Return edges whose source or target is not a known node."""
        return [
            e
            for e in self.edges
            if e.source not in self.nodes or e.target not in self.nodes
        ]
