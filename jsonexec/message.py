from dataclasses import dataclass, field
from typing import Protocol

from .errors import AttributeNotFoundError


class Host(Protocol):
    """What a service needs from the message it is processing."""

    def read_document(self) -> str: ...

    def write_document(self, content: str): ...

    def resolve_external(self, key: str) -> str: ...

    def write_external(self, key: str, value: str): ...


@dataclass
class Message:
    """
    In-memory message: a string payload plus string metadata.

    Implements `Host`, so it can be handed straight to a service.
    """

    payload: str = ""
    metadata: dict[str, str] = field(default_factory=dict)

    def read_document(self) -> str:
        return self.payload

    def write_document(self, content: str):
        self.payload = content

    def resolve_external(self, key: str) -> str:
        try:
            return self.metadata[key]
        except KeyError as ex:
            raise AttributeNotFoundError(key) from ex

    def write_external(self, key: str, value: str):
        self.metadata[key] = value

    def has_metadata(self, key: str) -> bool:
        return key in self.metadata
