"""
In-memory capability registries.

One registry per capability kind, scoped to a server instance. Dicts keep insertion order and
overwriting a key keeps its original position, which is the order capabilities are advertised in.
"""
import logging
from typing import Generic, Iterator, TypeVar

from .schemas import CapabilityDefinition, PromptDefinition, ResourceDefinition, ToolDefinition

logger = logging.getLogger(__name__)

D = TypeVar("D", bound=CapabilityDefinition)


class Registry(Generic[D]):
    """Ordered, key -> definition store."""

    kind = "capability"

    def __init__(self) -> None:
        self._definitions: dict[str, D] = {}

    def register(self, definition: D) -> None:
        """Insert or overwrite. Last write wins, position of the first write is kept."""
        key = definition.key
        if key in self._definitions:
            logger.warning(f"Replacing already registered {self.kind} '{key}'")
        self._definitions[key] = definition

    def get(self, key: str) -> D | None:
        """Get a definition by key."""
        return self._definitions.get(key)

    def list_all(self) -> list[D]:
        """Return all registered definitions in registration order."""
        return list(self._definitions.values())

    def __len__(self) -> int:
        return len(self._definitions)

    def __contains__(self, key: object) -> bool:
        return key in self._definitions

    def __iter__(self) -> Iterator[D]:
        return iter(self.list_all())


class ToolRegistry(Registry[ToolDefinition]):
    """Tools keyed by name."""
    kind = "tool"


class ResourceRegistry(Registry[ResourceDefinition]):
    """Resources keyed by uri."""
    kind = "resource"


class PromptRegistry(Registry[PromptDefinition]):
    """Prompts keyed by name."""
    kind = "prompt"
