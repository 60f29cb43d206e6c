"""
Tool records and the store of tools loaded in a session.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Any, Iterator, Mapping, Optional, Tuple

from loguru import logger


def _as_label_tuple(value: Any, field_name: str) -> Tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"'{field_name}' must be a list, got {type(value).__name__}")
    for item in value:
        if not isinstance(item, str):
            raise ValueError(f"'{field_name}' entries must be strings, got {type(item).__name__}")
    return tuple(value)


@dataclass(frozen=True)
class ToolRecord:
    """Immutable catalog entry describing one tool"""
    tool_id: str
    name: Optional[str] = None
    categories: Tuple[str, ...] = ()
    predefined_comparisons: Tuple[str, ...] = ()
    attributes: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    def __post_init__(self):
        if not isinstance(self.tool_id, str) or not self.tool_id:
            raise ValueError("toolId must be a non-empty string")
        object.__setattr__(self, 'attributes', MappingProxyType(dict(self.attributes)))

    @property
    def display_name(self) -> str:
        return self.name or self.tool_id

    def get(self, key: str, default: Any = None) -> Any:
        """Read a raw payload attribute (e.g. 'learningCurve')."""
        return self.attributes.get(key, default)

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to the catalog JSON shape"""
        data = dict(self.attributes)
        data['toolId'] = self.tool_id
        if self.name is not None:
            data['name'] = self.name
        if self.categories:
            data['categories'] = list(self.categories)
        if self.predefined_comparisons:
            data['predefinedComparisons'] = list(self.predefined_comparisons)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ToolRecord':
        """
        Create a tool record from a catalog JSON object.

        Raises:
            ValueError: If the payload is not a valid tool record
        """
        if not isinstance(data, dict):
            raise ValueError(f"Tool payload must be a JSON object, got {type(data).__name__}")

        tool_id = data.get('toolId')
        if not isinstance(tool_id, str) or not tool_id:
            raise ValueError("Tool payload has no valid 'toolId'")

        name = data.get('name')
        if name is not None and not isinstance(name, str):
            name = str(name)

        return cls(
            tool_id=tool_id,
            name=name or None,
            categories=_as_label_tuple(data.get('categories'), 'categories'),
            predefined_comparisons=_as_label_tuple(data.get('predefinedComparisons'), 'predefinedComparisons'),
            attributes=data,
        )


class ToolStore:
    """
    Tool Store

    Insertion-ordered mapping from tool id to record. Each id is loaded at most
    once: putting an id that is already present is a no-op.
    """

    def __init__(self):
        self._tools: Dict[str, ToolRecord] = {}

    def has(self, tool_id: str) -> bool:
        return tool_id in self._tools

    def get(self, tool_id: str) -> Optional[ToolRecord]:
        return self._tools.get(tool_id)

    def put(self, tool_id: str, record: ToolRecord) -> bool:
        """
        Insert a record unless the id is already loaded.

        Returns:
            True if the record was inserted, False if the id was present
        """
        if tool_id in self._tools:
            logger.debug(f"Tool '{tool_id}' already loaded, keeping existing record")
            return False
        self._tools[tool_id] = record
        logger.debug(f"Stored tool '{tool_id}' ({len(self._tools)} loaded)")
        return True

    def remove(self, tool_id: str) -> bool:
        removed = self._tools.pop(tool_id, None)
        if removed is not None:
            logger.debug(f"Removed tool '{tool_id}' ({len(self._tools)} loaded)")
        return removed is not None

    def values(self) -> List[ToolRecord]:
        return list(self._tools.values())

    def ids(self) -> List[str]:
        return list(self._tools.keys())

    def clear(self) -> None:
        self._tools.clear()

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, tool_id: object) -> bool:
        return tool_id in self._tools

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._tools))
