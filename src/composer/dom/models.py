# src/composer/dom/models.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_serializer
from pydantic.alias_generators import to_camel

StyleMap = Dict[str, str]


class CamelModel(BaseModel):
    """Base for every output model: snake_case in Python, camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class PropValue(CamelModel):
    """
    Typed property descriptor attached to a node.

    Keys that were never set are left out of the serialized form, and extra
    keys supplied by component mappings are carried through untouched.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True, extra="allow")

    type: str = "string"
    static_string: Optional[str] = None
    static_value: Optional[Any] = None
    slot: Optional[str] = None

    @model_serializer(mode="wrap")
    def _drop_empty(self, handler):
        data = handler(self)
        return {k: v for k, v in data.items() if v is not None}

    @classmethod
    def string(cls, value: Optional[str]) -> "PropValue":
        return cls(type="string", static_string=value)

    @classmethod
    def image_url(cls, value: str) -> "PropValue":
        return cls(type="imageUrl", static_string=value)

    @classmethod
    def slot_ref(cls, slot_id: str) -> "PropValue":
        return cls(type="slot", slot=slot_id)


class ResponsiveStyles(CamelModel):
    default: StyleMap = Field(default_factory=dict)
    tablet: StyleMap = Field(default_factory=dict)
    mobile: StyleMap = Field(default_factory=dict)


class StyleBreakpoints(CamelModel):
    responsive_styles: ResponsiveStyles = Field(default_factory=ResponsiveStyles)


class NodeStyles(CamelModel):
    default: StyleBreakpoints = Field(default_factory=StyleBreakpoints)

    @classmethod
    def wrap(cls, styles: ResponsiveStyles) -> "NodeStyles":
        return cls(default=StyleBreakpoints(responsive_styles=styles))


class Position(CamelModel):
    index: int = 0
    parent_type: str = ""
    sibling_count: int = 0


class SourceInfo(CamelModel):
    tag_name: str = "unknown"
    id: Optional[str] = None
    class_name: Optional[str] = None
    data_attributes: Dict[str, str] = Field(default_factory=dict)
    position: Position = Field(default_factory=Position)


class Metadata(CamelModel):
    """Debugging/correlation bundle derived from the source element."""
    title: str = ""
    source_info: SourceInfo = Field(default_factory=SourceInfo)
    element_path: str = ""
    content_preview: str = ""

    # Optional bundles, emitted only when a handler produced them
    link_info: Optional[Dict[str, Any]] = None
    form_info: Optional[Dict[str, Any]] = None
    media_info: Optional[Dict[str, Any]] = None
    component_mapping: Optional[Dict[str, Any]] = None

    @model_serializer(mode="wrap")
    def _drop_missing_bundles(self, handler):
        data = handler(self)
        for key in ("linkInfo", "formInfo", "mediaInfo", "componentMapping",
                    "link_info", "form_info", "media_info", "component_mapping"):
            if key in data and data[key] is None:
                del data[key]
        return data


class Node(CamelModel):
    """One element of the compositional document model."""
    type: str
    uid: str
    metadata: Metadata = Field(default_factory=Metadata)
    attrs: Dict[str, str] = Field(default_factory=dict)
    props: Dict[str, PropValue] = Field(default_factory=dict)
    slots: Dict[str, List["Node"]] = Field(default_factory=dict)
    styles: NodeStyles = Field(default_factory=NodeStyles)

    @property
    def children(self) -> List["Node"]:
        """Ordered children referenced by the 'children' slot prop, if any."""
        ref = self.props.get("children")
        if ref is None or ref.slot is None:
            return []
        return self.slots.get(ref.slot, [])

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")

    def to_json(self, indent: Optional[int] = 2) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)


class MappedNodeId(CamelModel):
    node_id: str
    variant_properties: Dict[str, Any] = Field(default_factory=dict)


class ComponentMapping(CamelModel):
    """Externally supplied binding of correlation ids to a code component."""
    node_ids: List[MappedNodeId] = Field(default_factory=list)
    code_component_name: Optional[str] = None
    prop_mappings: Dict[str, Any] = Field(default_factory=dict)
    figma_component_key: Optional[str] = None

    def find(self, correlation_id: str) -> Optional[MappedNodeId]:
        for node_id in self.node_ids:
            if node_id.node_id == correlation_id:
                return node_id
        return None


Node.model_rebuild()
