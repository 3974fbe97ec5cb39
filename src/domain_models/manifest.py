import logging
from typing import Annotated, Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    ValidationError,
    ValidatorFunctionWrapHandler,
    WrapValidator,
    field_validator,
    model_validator,
)

from domain_models.types import NodeID, PropertyName, ValueType

# Configure logger
logger = logging.getLogger(__name__)


def payload_text(payload: Any) -> str:
    """
    Render a raw value payload as text, spelling booleans the way JSON does.
    """
    if payload is None:
        return ""
    if isinstance(payload, bool):
        return "true" if payload else "false"
    return str(payload)


class _ValueBase(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


class BooleanValue(_ValueBase):
    """A plain boolean (e.g. `expanded`, `hidden`)."""

    type: Literal["boolean"] = "boolean"
    value: bool


class BooleanOrUndefinedValue(_ValueBase):
    type: Literal["booleanOrUndefined"] = "booleanOrUndefined"
    value: bool | None = None


class TristateValue(_ValueBase):
    """A three-valued state (e.g. `checked`, `pressed`)."""

    type: Literal["tristate"] = "tristate"
    value: Literal["true", "false", "mixed"]

    @field_validator("value", mode="before")
    @classmethod
    def normalize_boolean(cls, v: Any) -> Any:
        """Some producers emit tristates as JSON booleans."""
        if isinstance(v, bool):
            return payload_text(v)
        return v


class StringValue(_ValueBase):
    """Any string-shaped payload: names, tokens, id references and roles."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    type: Literal["string", "computedString", "token", "idref", "role", "internalRole"]
    value: str = ""


class IntegerValue(_ValueBase):
    type: Literal["integer"] = "integer"
    value: int


class NumberValue(_ValueBase):
    type: Literal["number"] = "number"
    value: float


class TokenListValue(_ValueBase):
    type: Literal["tokenList"] = "tokenList"
    value: list[str] | str | None = None


class AXRelatedNode(BaseModel):
    """A DOM node referenced by a relation value."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    backend_dom_node_id: int | None = Field(
        default=None, alias="backendDOMNodeId", description="Backend DOM node id."
    )
    idref: str | None = Field(default=None, description="The IDRef value, if any.")
    text: str | None = Field(default=None, description="Text alternative of the node.")


class RelationValue(_ValueBase):
    """Node references. The payload usually lives in `relatedNodes`."""

    type: Literal["node", "nodeList", "idrefList", "domRelation"]
    value: Any = None
    related_nodes: list[AXRelatedNode] = Field(default_factory=list, alias="relatedNodes")


class UndefinedValue(_ValueBase):
    type: Literal["valueUndefined"] = "valueUndefined"
    value: None = None


class UnknownValue(_ValueBase):
    """Fallback for tags outside the known vocabulary; the payload is kept untyped."""

    type: str
    value: Any = None


# Maps every known type tag to the union member that carries its payload.
_VARIANT_BY_TAG: dict[str, str] = {
    ValueType.BOOLEAN: "boolean",
    ValueType.BOOLEAN_OR_UNDEFINED: "booleanOrUndefined",
    ValueType.TRISTATE: "tristate",
    ValueType.STRING: "string",
    ValueType.COMPUTED_STRING: "string",
    ValueType.TOKEN: "string",
    ValueType.IDREF: "string",
    ValueType.ROLE: "string",
    ValueType.INTERNAL_ROLE: "string",
    ValueType.INTEGER: "integer",
    ValueType.NUMBER: "number",
    ValueType.TOKEN_LIST: "tokenList",
    ValueType.NODE: "relation",
    ValueType.NODE_LIST: "relation",
    ValueType.IDREF_LIST: "relation",
    ValueType.DOM_RELATION: "relation",
    ValueType.VALUE_UNDEFINED: "valueUndefined",
}


def _value_variant(data: Any) -> str:
    tag = data.get("type") if isinstance(data, dict) else getattr(data, "type", None)
    return _VARIANT_BY_TAG.get(tag, "unknown") if isinstance(tag, str) else "unknown"


def _fall_back_to_unknown(data: Any, handler: ValidatorFunctionWrapHandler) -> Any:
    """
    Keep a value whose payload does not fit its tag as an untyped `UnknownValue`.

    A single off-shape property (e.g. an integer tag carrying "two") must not
    reject the whole tree; consumers matching on the typed variants skip it.
    """
    try:
        return handler(data)
    except ValidationError:
        if not isinstance(data, dict) or not isinstance(data.get("type"), str):
            raise
        logger.warning(f"Off-shape {data['type']!r} payload kept untyped: {data.get('value')!r}")
        return UnknownValue.model_validate(data)


_KnownValue = Annotated[
    Annotated[BooleanValue, Tag("boolean")]
    | Annotated[BooleanOrUndefinedValue, Tag("booleanOrUndefined")]
    | Annotated[TristateValue, Tag("tristate")]
    | Annotated[StringValue, Tag("string")]
    | Annotated[IntegerValue, Tag("integer")]
    | Annotated[NumberValue, Tag("number")]
    | Annotated[TokenListValue, Tag("tokenList")]
    | Annotated[RelationValue, Tag("relation")]
    | Annotated[UndefinedValue, Tag("valueUndefined")]
    | Annotated[UnknownValue, Tag("unknown")],
    Discriminator(_value_variant),
]

TypedValue = Annotated[_KnownValue, WrapValidator(_fall_back_to_unknown)]


class AXProperty(BaseModel):
    """A named accessibility property of a node."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str = Field(..., description="Property name, usually a `PropertyName`.")
    value: TypedValue = Field(..., description="The typed property value.")


class AXNode(BaseModel):
    """
    One node of a CDP accessibility tree snapshot.

    Children are referenced by id; the node list itself is flat.
    """

    model_config = ConfigDict(
        extra="ignore", frozen=True, populate_by_name=True, coerce_numbers_to_str=True
    )

    node_id: NodeID = Field(..., alias="nodeId", description="Unique id within the tree.")
    ignored: bool = Field(default=False, description="Ignored nodes render nothing.")
    role: TypedValue | None = Field(default=None, description="Semantic role of the node.")
    name: TypedValue | None = Field(default=None, description="Accessible name.")
    description: TypedValue | None = Field(default=None, description="Accessible description.")
    value: TypedValue | None = Field(default=None, description="Current value.")
    properties: list[AXProperty] = Field(
        default_factory=list, description="Ordered accessibility properties."
    )
    child_ids: list[NodeID] = Field(
        default_factory=list, alias="childIds", description="Ordered child node ids."
    )

    @property
    def role_token(self) -> str | None:
        """The role token used for dispatch, or None when the node has no role."""
        match self.role:
            case None:
                return None
            case StringValue(value=token):
                return token
            case other:
                return payload_text(other.value)

    @property
    def name_text(self) -> str:
        """The accessible name as text; an absent name is empty."""
        match self.name:
            case None:
                return ""
            case StringValue(value=text):
                return text
            case other:
                return payload_text(other.value)

    @property
    def is_hidden(self) -> bool:
        """True when the `hidden` property carries a truthy payload."""
        return bool(self.property_payload(PropertyName.HIDDEN))

    def get_property(self, name: PropertyName | str) -> AXProperty | None:
        """Return the first property with the given name."""
        return next((p for p in self.properties if p.name == name), None)

    def property_payload(self, name: PropertyName | str) -> Any:
        """Return the raw payload of a property, or None when it is absent."""
        prop = self.get_property(name)
        return prop.value.value if prop else None


class AXTree(BaseModel):
    """
    A full accessibility tree snapshot.

    The root is the first node by convention of the CDP dump format.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    nodes: list[AXNode] = Field(..., min_length=1, description="Flat list of tree nodes.")

    @model_validator(mode="before")
    @classmethod
    def wrap_bare_list(cls, data: Any) -> Any:
        """Accept a bare JSON array of nodes as well as `{"nodes": [...]}`."""
        if isinstance(data, list):
            return {"nodes": data}
        return data

    @property
    def root_id(self) -> NodeID:
        return self.nodes[0].node_id
