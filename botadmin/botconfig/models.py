"""Domain models for merchant bot configuration documents.

A document groups typed fields into a fixed set of sections. Each field is
one variant of a tagged union discriminated by its `type`, so factory and
current values always keep the shape their type declares.
"""

from collections.abc import Iterator
from datetime import UTC, datetime
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from botadmin.botconfig.enums import AccessRole, FieldType, SectionKey

EMAIL_REGEX = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"


def utc_now() -> datetime:
    """Return current UTC time."""
    return datetime.now(UTC)


class VoiceSettings(BaseModel):
    """Structured voice selection for a voice preview field."""

    model_config = ConfigDict(extra="allow")

    voice: str | None = None
    model: str | None = None


class _FieldBase(BaseModel):
    """Metadata shared by every field variant."""

    model_config = ConfigDict(
        populate_by_name=True,
        validate_assignment=True,
        extra="ignore",
    )

    key: str = Field(..., min_length=1, description="Key, unique within a document")
    label: str = Field(..., description="Human-readable name")
    access_role: AccessRole = Field(..., description="Caller tier allowed to edit")
    mandatory: bool = Field(default=False, description="Reject empty values on update")
    guideline: str | None = Field(default=None, description="Editing guideline")
    show_info_icon: bool = Field(default=False, alias="showInfoIcon")
    info_text: str | None = Field(default=None, alias="infoText")
    max_length: int | None = Field(default=None, ge=1, alias="maxLength")
    options: list[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _seed_current_value(cls, data: Any) -> Any:
        """A freshly defined field starts at its factory value."""
        if isinstance(data, dict) and "current_value" not in data and "factory_value" in data:
            return {**data, "current_value": data["factory_value"]}
        return data

    @property
    def field_type(self) -> FieldType:
        return FieldType(self.type)  # type: ignore[attr-defined]


class TextField(_FieldBase):
    """Single or multi line free text."""

    type: Literal["text", "textarea"]
    factory_value: str
    current_value: str | None = None


class DropdownField(_FieldBase):
    """One choice out of an ordered option list."""

    type: Literal["dropdown"]
    factory_value: str
    current_value: str | None = None


class NumberField(_FieldBase):
    """Numeric input, rendered as a plain number or a slider."""

    model_config = ConfigDict(allow_inf_nan=False)

    type: Literal["number", "slider"]
    factory_value: int | float
    current_value: int | float | None = None


class ToggleField(_FieldBase):
    """On/off switch."""

    type: Literal["toggle"]
    factory_value: bool
    current_value: bool | None = None


class ColorField(_FieldBase):
    """Hex color such as #1E40AF."""

    type: Literal["color"]
    factory_value: str
    current_value: str | None = None


class ImageField(_FieldBase):
    """Image referenced by URL."""

    type: Literal["image"]
    factory_value: str
    current_value: str | None = None


class ListField(_FieldBase):
    """Ordered list of strings."""

    type: Literal["list"]
    factory_value: list[str]
    current_value: list[str] | None = None


class VoicePreviewField(_FieldBase):
    """Voice identifier or structured voice settings."""

    type: Literal["voice_preview"]
    factory_value: str | VoiceSettings
    current_value: str | VoiceSettings | None = None


AnyField = (
    TextField
    | DropdownField
    | NumberField
    | ToggleField
    | ColorField
    | ImageField
    | ListField
    | VoicePreviewField
)

ConfigField = Annotated[AnyField, Field(discriminator="type")]


class Section(BaseModel):
    """Named, ordered group of fields."""

    model_config = ConfigDict(populate_by_name=True)

    label: str
    description: str | None = None
    visible: bool = True
    show_info_icon: bool = Field(default=False, alias="showInfoIcon")
    info_text: str | None = Field(default=None, alias="infoText")
    fields: list[ConfigField] = Field(default_factory=list)


class Actor(BaseModel):
    """Authenticated caller identity.

    Built from bearer token claims; mutating operations require one.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    email: str = Field(..., pattern=EMAIL_REGEX)
    role: str | None = None


class AuditActor(BaseModel):
    """Who performed a change, as recorded in the audit block."""

    user_id: str | None = None
    full_name: str | None = None
    email: str | None = None

    @classmethod
    def from_actor(cls, actor: Actor) -> "AuditActor":
        return cls(user_id=actor.id, full_name=actor.name, email=actor.email)


class AuditBlock(BaseModel):
    """Who and when last mutated a document, and how often."""

    last_updated_at: datetime = Field(default_factory=utc_now)
    last_updated_by: AuditActor | None = None
    last_change_summary: str | None = None
    change_count: int = Field(default=0, ge=0)
    created_by: AuditActor | None = None

    def record_change(
        self,
        *,
        actor: Actor | None = None,
        summary: str | None = None,
    ) -> None:
        """Stamp one mutation call.

        change_count grows by one per call regardless of how many fields
        the call touched.
        """
        self.last_updated_at = utc_now()
        self.change_count += 1
        if actor is not None:
            self.last_updated_by = AuditActor.from_actor(actor)
        if summary is not None:
            self.last_change_summary = summary


class ConfigMeta(BaseModel):
    """Schema metadata plus the audit block."""

    version: str = "1.0.0"
    schema_owner: str = "botadmin"
    schema_created: datetime = Field(default_factory=utc_now)
    description: str | None = None
    audit: AuditBlock = Field(default_factory=AuditBlock)


class BotConfigDocument(BaseModel):
    """Aggregate root: one configuration document per merchant.

    Fields and sections are fixed once created; only field current values,
    the audit block and the bookkeeping timestamps change afterwards.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id", min_length=1, description="Merchant identifier")
    meta: ConfigMeta = Field(default_factory=ConfigMeta)
    sections: dict[SectionKey, Section] = Field(default_factory=dict)
    revision: int = Field(default=0, ge=0, description="Optimistic concurrency counter")
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def merchant_id(self) -> str:
        return self.id

    @property
    def audit(self) -> AuditBlock:
        return self.meta.audit

    def iter_fields(self) -> Iterator[tuple[SectionKey, AnyField]]:
        """Yield (section key, field) pairs in section insertion order."""
        for section_key, section in self.sections.items():
            for field in section.fields:
                yield section_key, field
