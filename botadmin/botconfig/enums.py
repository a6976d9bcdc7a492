"""Enums for the bot configuration domain."""

from enum import Enum


class FieldType(str, Enum):
    """Type tag of a configuration field.

    Determines the shape of factory/current values and which validation
    rule applies to updates.
    """

    TEXT = "text"
    TEXTAREA = "textarea"
    DROPDOWN = "dropdown"
    TOGGLE = "toggle"
    SLIDER = "slider"
    COLOR = "color"
    IMAGE = "image"
    NUMBER = "number"
    LIST = "list"
    VOICE_PREVIEW = "voice_preview"


class AccessRole(str, Enum):
    """Caller tier allowed to see and edit a field.

    Enforcement happens outside the configuration core.
    """

    MERCHANT = "merchant"
    SUPER_USER = "super_user"
    SYSTEM = "system"


class SectionKey(str, Enum):
    """Fixed set of sections a configuration document may hold."""

    UI_BRANDING = "ui_branding"
    CONVERSATION_PERSONALITY = "conversation_personality"
    AI_SETTINGS = "ai_settings"
    KNOWLEDGE_BASE = "knowledge_base"
    VOICE_SPEECH = "voice_speech"
    GUARDRAILS = "guardrails"
    META_CONTROLS = "meta_controls"
