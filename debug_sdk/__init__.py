"""
debug_sdk
─────────
Stable top-level exports. Import from here, not from sub-modules directly.
Every name exported here is part of the public API and subject to semver.
"""
from debug_sdk.tier0_core.logging import get_logger
from debug_sdk.tier0_core.errors import (
    DebugSdkError,
    ConfigurationError,
    RenderError,
    DescriptionError,
)
from debug_sdk.tier0_core.config import get_config, DebugConfig
from debug_sdk.tier0_core.values import (
    REDACTED,
    REDACTED_TEXT,
    DebugValue,
    ListValue,
    MapValue,
    Opaque,
    Redacted,
    Scalar,
)
from debug_sdk.tier0_core.policy import RedactionPolicy, EMPTY_POLICY
from debug_sdk.tier0_core.capability import SupportsDebugDict, ValueKind, classify
from debug_sdk.tier0_core.normalize import FormatStyle, Nullable, normalize

from debug_sdk.tier1_runtime.context import guarded_description, is_describing
from debug_sdk.tier1_runtime.serialize import render
from debug_sdk.tier1_runtime.wrappers import (
    Redactable,
    RedactableArray,
    RedactableDictionary,
    RedactableValue,
)

from debug_sdk.tier2_reliability.redact import StructuralRedactor, redact_dict
from debug_sdk.tier2_reliability.fallback import FallbackSanitizer, with_fallback

from debug_sdk.builder import DebugDictionaryBuilder, debug_description, describe
from debug_sdk.describable import DebugDescribable, DebugRedactable

__version__ = "0.1.0"
__all__ = [
    # logging
    "get_logger",
    # errors
    "DebugSdkError", "ConfigurationError", "RenderError", "DescriptionError",
    # config
    "get_config", "DebugConfig",
    # data model
    "REDACTED", "REDACTED_TEXT", "DebugValue", "ListValue", "MapValue",
    "Opaque", "Redacted", "Scalar",
    # policy
    "RedactionPolicy", "EMPTY_POLICY",
    # capability
    "SupportsDebugDict", "ValueKind", "classify",
    # normalize
    "FormatStyle", "Nullable", "normalize",
    # guard
    "guarded_description", "is_describing",
    # render
    "render",
    # wrappers
    "Redactable", "RedactableArray", "RedactableDictionary", "RedactableValue",
    # redaction
    "StructuralRedactor", "redact_dict", "FallbackSanitizer", "with_fallback",
    # entry points
    "DebugDictionaryBuilder", "debug_description", "describe",
    "DebugDescribable", "DebugRedactable",
]
