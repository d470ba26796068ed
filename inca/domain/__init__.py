"""Domain package exports for enum domains, bindings and transcoding."""

from .enum_domains import (
    DEFAULT_REGISTRY,
    DOMAIN_TABLE_VERSION,
    EnumDomain,
    EnumRegistry,
)
from .field_bindings import (
    BINDING_TABLE_VERSION,
    DEFAULT_RESOLVER,
    ContextRule,
    DisambiguationResolver,
    FieldBinding,
)
from .labels import label_for
from .transcoder import DEFAULT_TRANSCODER, PayloadTranscoder, decode, encode

__all__ = [
    "BINDING_TABLE_VERSION",
    "ContextRule",
    "DEFAULT_REGISTRY",
    "DEFAULT_RESOLVER",
    "DEFAULT_TRANSCODER",
    "DOMAIN_TABLE_VERSION",
    "DisambiguationResolver",
    "EnumDomain",
    "EnumRegistry",
    "FieldBinding",
    "PayloadTranscoder",
    "decode",
    "encode",
    "label_for",
]
