"""Recursive symbol/code transcoding of JSON-like payload trees.

``encode`` turns application symbols into backend wire codes, ``decode`` does
the reverse. Both walk maps and sequences with the same traversal and only
differ in the lookup direction. Values that cannot be resolved or that fall
outside their domain are returned unchanged, so transcoding never raises on
payload content.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Sequence, Tuple

from .enum_domains import EnumDomain
from .field_bindings import DEFAULT_RESOLVER, DisambiguationResolver

_LOG = logging.getLogger(__name__)

Context = Tuple[str, ...]
_Lookup = Callable[[EnumDomain, Any], Optional[Any]]


def _encode_value(domain: EnumDomain, value: Any) -> Optional[Any]:
    if not isinstance(value, str):
        return None
    return domain.code_for(value)


def _decode_value(domain: EnumDomain, value: Any) -> Optional[Any]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return domain.symbol_for(value)


class PayloadTranscoder:
    """Apply enum-domain lookups across arbitrarily nested payloads.

    Instances hold no mutable state and can be shared across threads.
    """

    def __init__(self, resolver: Optional[DisambiguationResolver] = None) -> None:
        self.resolver = resolver or DEFAULT_RESOLVER

    def encode(self, node: Any, context: Sequence[str] = ()) -> Any:
        """Return a copy of ``node`` with symbols replaced by wire codes.

        Args:
            node: Scalar, mapping or sequence payload.
            context: Outer hints appended after the structural keys, such as
                resource names taken from the request path.
        """
        return self._walk(node, (), tuple(context), _encode_value, "encode")

    def decode(self, node: Any, context: Sequence[str] = ()) -> Any:
        """Return a copy of ``node`` with wire codes replaced by symbols."""
        return self._walk(node, (), tuple(context), _decode_value, "decode")

    def _walk(
        self,
        node: Any,
        path: Context,
        hints: Context,
        lookup: _Lookup,
        direction: str,
    ) -> Any:
        if node is None:
            return None
        if isinstance(node, dict):
            return self._walk_map(node, path, hints, lookup, direction)
        if isinstance(node, list):
            return [self._walk(item, path, hints, lookup, direction) for item in node]
        if isinstance(node, tuple):
            return tuple(self._walk(item, path, hints, lookup, direction) for item in node)
        return node

    def _walk_map(
        self,
        node: dict,
        path: Context,
        hints: Context,
        lookup: _Lookup,
        direction: str,
    ) -> dict:
        result = {}
        for key, value in node.items():
            if isinstance(value, (dict, list, tuple)):
                # nearest enclosing key first
                result[key] = self._walk(value, (key,) + path, hints, lookup, direction)
                continue
            if value is None or not isinstance(key, str):
                result[key] = value
                continue
            result[key] = self._transcode_field(key, value, path + hints, lookup, direction)
        return result

    def _transcode_field(
        self,
        key: str,
        value: Any,
        context: Context,
        lookup: _Lookup,
        direction: str,
    ) -> Any:
        if not self.resolver.is_categorical(key):
            return value
        domain = self.resolver.resolve(key, context)
        if domain is None:
            return value
        mapped = lookup(domain, value)
        if mapped is None:
            _LOG.debug(
                "%s: value %r for '%s' not in %s; passing through",
                direction,
                value,
                key,
                domain.name,
            )
            return value
        return mapped


DEFAULT_TRANSCODER = PayloadTranscoder()


def encode(node: Any, context: Sequence[str] = ()) -> Any:
    """Encode ``node`` with the default bindings."""
    return DEFAULT_TRANSCODER.encode(node, context)


def decode(node: Any, context: Sequence[str] = ()) -> Any:
    """Decode ``node`` with the default bindings."""
    return DEFAULT_TRANSCODER.decode(node, context)


__all__ = ["DEFAULT_TRANSCODER", "PayloadTranscoder", "decode", "encode"]
