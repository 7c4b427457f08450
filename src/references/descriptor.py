"""Reference descriptor wire format.

A descriptor names a program element from inside a build template:

    KIND:owner[:member[:signature]]

``KIND`` is case-insensitive. Constructors take the signature directly after
the owner (``CONSTRUCTOR:app.Main:()V``).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from src.errors import MalformedDescriptorError


class ReferenceKind(str, Enum):
    STATIC_INIT = "StaticInit"
    CONSTRUCTOR = "Constructor"
    STATIC_METHOD = "StaticMethod"
    INSTANCE_METHOD = "InstanceMethod"
    STATIC_FIELD = "StaticField"
    INSTANCE_FIELD = "InstanceField"
    CLASS_REF = "ClassRef"


# Upper-cased kind token -> kind
KIND_TOKENS: dict[str, ReferenceKind] = {
    "SINIT": ReferenceKind.STATIC_INIT,
    "STATICINIT": ReferenceKind.STATIC_INIT,
    "CONSTRUCTOR": ReferenceKind.CONSTRUCTOR,
    "SMETHOD": ReferenceKind.STATIC_METHOD,
    "STATICMETHOD": ReferenceKind.STATIC_METHOD,
    "METHOD": ReferenceKind.INSTANCE_METHOD,
    "INSTANCEMETHOD": ReferenceKind.INSTANCE_METHOD,
    "SFIELD": ReferenceKind.STATIC_FIELD,
    "STATICFIELD": ReferenceKind.STATIC_FIELD,
    "FIELD": ReferenceKind.INSTANCE_FIELD,
    "INSTANCEFIELD": ReferenceKind.INSTANCE_FIELD,
    "CLASS": ReferenceKind.CLASS_REF,
    "CLASSREF": ReferenceKind.CLASS_REF,
}

# Allowed payload part counts (owner included) per kind
_ARITY: dict[ReferenceKind, tuple[int, ...]] = {
    ReferenceKind.STATIC_INIT: (1,),
    ReferenceKind.CONSTRUCTOR: (2,),
    ReferenceKind.STATIC_METHOD: (2, 3),
    ReferenceKind.INSTANCE_METHOD: (2, 3),
    ReferenceKind.STATIC_FIELD: (2,),
    ReferenceKind.INSTANCE_FIELD: (2,),
    ReferenceKind.CLASS_REF: (1,),
}

CONSTRUCTOR_NAME = "<init>"


@dataclass(frozen=True)
class ReferenceDescriptor:
    """A parsed reference to a class or class member."""

    kind: ReferenceKind
    owner: str
    member: str | None = None
    signature: str | None = None
    text: str = ""

    @classmethod
    def parse(cls, text: str) -> ReferenceDescriptor:
        """Parse ``KIND:owner[:member[:signature]]``.

        Raises:
            MalformedDescriptorError: On unknown kind or wrong payload arity
        """
        raw = text.strip()
        kind_token, sep, payload = raw.partition(":")
        if not sep:
            raise MalformedDescriptorError(raw, "missing ':' after kind")
        return cls.from_parts(kind_token, payload, raw)

    @classmethod
    def from_parts(cls, kind_token: str, payload: str, text: str | None = None) -> ReferenceDescriptor:
        """Build a descriptor from a kind token and its colon-delimited payload."""
        raw = text if text is not None else f"{kind_token}:{payload}"
        kind = KIND_TOKENS.get(kind_token.strip().upper())
        if kind is None:
            raise MalformedDescriptorError(raw, f"unknown kind '{kind_token.strip()}'")

        parts = [p.strip() for p in payload.strip().split(":")]
        if len(parts) not in _ARITY[kind]:
            expected = " or ".join(str(n) for n in _ARITY[kind])
            raise MalformedDescriptorError(
                raw, f"{kind.value} expects {expected} part(s), got {len(parts)}"
            )
        if any(not p for p in parts):
            raise MalformedDescriptorError(raw, "empty part")

        owner = parts[0]
        if kind is ReferenceKind.CONSTRUCTOR:
            return cls(kind, owner, CONSTRUCTOR_NAME, parts[1], raw)
        member = parts[1] if len(parts) > 1 else None
        signature = parts[2] if len(parts) > 2 else None
        return cls(kind, owner, member, signature, raw)
