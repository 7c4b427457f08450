"""Symbolic reference resolver.

Turns a ``ReferenceDescriptor`` into the fully-qualified target symbol a
rendered build script must reference.

Resolution per kind:
- ClassRef        -> ``pkg.Class``
- StaticInit      -> ``pkg.Class.SI()``
- Constructor     -> ``new pkg.Class().<ctor>`` (signature mandatory)
- StaticMethod    -> ``pkg.Class.<method>``
- InstanceMethod  -> ``<method>``
- StaticField     -> ``pkg.Class.<field>``
- InstanceField   -> ``<field>``

Methods without a signature resolve only when the name has a single
overload; otherwise the caller must disambiguate.
"""

from __future__ import annotations

import logging

from src.errors import AmbiguousMemberError, UnknownClassError, UnknownMemberError
from src.models.program import ClassNode, MethodNode, ProgramModel
from src.references.descriptor import ReferenceDescriptor, ReferenceKind
from src.references.names import TargetNames

logger = logging.getLogger(__name__)


class ReferenceResolver:
    """Resolves descriptors against one program model."""

    def __init__(self, program: ProgramModel, names: TargetNames):
        self.program = program
        self.names = names

    def resolve_text(self, text: str) -> str:
        """Parse and resolve a ``KIND:owner[:member[:signature]]`` string."""
        return self.resolve(ReferenceDescriptor.parse(text))

    def resolve(self, ref: ReferenceDescriptor) -> str:
        clazz = self.program.get_class(ref.owner)
        if clazz is None:
            raise UnknownClassError(ref.text, ref.owner)

        class_name = self.names.class_fq_name(clazz.name)
        kind = ref.kind

        if kind is ReferenceKind.CLASS_REF:
            result = class_name
        elif kind is ReferenceKind.STATIC_INIT:
            result = self.names.static_init(clazz)
        elif kind is ReferenceKind.CONSTRUCTOR:
            ctor = self._find_method(clazz, ref)
            result = f"new {class_name}().{self.names.method_name(clazz, ctor)}"
        elif kind in (ReferenceKind.STATIC_METHOD, ReferenceKind.INSTANCE_METHOD):
            method_name = self.names.method_name(clazz, self._find_method(clazz, ref))
            if kind is ReferenceKind.STATIC_METHOD:
                result = f"{class_name}.{method_name}"
            else:
                result = method_name
        else:
            f = clazz.find_field(ref.member or "")
            if f is None:
                raise UnknownMemberError(ref.text, clazz.name, ref.member or "")
            field_name = self.names.field_name(clazz, f)
            if kind is ReferenceKind.STATIC_FIELD:
                result = f"{class_name}.{field_name}"
            else:
                result = field_name

        logger.debug(f"Resolved {ref.text} -> {result}")
        return result

    def _find_method(self, clazz: ClassNode, ref: ReferenceDescriptor) -> MethodNode:
        member = ref.member or ""
        if ref.signature is not None:
            method = clazz.find_method(member, ref.signature)
            if method is None:
                raise UnknownMemberError(ref.text, clazz.name, member, ref.signature)
            return method

        overloads = clazz.methods_by_name(member)
        if not overloads:
            raise UnknownMemberError(ref.text, clazz.name, member)
        if len(overloads) > 1:
            signatures = sorted(m.signature for m in overloads)
            raise AmbiguousMemberError(ref.text, clazz.name, member, signatures)
        return overloads[0]
