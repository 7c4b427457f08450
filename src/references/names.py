"""Target symbol naming.

Maps classes, methods and fields of the program model to the identifiers
the generated Haxe source uses for them.
"""

from __future__ import annotations

import re

from src.models.program import ClassNode, FieldNode, MethodNode, ProgramModel

_CLASS_UNSAFE = re.compile(r"[^A-Za-z0-9_.]")
_MEMBER_UNSAFE = re.compile(r"[^A-Za-z0-9_]")

STATIC_INIT_ACCESSOR = "SI()"


class TargetNames:
    """Naming scheme for one program.

    With ``minimize`` enabled, members get compact names (``m0``, ``f0`` ...)
    assigned in program order when the instance is built, so the same member
    always maps to the same name.
    """

    def __init__(self, program: ProgramModel, minimize: bool = False):
        self.program = program
        self.minimize = minimize
        self._method_names: dict[tuple[str, str, str], str] = {}
        self._field_names: dict[tuple[str, str], str] = {}
        if minimize:
            self._assign_minimized_names()

    def _assign_minimized_names(self) -> None:
        for clazz in self.program.classes:
            for method in clazz.methods:
                key = (clazz.name, method.name, method.signature)
                self._method_names.setdefault(key, f"m{len(self._method_names)}")
            for f in clazz.fields:
                key = (clazz.name, f.name)
                self._field_names.setdefault(key, f"f{len(self._field_names)}")

    def class_fq_name(self, name: str) -> str:
        return _CLASS_UNSAFE.sub("_", name)

    def static_init(self, clazz: ClassNode) -> str:
        return f"{self.class_fq_name(clazz.name)}.{STATIC_INIT_ACCESSOR}"

    def method_name(self, clazz: ClassNode, method: MethodNode) -> str:
        key = (clazz.name, method.name, method.signature)
        if key in self._method_names:
            return self._method_names[key]
        return f"{_MEMBER_UNSAFE.sub('_', method.name)}_{_MEMBER_UNSAFE.sub('_', method.signature)}"

    def field_name(self, clazz: ClassNode, f: FieldNode) -> str:
        key = (clazz.name, f.name)
        if key in self._field_names:
            return self._field_names[key]
        return "_" + _MEMBER_UNSAFE.sub("_", f.name)
