"""
Translate astroid nodes into host-independent Location parts.

Nothing outside this module (and the pylint checker) needs to know how astroid
represents classes, functions or arguments.
"""

from pathlib import Path
from typing import Optional

import astroid  # type: ignore[import-untyped]

from nullfix.domain.location import ClassRef, Location, MethodRef, SourceUnit, SymbolRef

_FINAL_NAMES: frozenset[str] = frozenset({"Final", "typing.Final", "typing_extensions.Final"})
_ANNOTATED_NAMES: frozenset[str] = frozenset({"Annotated", "typing.Annotated", "typing_extensions.Annotated"})


class AstroidTreeIndex:
    """TreeIndexProtocol over astroid: a node has a path when its module was parsed from a file."""

    def get_path(self, symbol: object) -> Optional[str]:
        if not isinstance(symbol, astroid.nodes.NodeNG):
            return None
        if getattr(symbol, "lineno", None) is None:
            return None
        return _module_file(symbol.root())


class AstroidSiteAdapter:
    """Builds SourceUnit / ClassRef / MethodRef / SymbolRef / Location values from astroid nodes."""

    def parse_file(self, file_path: str) -> Optional[astroid.nodes.Module]:
        """Parse a file and return the astroid Module node, or None if it cannot be parsed."""
        path = Path(file_path)
        if not path.exists():
            return None
        try:
            source = path.read_text(encoding="utf-8")
            return astroid.parse(source, module_name=_module_name(path), path=str(path))
        except (astroid.AstroidSyntaxError, UnicodeDecodeError, OSError):
            return None

    def source_unit(self, node: astroid.nodes.NodeNG) -> SourceUnit:
        module = node.root()
        qname = module.qname() if isinstance(module, astroid.nodes.Module) else ""
        if getattr(module, "package", False):
            package = qname
        else:
            package = qname.rpartition(".")[0]
        file_path = _module_file(module)
        uri = Path(file_path).resolve().as_uri() if file_path else ""
        return SourceUnit(package=package, uri=uri)

    def class_ref(self, classdef: astroid.nodes.ClassDef) -> ClassRef:
        return ClassRef(qualified_name=classdef.qname())

    def method_ref(self, funcdef: astroid.nodes.FunctionDef) -> MethodRef:
        decorators: list[str] = []
        if funcdef.decorators is not None:
            decorators = [d.as_string() for d in funcdef.decorators.nodes]
        if funcdef.returns is not None:
            decorators.extend(_annotated_metadata(funcdef.returns))
        return MethodRef(
            name=funcdef.name,
            parameters=tuple(self.parameters(funcdef)),
            annotations=tuple(decorators),
        )

    def parameters(self, funcdef: astroid.nodes.FunctionDef) -> list[SymbolRef]:
        """Declared parameters in signature order: positional-only, regular, *args, keyword-only, **kwargs."""
        args = funcdef.args
        declared: list[tuple[str, Optional[astroid.nodes.NodeNG]]] = []
        posonly = getattr(args, "posonlyargs", None) or []
        posonly_annos = getattr(args, "posonlyargs_annotations", None) or []
        declared.extend(_pair(posonly, posonly_annos))
        declared.extend(_pair(args.args or [], args.annotations or []))
        if args.vararg:
            declared.append((args.vararg, args.varargannotation))
        kwonly = getattr(args, "kwonlyargs", None) or []
        kwonly_annos = getattr(args, "kwonlyargs_annotations", None) or []
        declared.extend(_pair(kwonly, kwonly_annos))
        if args.kwarg:
            declared.append((args.kwarg, args.kwargannotation))
        return [_symbol(name, [annotation] if annotation is not None else []) for name, annotation in declared]

    def parameter_symbol(self, funcdef: astroid.nodes.FunctionDef, name: str) -> SymbolRef:
        for parameter in self.parameters(funcdef):
            if parameter.name == name:
                return parameter
        return SymbolRef(name=name)

    def field_symbol(self, classdef: astroid.nodes.ClassDef, name: str) -> SymbolRef:
        """A field symbol carrying every annotation written on its declarations in `classdef`."""
        annotations: list[astroid.nodes.NodeNG] = []
        for declaration in classdef.locals.get(name, []) + classdef.instance_attrs.get(name, []):
            parent = declaration.parent
            if isinstance(parent, astroid.nodes.AnnAssign) and parent.annotation is not None:
                annotations.append(parent.annotation)
        return _symbol(name, annotations)

    def resolve_instance_field(
        self, classdef: astroid.nodes.ClassDef, name: str
    ) -> Optional[tuple[astroid.nodes.ClassDef, astroid.nodes.NodeNG]]:
        """Find the class (itself or an ancestor) that declares field `name`, and the declaring node."""
        for klass in [classdef, *classdef.ancestors()]:
            for declaration in klass.locals.get(name, []):
                if isinstance(declaration, astroid.nodes.AssignName):
                    return klass, declaration
            declarations = klass.instance_attrs.get(name, [])
            if declarations:
                return klass, declarations[0]
        return None

    def field_location(self, classdef: astroid.nodes.ClassDef, name: str) -> Location:
        declaration = self.resolve_instance_field(classdef, name)
        anchor = declaration[1] if declaration else classdef
        return Location.for_field(
            source=self.source_unit(classdef),
            clazz=self.class_ref(classdef),
            variable=self.field_symbol(classdef, name),
            line=getattr(anchor, "lineno", None),
            column=getattr(anchor, "col_offset", None),
        )

    def parameter_location(self, funcdef: astroid.nodes.FunctionDef, name: str) -> Location:
        return Location.for_parameter(
            source=self.source_unit(funcdef),
            clazz=self._enclosing_class_ref(funcdef),
            method=self.method_ref(funcdef),
            variable=self.parameter_symbol(funcdef, name),
            line=funcdef.lineno,
            column=funcdef.col_offset,
        )

    def return_location(self, funcdef: astroid.nodes.FunctionDef) -> Location:
        return Location.for_return(
            source=self.source_unit(funcdef),
            clazz=self._enclosing_class_ref(funcdef),
            method=self.method_ref(funcdef),
            line=funcdef.lineno,
            column=funcdef.col_offset,
        )

    def local_location(self, funcdef: astroid.nodes.FunctionDef, name: str) -> Location:
        annotations: list[astroid.nodes.NodeNG] = []
        for declaration in funcdef.locals.get(name, []):
            parent = declaration.parent
            if isinstance(parent, astroid.nodes.AnnAssign) and parent.annotation is not None:
                annotations.append(parent.annotation)
        return Location.for_local(
            source=self.source_unit(funcdef),
            clazz=self._enclosing_class_ref(funcdef),
            method=self.method_ref(funcdef),
            variable=_symbol(name, annotations),
            line=funcdef.lineno,
            column=funcdef.col_offset,
        )

    def _enclosing_class_ref(self, funcdef: astroid.nodes.FunctionDef) -> ClassRef:
        parent = funcdef.parent
        if isinstance(parent, astroid.nodes.ClassDef):
            return self.class_ref(parent)
        # Module-level functions have no class; they are addressed by their module.
        return ClassRef(qualified_name=funcdef.root().qname())


def _pair(
    names: list[astroid.nodes.AssignName], annotations: list[Optional[astroid.nodes.NodeNG]]
) -> list[tuple[str, Optional[astroid.nodes.NodeNG]]]:
    padded = list(annotations) + [None] * (len(names) - len(annotations))
    return [(n.name, a) for n, a in zip(names, padded)]


def _symbol(name: str, annotations: list[astroid.nodes.NodeNG]) -> SymbolRef:
    written: list[str] = []
    modifiers: set[str] = set()
    for annotation in annotations:
        written.append(annotation.as_string())
        written.extend(_annotated_metadata(annotation))
        if _is_final(annotation):
            modifiers.add("final")
    return SymbolRef(name=name, annotations=tuple(written), modifiers=frozenset(modifiers))


def _subscript_head(annotation: astroid.nodes.NodeNG) -> str:
    target = annotation.value if isinstance(annotation, astroid.nodes.Subscript) else annotation
    return target.as_string()


def _is_final(annotation: astroid.nodes.NodeNG) -> bool:
    head = _subscript_head(annotation)
    if head in _FINAL_NAMES:
        return True
    # Annotated[Final[int], ...]
    if head in _ANNOTATED_NAMES and isinstance(annotation, astroid.nodes.Subscript):
        inner = annotation.slice
        first = inner.elts[0] if isinstance(inner, astroid.nodes.Tuple) and inner.elts else inner
        return _is_final(first)
    return False


def _annotated_metadata(annotation: astroid.nodes.NodeNG) -> list[str]:
    """Metadata of `Annotated[T, m1, m2]` as written (`["m1", "m2"]`); empty for anything else."""
    if not isinstance(annotation, astroid.nodes.Subscript):
        return []
    if _subscript_head(annotation) not in _ANNOTATED_NAMES:
        return []
    inner = annotation.slice
    if not isinstance(inner, astroid.nodes.Tuple):
        return []
    return [element.as_string() for element in inner.elts[1:]]


def _module_name(path: Path) -> str:
    """Dotted module name, climbing parent directories while they are packages."""
    parts = [] if path.stem == "__init__" else [path.stem]
    parent = path.resolve().parent
    while (parent / "__init__.py").exists():
        parts.insert(0, parent.name)
        parent = parent.parent
    return ".".join(parts) or path.stem


def _module_file(module: astroid.nodes.NodeNG) -> Optional[str]:
    """Source path of a parsed module; astroid names string-built modules `<?>`."""
    path = getattr(module, "file", None)
    if not path or str(path).startswith("<"):
        return None
    return str(path)
