"""
Borrow analysis for the Rust target.

A type needs a lifetime parameter when a value of it can hold borrowed
data: a string or byte view, directly, inside a vector, or anywhere inside
a custom type reachable from it.
"""

from typing import Dict, Iterable, List, Set

from ....logging_config import get_logger
from ...core.generator import GeneratorError
from ...core.schema import Arg, Constructor, CustomType, Function, Type, TypeKind

logger = get_logger(__name__)

BORROWED_KINDS = {TypeKind.STRING, TypeKind.BYTES}
PLAIN_KINDS = {TypeKind.BOOL, TypeKind.INT32, TypeKind.INT53, TypeKind.INT64, TypeKind.DOUBLE}


class LifetimeAnalyzer:
    """
    Decides which types need a lifetime parameter.

    Results for custom types are memoized by identity. A query on a custom
    type resolves every custom type reachable from it at once, so cycles in
    the type graph (a type containing itself, directly or through other
    types) terminate and cost time linear in the reachable schema.
    """

    def __init__(self):
        self._cache: Dict[int, bool] = {}

    def needs_lifetime(self, type_: Type) -> bool:
        """Whether a value of type_ can borrow from the input."""
        kind = type_.kind
        if kind in BORROWED_KINDS:
            return True
        if kind == TypeKind.VECTOR:
            if type_.element is None:
                raise GeneratorError("Vector type without element type")
            return self.needs_lifetime(type_.element)
        if kind == TypeKind.CUSTOM:
            if type_.custom is None:
                raise GeneratorError("Custom type without a type reference")
            return self.custom_needs_lifetime(type_.custom)
        if kind in PLAIN_KINDS:
            return False
        raise GeneratorError(f"Unsupported type kind: {kind}")

    def args_need_lifetime(self, args: Iterable[Arg]) -> bool:
        return any(self.needs_lifetime(arg.type) for arg in args)

    def constructors_need_lifetime(self, constructors: Iterable[Constructor]) -> bool:
        return any(self.args_need_lifetime(c.args) for c in constructors)

    def functions_need_lifetime(self, functions: Iterable[Function]) -> bool:
        return any(self.args_need_lifetime(f.args) for f in functions)

    def any_needs_lifetime(self, declarations) -> bool:
        """Fold over constructors and/or functions alike."""
        return any(self.args_need_lifetime(d.args) for d in declarations)

    def custom_needs_lifetime(self, custom: CustomType) -> bool:
        """True if any constructor of custom needs a lifetime."""
        key = id(custom)
        if key not in self._cache:
            self._resolve(custom)
        return self._cache[key]

    def _resolve(self, root: CustomType):
        """Compute and cache results for every custom type reachable from root."""
        reachable: Dict[int, CustomType] = {}
        referenced_by: Dict[int, Set[int]] = {}
        borrows_directly: List[int] = []

        stack = [root]
        reachable[id(root)] = root
        while stack:
            custom = stack.pop()
            key = id(custom)
            direct = False
            for constructor in custom.constructors:
                for arg in constructor.args:
                    inner = _innermost(arg.type)
                    if inner.kind in BORROWED_KINDS:
                        direct = True
                    elif inner.kind == TypeKind.CUSTOM:
                        if inner.custom is None:
                            raise GeneratorError(
                                f"{constructor.name}.{arg.name}: custom type without a type reference"
                            )
                        target = inner.custom
                        target_key = id(target)
                        if target_key in self._cache:
                            if self._cache[target_key]:
                                direct = True
                            continue
                        referenced_by.setdefault(target_key, set()).add(key)
                        if target_key not in reachable:
                            reachable[target_key] = target
                            stack.append(target)
                    elif inner.kind not in PLAIN_KINDS:
                        raise GeneratorError(
                            f"{constructor.name}.{arg.name}: unsupported type kind {inner.kind}"
                        )
            if direct:
                borrows_directly.append(key)

        # Borrowing flows backwards along references
        needs: Set[int] = set(borrows_directly)
        pending = list(borrows_directly)
        while pending:
            key = pending.pop()
            for referrer in referenced_by.get(key, ()):
                if referrer not in needs:
                    needs.add(referrer)
                    pending.append(referrer)

        for key in reachable:
            self._cache[key] = key in needs

        logger.debug(
            "Resolved lifetimes for %d types reachable from %s (%d borrow)",
            len(reachable),
            root.name,
            len(needs),
        )


def _innermost(type_: Type) -> Type:
    """Strip vector wrappers."""
    while type_.kind == TypeKind.VECTOR:
        if type_.element is None:
            raise GeneratorError("Vector type without element type")
        type_ = type_.element
    return type_
