from dataclasses import dataclass, field
from typing import Dict, List, Optional

from jsx2overreact.models import SyntaxNode


@dataclass
class FunctionScope:
    name: str
    start: int
    end: int
    rewrites: Dict[str, str] = field(default_factory=dict)

    def contains(self, node: SyntaxNode) -> bool:
        return self.start <= node.start and node.end <= self.end


class HookRewriteTable:
    """
    State-hook identifier rewrites, keyed by component name.

    ``const [count, setCount] = useState()`` inside component ``Counter``
    registers ``count -> count.value`` and ``setCount -> count.set`` for the
    byte range of ``Counter``. Lookups only succeed for identifiers inside that
    range; shadowing by nested functions is not tracked.
    """

    def __init__(self) -> None:
        self.scopes: Dict[str, FunctionScope] = {}
        self._active: List[FunctionScope] = []

    @property
    def active(self) -> Optional[FunctionScope]:
        return self._active[-1] if self._active else None

    def enter(self, name: str, node: SyntaxNode) -> FunctionScope:
        scope = FunctionScope(name=name, start=node.start, end=node.end)
        self.scopes[name] = scope
        self._active.append(scope)
        return scope

    def exit(self, scope: FunctionScope) -> None:
        if self._active and self._active[-1] is scope:
            self._active.pop()

    def register(self, value_name: str, setter_name: str) -> bool:
        scope = self.active
        if scope is None:
            return False
        scope.rewrites[value_name] = f"{value_name}.value"
        scope.rewrites[setter_name] = f"{value_name}.set"
        return True

    def lookup(self, name: str, node: SyntaxNode) -> Optional[str]:
        for scope in reversed(self._active):
            if scope.contains(node) and name in scope.rewrites:
                return scope.rewrites[name]
        return None
