from jsx2overreact.models import FunctionDeclaration, BlockStatement, Identifier
from jsx2overreact.scope import HookRewriteTable


def _component(name: str, start: int, end: int) -> FunctionDeclaration:
    return FunctionDeclaration(
        id=Identifier(name=name), body=BlockStatement(), start=start, end=end
    )


def test_register_without_active_scope_is_ignored():
    table = HookRewriteTable()
    assert table.register("count", "setCount") is False
    assert table.lookup("count", Identifier(name="count", start=1, end=6)) is None


def test_lookup_inside_scope():
    table = HookRewriteTable()
    scope = table.enter("Counter", _component("Counter", 0, 100))
    assert table.register("count", "setCount") is True

    inside = Identifier(name="count", start=40, end=45)
    assert table.lookup("count", inside) == "count.value"
    assert table.lookup("setCount", Identifier(name="setCount", start=50, end=58)) == (
        "count.set"
    )
    assert table.lookup("other", Identifier(name="other", start=60, end=65)) is None

    table.exit(scope)
    assert table.active is None
    assert table.lookup("count", inside) is None
    assert table.scopes["Counter"].rewrites == {
        "count": "count.value",
        "setCount": "count.set",
    }


def test_identifiers_outside_range_are_untouched():
    table = HookRewriteTable()
    table.enter("Counter", _component("Counter", 10, 20))
    table.register("count", "setCount")
    assert table.lookup("count", Identifier(name="count", start=25, end=30)) is None


def test_nested_scopes_resolve_innermost_first():
    table = HookRewriteTable()
    outer = table.enter("Outer", _component("Outer", 0, 100))
    table.register("value", "setValue")
    inner = table.enter("Inner", _component("Inner", 20, 60))
    table.register("open", "setOpen")

    node = Identifier(name="value", start=30, end=35)
    assert table.lookup("value", node) == "value.value"
    assert table.lookup("open", Identifier(name="open", start=30, end=34)) == "open.value"

    table.exit(inner)
    assert table.active is outer
    assert table.lookup("open", Identifier(name="open", start=30, end=34)) is None


def test_entering_a_scope_again_resets_it():
    table = HookRewriteTable()
    scope = table.enter("Counter", _component("Counter", 0, 100))
    table.register("count", "setCount")
    table.exit(scope)

    table.enter("Counter", _component("Counter", 0, 100))
    assert table.scopes["Counter"].rewrites == {}
