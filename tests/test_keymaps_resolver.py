from __future__ import annotations

from vim_interp.keymaps import (
    ActionRef,
    Binding,
    KeySequence,
    KeymapRegistry,
    KeymapResolver,
)


def make_action(action_id: str) -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    binding_id: str,
    *,
    mode: str = "command",
    keys: tuple[str, ...] = ("g", "g"),
    action_id: str = "core.test",
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        sequence=KeySequence.from_strings(*keys),
        action_id=action_id,
    )


def build_registry(bindings: list[Binding]) -> KeymapRegistry:
    registry = KeymapRegistry()
    action_ids = {binding.action_id for binding in bindings}
    for action_id in action_ids:
        registry.register_action(make_action(action_id))
    for binding in bindings:
        registry.register_binding(binding)
    return registry


def test_resolver_matches_exact_sequence() -> None:
    binding = make_binding("command.gg")
    registry = build_registry([binding])
    resolver = KeymapResolver(registry)

    result = resolver.resolve("command", ("g", "g"))

    assert result.status == "match"
    assert result.match is not None
    assert result.match.binding.id == binding.id


def test_resolver_reports_pending_for_prefix() -> None:
    binding = make_binding("command.gg")
    registry = build_registry([binding])
    resolver = KeymapResolver(registry)

    result = resolver.resolve("command", ("g",))

    assert result.status == "pending"
    assert result.next_expected == ("g",)


def test_resolver_misses_unknown_sequence() -> None:
    registry = build_registry([make_binding("command.gg")])
    resolver = KeymapResolver(registry)

    result = resolver.resolve("command", ("g", "x"))

    assert result.status == "miss"
    assert result.consumed == 1


def test_resolver_is_mode_scoped() -> None:
    registry = build_registry([make_binding("command.gg")])
    resolver = KeymapResolver(registry)

    assert resolver.resolve("visual", ("g", "g")).status == "miss"


def test_resolver_matches_modifier_tokens() -> None:
    binding = make_binding("command.ctrl_r", keys=("ctrl+r",), action_id="edit.redo")
    registry = build_registry([binding])
    resolver = KeymapResolver(registry)

    result = resolver.resolve("command", ("ctrl+r",))

    assert result.status == "match"


def test_resolver_cache_refreshes_on_revision() -> None:
    registry = build_registry([])
    resolver = KeymapResolver(registry)

    miss = resolver.resolve("command", ("x",))
    assert miss.status == "miss"

    new_binding = make_binding("command.x", keys=("x",), action_id="core.x")
    registry.register_action(make_action("core.x"))
    registry.register_binding(new_binding)

    match = resolver.resolve("command", ("x",))
    assert match.status == "match"
    assert match.match is not None
    assert match.match.binding.id == new_binding.id
