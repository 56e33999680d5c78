import pytest

from vim_interp.keymaps import (
    ActionRef,
    Binding,
    KeySequence,
    KeymapConflictError,
    KeymapRegistry,
)
from vim_interp.keymaps.defaults import DEFAULT_BINDINGS, load_default_keymaps


def make_action(action_id: str = "core.test") -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_sequence(*keys: str) -> KeySequence:
    return KeySequence.from_strings(*keys)


def make_binding(
    *,
    binding_id: str,
    mode: str = "command",
    sequence: KeySequence | None = None,
    action_id: str = "core.test",
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        sequence=sequence or make_sequence("g", "g"),
        action_id=action_id,
    )


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    action = make_action()
    registry.register_action(action)
    binding = make_binding(binding_id="command.gg")

    registry.register_binding(binding)

    assert len(registry) == 1
    assert list(registry.iter_bindings(mode="command")) == [binding]


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    binding = make_binding(binding_id="command.gg")
    registry.register_binding(binding)

    with pytest.raises(KeymapConflictError):
        registry.register_binding(make_binding(binding_id="command.gg.duplicate"))


def test_same_keys_in_other_mode_do_not_conflict() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    registry.register_binding(make_binding(binding_id="command.gg"))
    registry.register_binding(make_binding(binding_id="visual.gg", mode="visual"))

    assert len(registry) == 2


def test_register_binding_requires_known_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding(binding_id="command.gg"))


def test_find_action_returns_none_for_unknown_id() -> None:
    registry = KeymapRegistry()

    assert registry.find_action("nope") is None


def test_load_default_keymaps_registers_every_binding() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry)

    assert len(registry) == len(DEFAULT_BINDINGS)
    assert registry.get_binding("command.i").action_id == "core.insert"
    assert registry.get_binding("command.g_g").action_id == "move.buffer_start"
    assert registry.get_binding("visual_line.V").action_id == "core.exit"


def test_default_repeatable_metadata() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry)

    assert registry.get_action("edit.delete_char").repeatable
    assert registry.get_action("core.insert").repeatable
    assert not registry.get_action("move.left").repeatable
    assert not registry.get_action("search.next").repeatable
    assert not registry.get_action("edit.undo").repeatable


def test_duplicate_binding_id_is_rejected() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="binding"))

    with pytest.raises(ValueError):
        registry.register_binding(
            make_binding(binding_id="binding", sequence=make_sequence("d", "d"))
        )


def test_conflict_names_the_binding_in_the_way() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    first = make_binding(binding_id="command.gg")
    registry.register_binding(first)

    with pytest.raises(KeymapConflictError) as excinfo:
        registry.register_binding(make_binding(binding_id="command.gg.again"))

    assert excinfo.value.conflicts == (first,)
    assert registry.find_conflict(make_binding(binding_id="command.gg.other")) == first
