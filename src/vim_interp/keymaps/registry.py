"""Action table and per-mode binding index for the interpreter's keymaps."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, Optional

from vim_interp.runtime.telemetry import span

from .models import ActionRef, Binding


class KeymapConflictError(RuntimeError):
    """Raised when a new binding claims a key sequence already in use."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        taken = tuple(conflicts)
        super().__init__(
            f"Binding '{binding.id}' conflicts with {[b.id for b in taken]}"
        )
        self.binding = binding
        self.conflicts = taken


class KeymapRegistry:
    """Owns the action table and, per mode, key signature to binding ids.

    Registration is append-only; ``revision`` bumps on every new binding so
    resolvers know when to rebuild their tries.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._by_mode: Dict[str, Dict[str, str]] = {}
        self._logger_name = logger_name
        self._revision = 0

    def __len__(self) -> int:
        return len(self._bindings)

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        try:
            return self._actions[action_id]
        except KeyError as exc:
            raise KeyError(f"Action '{action_id}' is not registered") from exc

    def find_action(self, action_id: str) -> Optional[ActionRef]:
        return self._actions.get(action_id)

    def get_binding(self, binding_id: str) -> Binding:
        try:
            return self._bindings[binding_id]
        except KeyError as exc:
            raise KeyError(f"Binding '{binding_id}' is not registered") from exc

    def register_action(self, action: ActionRef) -> ActionRef:
        with span(
            "keymaps::register_action",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"action_id": action.id},
        ):
            if action.id in self._actions:
                raise ValueError(f"Action '{action.id}' already registered")
            self._actions[action.id] = action
            return action

    def register_binding(self, binding: Binding) -> Binding:
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "mode": binding.mode},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
                )
            if binding.id in self._bindings:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            conflict = self.find_conflict(binding)
            if conflict is not None:
                handle.add_metadata("conflicts", conflict.id)
                raise KeymapConflictError(binding, (conflict,))

            self._bindings[binding.id] = binding
            signatures = self._by_mode.setdefault(binding.mode, {})
            signatures[binding.key_signature] = binding.id
            self._revision += 1
            return binding

    def find_conflict(self, binding: Binding) -> Optional[Binding]:
        taken = self._by_mode.get(binding.mode, {}).get(binding.key_signature)
        return None if taken is None else self._bindings[taken]

    def iter_bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        if mode is None:
            yield from self._bindings.values()
            return
        for binding_id in self._by_mode.get(mode, {}).values():
            yield self._bindings[binding_id]


__all__ = ["KeymapRegistry", "KeymapConflictError"]
