"""Load state tables declared in YAML or JSON files."""

from __future__ import annotations

import inspect
import json
import logging
from dataclasses import dataclass
from importlib import import_module
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .errors import ConfigurationError
from .machine import StateMachine
from .model import DEFAULT_STATE, Action, FunctionAction, StateDefinition, StateTable, StateType, freeze_table

logger = logging.getLogger("fsm.table_loader")


@dataclass(frozen=True)
class StateTableSpec:
    """A loaded table together with the state it starts from."""

    states: StateTable
    start_state: StateType = DEFAULT_STATE

    def build_machine(self) -> StateMachine:
        return StateMachine(self.states, start_state=self.start_state)


def load_state_table(path: Path | str, actions: Optional[Mapping[str, Any]] = None) -> StateTableSpec:
    """Read a table file and resolve the action of every state.

    ``action`` entries are looked up in ``actions`` first, then imported as
    ``module:attribute``.
    """
    path = path if isinstance(path, Path) else Path(path)
    raw = _load_raw_table(path)
    return parse_state_table(raw, actions=actions, source=str(path))


def parse_state_table(
    raw: Mapping[str, Any],
    actions: Optional[Mapping[str, Any]] = None,
    source: str = "<table>",
) -> StateTableSpec:
    if not isinstance(raw, Mapping):
        raise ConfigurationError(f"{source}: table must be a mapping")

    raw_states = raw.get("states")
    if not isinstance(raw_states, Mapping) or not raw_states:
        raise ConfigurationError(f"{source}: 'states' must be a non-empty mapping")

    states: Dict[StateType, StateDefinition] = {}
    for name, body in raw_states.items():
        states[str(name)] = _parse_state(str(name), body or {}, actions or {}, source)

    start_state = str(raw.get("start_state", DEFAULT_STATE))
    logger.info("Loaded %d states from %s (start=%s)", len(states), source, start_state)
    return StateTableSpec(states=freeze_table(states), start_state=start_state)


def resolve_action(reference: Any, actions: Mapping[str, Any]) -> Action:
    """Turn a table ``action`` entry into an Action instance."""
    if isinstance(reference, str) and reference in actions:
        target = actions[reference]
    elif isinstance(reference, str):
        target = _import_reference(reference)
    else:
        target = reference

    if inspect.isclass(target):
        try:
            target = target()
        except TypeError as exc:
            raise ConfigurationError(f"cannot instantiate action '{reference}': {exc}") from exc
    if isinstance(target, Action):
        return target
    if callable(target):
        return FunctionAction(target)
    raise ConfigurationError(f"action '{reference}' is neither an Action nor a callable")


def _parse_state(name: str, body: Any, actions: Mapping[str, Any], source: str) -> StateDefinition:
    if not isinstance(body, Mapping):
        raise ConfigurationError(f"{source}: state '{name}' must be a mapping")

    events_raw = body.get("events") or {}
    if not isinstance(events_raw, Mapping):
        raise ConfigurationError(f"{source}: events of state '{name}' must be a mapping")
    events = {str(event): str(target) for event, target in events_raw.items()}

    action_ref = body.get("action")
    action = resolve_action(action_ref, actions) if action_ref is not None else None
    return StateDefinition(action=action, events=events, description=str(body.get("description", "")))


def _import_reference(reference: str) -> Any:
    module_name, sep, attribute = reference.partition(":")
    if not sep or not module_name or not attribute:
        raise ConfigurationError(f"action reference '{reference}' must look like 'package.module:name'")
    try:
        module = import_module(module_name)
    except ImportError as exc:
        raise ConfigurationError(f"cannot import module '{module_name}' for action '{reference}'") from exc

    target: Any = module
    for part in attribute.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise ConfigurationError(f"'{module_name}' has no attribute '{attribute}'") from exc
    return target


def _load_raw_table(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"State table not found at {path}")

    suffix = path.suffix.lower()
    with path.open("r", encoding="utf-8") as stream:
        try:
            if suffix in {".yaml", ".yml"}:
                return yaml.safe_load(stream) or {}
            if suffix == ".json":
                return json.load(stream)
        except (yaml.YAMLError, json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ConfigurationError(f"{path}: cannot parse state table ({exc})") from exc
    raise ConfigurationError(f"Unsupported state table format: {suffix}")
