"""Tests for eager state-table validation."""
import pytest

from fsm_engine.machines.light_switch import LIGHT_SWITCH_STATES, OffAction
from fsm_engine.state_machine import (
    DEFAULT_STATE,
    NO_OP,
    ConfigurationError,
    StateDefinition,
    StateMachine,
    validate_state_table,
)


class TestValidateStateTable:
    """Configuration defects fail at construction time."""

    def test_valid_table_passes(self):
        validate_state_table(LIGHT_SWITCH_STATES, DEFAULT_STATE)

    def test_missing_start_state(self):
        with pytest.raises(ConfigurationError, match="start state 'Default' is not defined"):
            StateMachine({"Off": StateDefinition()})

    def test_undefined_destination(self):
        table = {DEFAULT_STATE: StateDefinition(events={"go": "Nowhere"})}
        with pytest.raises(ConfigurationError, match="undefined state 'Nowhere'"):
            StateMachine(table)

    def test_default_state_with_action(self):
        table = {DEFAULT_STATE: StateDefinition(action=OffAction())}
        with pytest.raises(ConfigurationError, match="must not carry an action"):
            StateMachine(table)

    def test_reserved_noop_event(self):
        table = {DEFAULT_STATE: StateDefinition(events={NO_OP: DEFAULT_STATE})}
        with pytest.raises(ConfigurationError, match="reserved event 'NoOp'"):
            StateMachine(table)

    def test_action_without_execute(self):
        table = {
            DEFAULT_STATE: StateDefinition(events={"go": "A"}),
            "A": StateDefinition(action=object()),
        }
        with pytest.raises(ConfigurationError, match="no execute"):
            StateMachine(table)

    def test_non_definition_entry(self):
        with pytest.raises(ConfigurationError, match="not a StateDefinition"):
            StateMachine({DEFAULT_STATE: {"events": {}}})

    def test_all_problems_reported_together(self):
        table = {
            DEFAULT_STATE: StateDefinition(events={"a": "X", "b": "Y"}),
        }
        with pytest.raises(ConfigurationError) as excinfo:
            validate_state_table(table, "Start")

        message = str(excinfo.value)
        assert "'Start'" in message
        assert "'X'" in message
        assert "'Y'" in message

    def test_validation_can_be_skipped(self):
        machine = StateMachine({DEFAULT_STATE: StateDefinition(events={"go": "Nowhere"})}, validate=False)
        assert machine.current_state == DEFAULT_STATE
