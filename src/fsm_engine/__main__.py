"""Command-line runner: drive a bundled or file-defined machine with events."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

import yaml

from fsm_engine.config import Config, load_config
from fsm_engine.infra import configure_logging, install_exception_hook
from fsm_engine.machines import available_machines, create_machine, run_traffic_light
from fsm_engine.state_machine import EventRejected, StateMachine, StateMachineError, load_state_table

logger = logging.getLogger("app.main")

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_ERROR = 2

TRAFFIC_LIGHT = "traffic-light"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="fsm-engine", description="Send events to a table-driven state machine.")
    parser.add_argument("--config", type=Path, default=None, help="Path to a YAML/JSON runner configuration.")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--machine", type=str, default=None, help="Name of a bundled machine.")
    source.add_argument("--table", type=Path, default=None, help="Path to a YAML/JSON state table.")
    parser.add_argument("--cycles", type=int, default=None, help="Traffic light: number of full cycles to run.")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Override the configured log level.",
    )
    parser.add_argument("--list", action="store_true", help="List bundled machines and exit.")
    parser.add_argument("events", nargs="*", help="Events to send, in order.")
    return parser.parse_args(argv)


def build_machine(config: Config, machine_name: Optional[str], table_path: Optional[Path]) -> tuple[StateMachine, str]:
    """Resolve which machine to run. Command-line choices win over the config file."""
    if table_path is None and machine_name is None:
        table_path = config.runner.table_path
    if table_path is not None:
        return load_state_table(table_path).build_machine(), f"table:{table_path}"
    name = machine_name or config.runner.machine
    return create_machine(name), name


def send_events(machine: StateMachine, events: Sequence[str], stop_on_reject: bool) -> int:
    exit_code = EXIT_OK
    for event in events:
        try:
            machine.send_event(event)
        except EventRejected as exc:
            print(f"{event}: rejected in {exc.state}")
            exit_code = EXIT_REJECTED
            if stop_on_reject:
                break
            continue
        previous, current = machine.snapshot()
        print(f"{event}: {previous} -> {current}")
    return exit_code


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    if args.list:
        for name in available_machines():
            print(name)
        return EXIT_OK

    try:
        config = load_config(args.config) if args.config else Config()
    except (OSError, TypeError, ValueError, yaml.YAMLError) as exc:
        print(f"Cannot read configuration: {exc}", file=sys.stderr)
        return EXIT_ERROR

    if args.log_level:
        config = replace(config, logging=replace(config.logging, level=args.log_level))
    configure_logging(config.logging)
    install_exception_hook()
    if args.config:
        logger.info("Configuration loaded from %s", args.config)

    try:
        machine, label = build_machine(config, args.machine, args.table)
    except (KeyError, OSError, StateMachineError) as exc:
        print(f"Cannot build machine: {exc}", file=sys.stderr)
        return EXIT_ERROR
    logger.info("Running %s from state %s", label, machine.current_state)

    events = list(args.events) or list(config.runner.events)
    try:
        if not events and label == TRAFFIC_LIGHT:
            cycles = args.cycles if args.cycles is not None else config.runner.cycles
            phases = run_traffic_light(machine, cycles=cycles, dwell_s=config.runner.dwell_ms / 1000.0)
            print(" -> ".join(phases))
            return EXIT_OK
        return send_events(machine, events, config.runner.stop_on_reject)
    except StateMachineError as exc:
        logger.error("Machine %s failed: %s", label, exc)
        return EXIT_ERROR
    except Exception:
        logger.exception("Action failed while running %s in state %s", label, machine.current_state)
        return EXIT_ERROR
    finally:
        logger.info("Final state: %s", machine.current_state)


if __name__ == "__main__":
    sys.exit(main())
