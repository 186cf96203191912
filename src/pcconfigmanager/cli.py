"""
Command-line front end.

Every command opens the store from the configured storage file, runs one
action through the facade and prints the outcome.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import yaml

from pcconfigmanager.application.common.facade_common import format_amount
from pcconfigmanager.application.configs.config_facade import (
    build_config_row,
    create_config_from_ui,
    delete_config_from_ui,
    duplicate_config_from_ui,
    export_config_from_ui,
    get_config_list_snapshot,
    open_config_store,
    rename_config_from_ui,
    save_component_from_ui,
    set_sale_target_from_ui,
)
from pcconfigmanager.application.configs.config_store import ConfigStore
from pcconfigmanager.domain.models.component import COMPONENT_SLOTS
from pcconfigmanager.infrastructure.config.config_manager import get_config_manager
from pcconfigmanager.infrastructure.config.settings import (
    VALID_LOG_LEVELS,
    AppSettings,
    SettingsError,
    get_app_settings,
)
from pcconfigmanager.shared.constants import DEFAULT_LOG_LEVEL
from pcconfigmanager.shared.logger import configure_logging

logger = logging.getLogger(__name__)


def _print_list(store: ConfigStore, search_term: str) -> int:
    snapshot = get_config_list_snapshot(store, search_term)
    if not snapshot.rows:
        print("No configurations found")
        return 0

    for row in snapshot.rows:
        status = "complete" if row.complete else "incomplete"
        print(
            f"{row.config.id}  {row.config.name}  total={row.total_price_text}  "
            f"target={format_amount(row.config.sale_target)}  "
            f"margin={row.margin_text}  [{status}]"
        )
    return 0


def _print_show(store: ConfigStore, config_id: str) -> int:
    config = store.get(config_id)
    if config is None:
        print(f"Configuration not found: {config_id}", file=sys.stderr)
        return 1

    row = build_config_row(config)
    print(f"{config.name} ({config.id})")
    for slot, component in config.components():
        line = f"  {slot.label:<14} {component.name or '-':<30} {format_amount(component.price)}"
        if component.notes:
            line += f"  # {component.notes}"
        print(line)
    print(f"  {'Total':<14} {'':<30} {row.total_price_text}")
    print(f"  {'Sale target':<14} {'':<30} {format_amount(config.sale_target)}")
    print(f"  {'Margin':<14} {'':<30} {row.margin_text}")
    if row.complete:
        print("  Status: complete")
    else:
        missing = ", ".join(slot.label for slot in row.missing_slots)
        print(f"  Status: incomplete (missing: {missing or 'sale target'})")
    return 0


def _print_stats(store: ConfigStore) -> int:
    stats = get_config_list_snapshot(store).stats_text
    print(f"Configurations: {stats['count']}")
    print(f"Complete: {stats['complete_count']}")
    print(f"Average price: {stats['average_total']}")
    print(f"Most expensive: {stats['max_total']}")
    print(f"Most affordable: {stats['min_total']}")
    return 0


def _report(ok: bool, message: str) -> int:
    print(message, file=sys.stdout if ok else sys.stderr)
    return 0 if ok else 1


def _run_config_command(args: argparse.Namespace) -> int:
    manager = get_config_manager()
    try:
        if args.config_command == "show":
            data = manager.load()
            print(json.dumps(data, ensure_ascii=False, indent=2, default=str))
            return 0

        manager.set_value(args.section, args.key, args.value)
    except yaml.YAMLError as e:
        logger.error(f"Config file is not valid YAML: {str(e)}")
        return 1
    except OSError as e:
        logger.error(f"Config file could not be accessed: {str(e)}")
        return 1
    get_app_settings.cache_clear()
    print(f"{args.section}.{args.key} = {args.value}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pc-config-manager", description="PC build configuration manager"
    )
    parser.add_argument(
        "--log-level",
        choices=VALID_LOG_LEVELS,
        help="Log level (defaults to logging.level in config.yaml)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("list", help="List configurations")
    p.add_argument("--search", default="", help="Filter by configuration or component name")

    p = sub.add_parser("show", help="Show one configuration")
    p.add_argument("id")

    sub.add_parser("stats", help="Statistics over all configurations")

    p = sub.add_parser("new", help="Create an empty configuration")
    p.add_argument("name")
    p.add_argument("--sale-target", default=None)

    p = sub.add_parser("set-component", help="Edit one component slot")
    p.add_argument("id")
    p.add_argument("slot", help=", ".join(slot.key for slot in COMPONENT_SLOTS))
    p.add_argument("--name", default=None)
    p.add_argument("--price", default=None)
    p.add_argument("--notes", default=None)

    p = sub.add_parser("set-sale-target", help="Set the target sale price")
    p.add_argument("id")
    p.add_argument("amount")

    p = sub.add_parser("rename", help="Rename a configuration")
    p.add_argument("id")
    p.add_argument("name")

    p = sub.add_parser("duplicate", help="Duplicate a configuration")
    p.add_argument("id")

    p = sub.add_parser("delete", help="Delete a configuration")
    p.add_argument("id")

    p = sub.add_parser("export", help="Export a configuration as JSON")
    p.add_argument("id")
    p.add_argument("--output-dir", type=Path, default=None)

    p = sub.add_parser("config", help="Show or change settings")
    config_sub = p.add_subparsers(dest="config_command", required=True)
    config_sub.add_parser("show", help="Print config.yaml")
    p_set = config_sub.add_parser("set", help="Set one value in config.yaml")
    p_set.add_argument("section")
    p_set.add_argument("key")
    p_set.add_argument("value")

    return parser


def _run_store_command(args: argparse.Namespace, settings: AppSettings) -> int:
    store = open_config_store(settings)

    if args.command == "list":
        return _print_list(store, args.search)
    if args.command == "show":
        return _print_show(store, args.id)
    if args.command == "stats":
        return _print_stats(store)
    if args.command == "new":
        result, config = create_config_from_ui(
            store, name=args.name, sale_target=args.sale_target
        )
        if result.ok and config is not None:
            print(config.id)
        return _report(result.ok, result.message)
    if args.command == "set-component":
        result = save_component_from_ui(
            store,
            args.id,
            slot=args.slot,
            name=args.name,
            price=args.price,
            notes=args.notes,
        )
        return _report(result.ok, result.message)
    if args.command == "set-sale-target":
        result = set_sale_target_from_ui(store, args.id, sale_target=args.amount)
        return _report(result.ok, result.message)
    if args.command == "rename":
        result = rename_config_from_ui(store, args.id, name=args.name)
        return _report(result.ok, result.message)
    if args.command == "duplicate":
        result, copy = duplicate_config_from_ui(store, args.id)
        if copy is not None:
            print(copy.id)
        return _report(result.ok, result.message)
    if args.command == "delete":
        result = delete_config_from_ui(store, args.id)
        return _report(result.ok, result.message)
    if args.command == "export":
        result, _ = export_config_from_ui(
            store, args.id, output_dir=args.output_dir or settings.export_dir
        )
        return _report(result.ok, result.message)

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # config commands must work even when the current settings are invalid
    if args.command == "config":
        configure_logging(args.log_level or DEFAULT_LOG_LEVEL)
        return _run_config_command(args)

    try:
        settings = get_app_settings()
    except SettingsError as e:
        configure_logging(args.log_level or DEFAULT_LOG_LEVEL)
        logger.error(f"Invalid settings: {str(e)}")
        return 1

    configure_logging(args.log_level or settings.log_level)
    return _run_store_command(args, settings)


if __name__ == "__main__":
    raise SystemExit(main())
