import argparse
import logging
import sys

from dotenv import load_dotenv

from planner.cli.export_commands import (
    handle_export_plan,
    handle_show_plan,
    register_export_commands,
)
from planner.config_utils import load_config

HANDLERS = {
    "export-plan": handle_export_plan,
    "show-plan": handle_show_plan,
}


def main(argv=None):
    load_dotenv()
    config = load_config()

    level = str(config.get("logging", {}).get("level", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    parser = argparse.ArgumentParser(description="Weekly Planner export CLI.")
    subparsers = parser.add_subparsers(dest="command", required=True)
    register_export_commands(subparsers)

    args = parser.parse_args(argv)
    return HANDLERS[args.command](config, args)


if __name__ == "__main__":
    sys.exit(main())
