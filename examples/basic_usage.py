#!/usr/bin/env python3
"""Programmatic lookup example.

This demonstrates using the resolver directly, without the REST server:

* load settings from `.env`
* load the workflow configuration file
* print which collections use a workflow, and its steps

The workflow name is passed as an argument.
"""

from __future__ import annotations

import argparse
from typing import Sequence

from workflow_definitions.config import ServerSettings
from workflow_definitions.logging import configure_logging
from workflow_definitions.workflow import (
    WorkflowConfigResolver,
    WorkflowLookupError,
    load_configuration,
)


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Look up a workflow (programmatic example).")
    parser.add_argument("workflow", help="Workflow name, e.g. selectSingleReviewer")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = ServerSettings()
    configure_logging(settings.log_level)

    resolver = WorkflowConfigResolver(load_configuration(settings.workflow_config_path))

    try:
        collections = resolver.list_collections_for_workflow(args.workflow)
        steps = resolver.list_steps_for_workflow(args.workflow)
    except WorkflowLookupError as exc:
        print(str(exc))
        return 1

    print(f"Collections using {args.workflow}: {[c.handle for c in collections]}")
    print(f"Steps: {[s.id for s in steps]}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
