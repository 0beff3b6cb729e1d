"""CLI entrypoint for workflow-definitions.

Commands:
- serve:    run the REST API with uvicorn
- validate: load the workflow configuration and report what it contains
- show:     print the steps and collections of one workflow
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from workflow_definitions import __version__
from workflow_definitions.config import ServerSettings
from workflow_definitions.logging import configure_logging
from workflow_definitions.workflow.errors import (
    WorkflowConfigurationError,
    WorkflowLookupError,
)
from workflow_definitions.workflow.loader import load_configuration
from workflow_definitions.workflow.resolver import WorkflowConfigResolver

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="workflow-definitions",
        description="Read-only API and tools for workflow definitions",
    )
    parser.add_argument(
        "--version", action="version", version=f"workflow-definitions {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Start the REST API server")
    serve.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve.add_argument("--port", type=int, default=8000, help="Bind port")
    serve.add_argument("--reload", action="store_true", help="Auto-reload on code changes")

    validate = subparsers.add_parser(
        "validate", help="Load the workflow configuration and print a summary"
    )
    validate.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Workflow configuration file (defaults to WORKFLOW_CONFIG_PATH)",
    )

    show = subparsers.add_parser("show", help="Show the steps and collections of a workflow")
    show.add_argument("workflow", help="Workflow name")
    show.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Workflow configuration file (defaults to WORKFLOW_CONFIG_PATH)",
    )

    return parser


def _load_resolver(settings: ServerSettings, override: Path | None) -> WorkflowConfigResolver:
    return WorkflowConfigResolver(load_configuration(override or settings.workflow_config_path))


def _print_summary(resolver: WorkflowConfigResolver) -> None:
    config = resolver.config
    print(f"Default workflow: {config.default_workflow}")
    for definition in resolver.list_workflows():
        marker = " (default)" if resolver.is_default(definition.id) else ""
        collections = resolver.list_collections_for_workflow(definition.id)
        print(
            f"  {definition.id}{marker}: {len(definition.steps)} steps, "
            f"{len(collections)} collections"
        )
    for name, reason in sorted(config.unresolvable.items()):
        print(f"  {name}: UNRESOLVABLE ({reason})")


def _print_workflow(resolver: WorkflowConfigResolver, name: str) -> None:
    steps = resolver.list_steps_for_workflow(name)
    collections = resolver.list_collections_for_workflow(name)
    print(f"Workflow {name}{' (default)' if resolver.is_default(name) else ''}")
    print("Steps:")
    for idx, step in enumerate(steps, start=1):
        role = f" [{step.role}]" if step.role else ""
        actions = ", ".join(step.actions) or "-"
        print(f"  {idx}. {step.id}{role}: {actions}")
    print("Collections:")
    for col in collections:
        print(f"  {col.handle} {col.name}".rstrip())
    if not collections:
        print("  (none)")


def _serve(settings: ServerSettings, args: argparse.Namespace) -> int:
    import uvicorn

    logger.info("Starting server", extra={"host": args.host, "port": args.port})
    uvicorn.run(
        "workflow_definitions.server:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
        # Keep the JSON logging configured above.
        log_config=None,
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = ServerSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level)

    try:
        if args.command == "serve":
            return _serve(settings, args)

        if args.command == "validate":
            _print_summary(_load_resolver(settings, args.config))
            return 0

        if args.command == "show":
            _print_workflow(_load_resolver(settings, args.config), args.workflow)
            return 0

        logger.error("Unknown command", extra={"command": args.command})
        return 2

    except WorkflowConfigurationError as e:
        logger.error("Workflow configuration is invalid", extra={"error": str(e)})
        print(str(e), file=sys.stderr)
        return 2

    except WorkflowLookupError as e:
        logger.warning(str(e))
        print(str(e), file=sys.stderr)
        return 3

    except Exception:
        logger.exception("Command failed")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
