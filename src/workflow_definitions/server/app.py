"""FastAPI app factory.

Endpoints are intentionally thin wrappers over the workflow resolver.
"""

from __future__ import annotations

import logging
import signal
import threading

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from workflow_definitions import __version__
from workflow_definitions.config import ServerSettings
from workflow_definitions.server.router import router
from workflow_definitions.workflow.errors import WorkflowConfigurationError
from workflow_definitions.workflow.loader import load_configuration
from workflow_definitions.workflow.resolver import ResolverHolder

logger = logging.getLogger(__name__)


def create_app(settings: ServerSettings | None = None) -> FastAPI:
    """Build the API.

    The workflow configuration is loaded here, once. A broken configuration
    file raises :class:`WorkflowConfigurationError` and the app does not start.
    """

    settings = settings or ServerSettings()
    config_path = settings.workflow_config_path
    holder = ResolverHolder(lambda: load_configuration(config_path))

    app = FastAPI(
        title="Workflow Definitions",
        version=__version__,
        description="Read-only REST API over the configured workflow definitions.",
        openapi_url="/api/openapi.json",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    # Expose settings and the resolver for request handlers.
    app.state.settings = settings
    app.state.resolver_holder = holder

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.parsed_cors_origins(),
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.include_router(router, prefix="/api")
    _install_reload_signal(holder)

    logger.info(
        "Workflow definitions API ready",
        extra={"config_path": str(config_path), "version": __version__},
    )
    return app


def _install_reload_signal(holder: ResolverHolder) -> None:
    """Reload the workflow configuration on SIGHUP.

    Only possible from the main thread and on platforms that have SIGHUP. A
    reload that fails keeps serving the previous configuration.
    """

    if not hasattr(signal, "SIGHUP") or threading.current_thread() is not threading.main_thread():
        return

    def _on_sighup(_signum: int, _frame: object | None) -> None:
        try:
            holder.reload()
        except WorkflowConfigurationError:
            logger.exception("Workflow configuration reload failed; keeping previous configuration")

    signal.signal(signal.SIGHUP, _on_sighup)
