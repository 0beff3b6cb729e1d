"""FastAPI server adapter for workflow-definitions.

Design intent:
- Keep lookup logic in `workflow_definitions.workflow.*`
- Keep server-specific concerns (routing, paging, CORS) here
"""

from __future__ import annotations

__all__ = ["create_app"]

from workflow_definitions.server.app import create_app
