"""Workflow Definitions.

A read-only REST API and CLI over a workflow configuration:
- which workflows are configured, and which one is the default
- which collections use each workflow
- which steps each workflow runs, in order
"""

__version__ = "0.1.0"

from workflow_definitions.config import ServerSettings

__all__ = ["__version__", "ServerSettings"]
