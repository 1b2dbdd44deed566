"""Background workflow runner integration."""

from newtube.services.workflow.client import WorkflowClient, workflow_client

__all__ = ["WorkflowClient", "workflow_client"]
