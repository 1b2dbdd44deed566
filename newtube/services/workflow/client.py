"""Client that enqueues jobs on the background workflow runner.

Jobs are only triggered from here; the runner executes them out of band and
calls back into the workflow URLs.
"""

import uuid
from typing import Any

from newtube.config import get_settings
from newtube.errors import UpstreamServiceError
from newtube.utils.http_client import get_general_client
from newtube.utils.logging import get_logger
from newtube.utils.retry import retry_async

logger = get_logger(__name__)


class WorkflowClient:
    """Client for the workflow trigger API."""

    def __init__(self) -> None:
        self.settings = get_settings()

    def workflow_url(self, name: str) -> str:
        """Public URL the runner calls to execute workflow ``name``."""
        base = self.settings.workflow_callback_url or self.settings.app_url
        return f"{base.rstrip('/')}/api/videos/workflows/{name}"

    async def trigger(self, url: str, body: dict[str, Any], retries: int | None = None) -> str:
        """Enqueue a workflow run.

        Args:
            url: Workflow endpoint the runner will call
            body: JSON payload handed to the workflow
            retries: How many times the runner retries a failed run

        Returns:
            The workflow run id
        """
        if not self.settings.workflow_token:
            raise UpstreamServiceError("workflow", "WORKFLOW_TOKEN not configured")

        run_id = f"wfr_{uuid.uuid4().hex}"
        headers = {
            "Authorization": f"Bearer {self.settings.workflow_token}",
            "Upstash-Workflow-RunId": run_id,
            "Upstash-Workflow-Init": "true",
        }
        if retries is not None:
            headers["Upstash-Retries"] = str(retries)

        client = get_general_client()
        response = await retry_async(
            client.post,
            f"{self.settings.workflow_api_url.rstrip('/')}/v2/trigger/{url}",
            json=body,
            headers=headers,
            operation_name="workflow.trigger",
        )
        if response.status_code >= 400:
            logger.error(f"Workflow trigger failed: {response.status_code} {response.text}")
            raise UpstreamServiceError("workflow", f"trigger failed ({response.status_code})")

        return response.json().get("workflowRunId", run_id)


workflow_client = WorkflowClient()
