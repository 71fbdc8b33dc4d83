import logging
from typing import Any, Optional

import httpx

from taskboard.schema import DeleteResponse, Task

logger = logging.getLogger(__name__)


class TaskApiError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class TaskClient:
    """Calls the task procedures over HTTP.

    Any ``httpx.Client`` works, including FastAPI's ``TestClient``; its
    base URL decides which server is hit.
    """

    def __init__(self, http: httpx.Client, prefix: str = "/trpc"):
        self.http = http
        self.prefix = prefix.rstrip("/")

    @classmethod
    def connect(cls, base_url: str, timeout: float = 10.0) -> "TaskClient":
        return cls(httpx.Client(base_url=base_url, timeout=timeout))

    def close(self) -> None:
        self.http.close()

    def get_all_tasks(self) -> list[Task]:
        data = self._call("GET", "getAllTasks")
        return [Task.model_validate(item) for item in data]

    def get_task_by_id(self, task_id: str) -> Task:
        return Task.model_validate(self._call("GET", "getTaskById", params={"id": task_id}))

    def add_task(self, name: str, description: str, status: str) -> Task:
        body = {"name": name, "description": description, "status": status}
        return Task.model_validate(self._call("POST", "addTask", json=body))

    def update_task(
        self,
        task_id: str,
        status: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Task:
        body: dict[str, Any] = {"id": task_id, "status": status}
        if name is not None:
            body["name"] = name
        if description is not None:
            body["description"] = description
        return Task.model_validate(self._call("POST", "updateTask", json=body))

    def delete_task(self, task_id: str) -> DeleteResponse:
        return DeleteResponse.model_validate(self._call("POST", "deleteTask", json={"id": task_id}))

    def _call(self, method: str, procedure: str, **kwargs: Any) -> Any:
        url = f"{self.prefix}/{procedure}"
        try:
            response = self.http.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise TaskApiError(str(e)) from e

        if response.is_error:
            raise TaskApiError(_error_message(response), response.status_code)
        return response.json()


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    detail = body.get("detail") if isinstance(body, dict) else None
    if isinstance(detail, str) and detail:
        return detail
    return f"HTTP {response.status_code}"
