"""Shared plumbing for use cases that work on the inventory workspace."""

from src.application.services import InventoryWorkspace, get_workspace


class WorkspaceUseCase:
    """Resolves the workspace lazily unless one is injected."""

    def __init__(self, workspace: InventoryWorkspace | None = None):
        self._workspace = workspace

    async def _get_workspace(self) -> InventoryWorkspace:
        if self._workspace is None:
            self._workspace = await get_workspace()
        return self._workspace
