"""Dashboard controller: service summary and configuration export."""

from __future__ import annotations

import logging
from pathlib import Path
from urllib.parse import quote

from emuconsole.constants.defaults import EXPORT_PATH_DEFAULT
from emuconsole.controllers.base import BaseController
from emuconsole.models.entities import DashboardSnapshot

logger = logging.getLogger(__name__)


class DashboardController(BaseController):
    """Summary of every emulated service."""

    SUMMARY_PATH = "/api/dashboard/summary"

    async def fetch_all(self) -> DashboardSnapshot:
        payload = await self._client.get_json(self.SUMMARY_PATH)
        return DashboardSnapshot.model_validate(payload)

    async def export_config(self, service: str, export_path: str | Path = EXPORT_PATH_DEFAULT) -> Path:
        """Download a service's configuration export and write it to disk.

        The file name comes from the server's ``Content-Disposition`` header,
        falling back to ``<service>.config.yaml``.

        Returns:
            Path of the written file
        """
        content, filename = await self._client.download(
            f"/api/services/{quote(service, safe='')}/config/export"
        )
        # Never trust a server-supplied directory component
        name = Path(filename).name if filename else ""
        target_dir = Path(export_path).expanduser()
        target_dir.mkdir(parents=True, exist_ok=True)
        target = target_dir / (name or f"{service}.config.yaml")
        target.write_bytes(content)
        logger.info("Exported %s configuration to %s", service, target)
        return target


__all__ = ["DashboardController"]
