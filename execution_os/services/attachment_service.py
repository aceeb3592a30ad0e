"""
Project file attachments.

The per-file size cap lives here, at the boundary where raw bytes enter the
system; the engine itself stores whatever project it is handed.
"""

import base64
import logging
from typing import Optional

from ..domain.errors import AttachmentTooLarge, ProjectNotFound
from ..models import Project, ProjectFile, new_id, utc_timestamp
from .consistency_engine import ConsistencyEngine

logger = logging.getLogger(__name__)

MAX_ATTACHMENT_BYTES = 500 * 1024
DEFAULT_MIME_TYPE = "application/octet-stream"


def encode_data_url(data: bytes, file_type: str) -> str:
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{file_type or DEFAULT_MIME_TYPE};base64,{encoded}"


def decode_data_url(data_url: str) -> bytes:
    """Return the bytes inside a ``data:`` URL (or a bare base64 string)."""
    _, sep, payload = data_url.partition(",")
    if not sep:
        payload = data_url
    return base64.b64decode(payload)


class AttachmentService:
    def __init__(
        self,
        engine: ConsistencyEngine,
        max_bytes: int = MAX_ATTACHMENT_BYTES,
    ) -> None:
        self._engine = engine
        self._max_bytes = max_bytes

    def _require_project(self, project_id: str) -> Project:
        project = self._engine.find_project(project_id)
        if project is None:
            raise ProjectNotFound(project_id)
        return project

    def attach_file(
        self,
        project_id: str,
        file_name: str,
        file_type: str,
        data: bytes,
    ) -> ProjectFile:
        """Embed a file in a project and save the project.

        Raises:
            AttachmentTooLarge: *data* is over the size cap.
            ProjectNotFound: No project with *project_id*.
            ValidationError / StorageError: From the project save.
        """
        if len(data) > self._max_bytes:
            raise AttachmentTooLarge(file_name, len(data), self._max_bytes)

        project = self._require_project(project_id)
        attachment = ProjectFile(
            file_id=new_id(),
            file_name=file_name,
            file_type=file_type,
            file_size=len(data),
            upload_date=utc_timestamp(self._engine.now()),
            data=encode_data_url(data, file_type),
        )
        self._engine.save_project(
            project.model_copy(update={"files": [*project.files, attachment]})
        )
        logger.info(f"Attached {file_name} ({len(data)} bytes) to project {project_id}")
        return attachment

    def remove_file(self, project_id: str, file_id: str) -> bool:
        """Drop an attachment. Returns False if the project has no such file."""
        project = self._require_project(project_id)
        files = [f for f in project.files if f.file_id != file_id]
        if len(files) == len(project.files):
            return False
        self._engine.save_project(project.model_copy(update={"files": files}))
        return True

    def get_file(self, project_id: str, file_id: str) -> Optional[ProjectFile]:
        project = self._require_project(project_id)
        return next((f for f in project.files if f.file_id == file_id), None)

    @staticmethod
    def decode_file(attachment: ProjectFile) -> bytes:
        return decode_data_url(attachment.data)
