"""
Template Store - persistence of report templates

Coordinates two stores that share no transaction: the report_templates table
and the template files under the configured template home. Writes go file
first, record second; a failed record write removes the file again.
"""

from pathlib import Path
from typing import List, Optional
from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import DuplicateTemplateError, StorageError, require
from ..logging_config import get_logger
from ..models.template import ReportTemplate
from ..parsing.parser import extract_body_from_text

logger = get_logger(__name__)

TEMPLATE_FILE_SUFFIX = ".html"


class TemplateStore:
    """Store for report template records and their backing files"""

    def __init__(self, db: AsyncSession, template_home: Path):
        """Initialize TemplateStore

        Args:
            db: Database session
            template_home: Directory new template files are written to
        """
        self.db = db
        self.template_home = Path(template_home)

    # ==================== Lookups ====================

    async def get_by_id(self, template_id: int) -> Optional[ReportTemplate]:
        require(template_id, "id")
        return await self.db.get(ReportTemplate, template_id)

    async def get_by_uuid(self, uuid: str) -> Optional[ReportTemplate]:
        require(uuid, "uuid")
        result = await self.db.execute(
            select(ReportTemplate).where(ReportTemplate.uuid == uuid)
        )
        return result.scalar_one_or_none()

    async def get_by_identifier(self, identifier: str) -> Optional[ReportTemplate]:
        require(identifier, "identifier")
        result = await self.db.execute(
            select(ReportTemplate).where(ReportTemplate.dcterms_identifier == identifier)
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> List[ReportTemplate]:
        """All templates in ascending template_id order"""
        result = await self.db.execute(
            select(ReportTemplate).order_by(ReportTemplate.template_id)
        )
        return list(result.scalars().all())

    # ==================== Create ====================

    async def create(self, template: ReportTemplate, content: Optional[str] = None) -> ReportTemplate:
        """Persist a new template, writing ``content`` as its backing file

        Args:
            template: Unsaved template record
            content: Raw template document; when None no file is written and
                any path already set on the template is kept

        Returns:
            ReportTemplate: the saved template with template_id and path set

        Raises:
            DuplicateTemplateError: if the identifier is already stored
            StorageError: if the file or the record cannot be written
        """
        require(template, "template")

        identifier = (template.dcterms_identifier or "").strip() or None
        template.dcterms_identifier = identifier
        if identifier is not None and await self.get_by_identifier(identifier) is not None:
            logger.info("Rejected duplicate template", identifier=identifier)
            raise DuplicateTemplateError(identifier=identifier)

        if not template.uuid:
            template.uuid = str(uuid4())

        written_path = None
        if content is not None:
            written_path = self._write_file(content)
            template.path = str(written_path)

        try:
            self.db.add(template)
            await self.db.commit()
            await self.db.refresh(template)
        except IntegrityError as e:
            await self._rollback_create(template, written_path)
            if identifier is not None:
                # Another caller stored the same identifier between check and insert
                raise DuplicateTemplateError(identifier=identifier) from e
            raise StorageError(
                "Failed to save template",
                details={"uuid": template.uuid, "error": str(e.orig)},
            ) from e
        except SQLAlchemyError as e:
            await self._rollback_create(template, written_path)
            raise StorageError(
                "Failed to save template",
                details={"uuid": template.uuid, "error": str(e)},
            ) from e
        except Exception:
            await self._rollback_create(template, written_path)
            raise

        logger.info(
            "Template created",
            template_id=template.template_id,
            uuid=template.uuid,
            identifier=identifier,
            path=template.path,
        )
        return template

    def _write_file(self, content: str) -> Path:
        try:
            self.template_home.mkdir(parents=True, exist_ok=True)
            home = self.template_home.resolve()
        except OSError as e:
            raise StorageError(
                "Failed to write template file",
                details={"template_home": str(self.template_home), "error": str(e)},
            ) from e

        path = home / f"{uuid4().hex}{TEMPLATE_FILE_SUFFIX}"
        if path.parent != home:
            raise StorageError("Template path escapes template home", details={"path": str(path)})

        try:
            # newline="" keeps the document byte-for-byte
            with open(path, "x", encoding="utf-8", newline="") as f:
                f.write(content)
        except (OSError, UnicodeError) as e:
            self._remove_partial_file(path)
            raise StorageError(
                "Failed to write template file",
                details={"template_home": str(self.template_home), "path": str(path), "error": str(e)},
            ) from e
        return path

    def _remove_partial_file(self, path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.error("Failed to remove partially written template file", path=str(path), error=str(e))
            return
        logger.warning("Removed partially written template file", path=str(path))

    async def _rollback_create(self, template: ReportTemplate, written_path: Optional[Path]) -> None:
        await self.db.rollback()
        if written_path is None:
            return
        template.path = None
        try:
            written_path.unlink(missing_ok=True)
            logger.warning("Removed template file after failed save", path=str(written_path))
        except OSError as e:
            logger.error("Failed to remove template file after failed save", path=str(written_path), error=str(e))

    # ==================== Delete ====================

    async def purge(self, template: ReportTemplate) -> None:
        """Delete the template record, then its backing file

        A backing file that is already gone counts as deleted.

        Raises:
            StorageError: if the record cannot be deleted or the file cannot
                be removed for any reason other than being absent
        """
        require(template, "template")
        path = template.path

        try:
            await self.db.delete(template)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StorageError(
                "Failed to delete template",
                details={"uuid": template.uuid, "error": str(e)},
            ) from e

        logger.info("Template record deleted", uuid=template.uuid)

        if not path:
            return
        try:
            Path(path).unlink()
        except FileNotFoundError:
            logger.warning("Template file already absent", uuid=template.uuid, path=path)
        except OSError as e:
            raise StorageError(
                "Failed to delete template file",
                details={"uuid": template.uuid, "path": path, "error": str(e)},
            ) from e

    # ==================== Content ====================

    async def read_body(self, template: ReportTemplate) -> str:
        """Body region of the stored template document

        Raises:
            StorageError: if the template has no file or it cannot be read
        """
        require(template, "template")
        if not template.path:
            raise StorageError("Template has no stored content", details={"uuid": template.uuid})

        try:
            with open(template.path, encoding="utf-8", newline="") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(
                "Failed to read template file",
                details={"uuid": template.uuid, "path": template.path, "error": str(e)},
            ) from e

        return extract_body_from_text(content)
