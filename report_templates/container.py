"""
Dependency Container

Wires settings, database and services of the template registry together.
"""

from dataclasses import dataclass, field
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from .config import Settings, get_settings
from .database import build_engine, build_session_factory, create_tables
from .logging_config import get_logger, setup_logging
from .services.concept_catalog import ConceptCatalog, DatabaseConceptCatalog
from .services.study_service import StudyService
from .services.template_service import TemplateService
from .services.template_store import TemplateStore
from .services.term_resolver import TermResolver
from .services.uid_generator import DicomUidGenerator

logger = get_logger(__name__)


@dataclass
class TemplateRegistryContainer:
    """
    Application dependency container.

    Usage:
        container = TemplateRegistryContainer()
        await container.initialize()
        async with container.session_factory() as session:
            service = container.template_service(session)
            template = await service.import_template(text)
        await container.shutdown()
    """

    settings: Settings = field(default_factory=get_settings)

    db_engine: Optional[AsyncEngine] = None
    session_factory: Optional[async_sessionmaker] = None
    uid_generator: DicomUidGenerator = field(default_factory=DicomUidGenerator)

    _initialized: bool = field(default=False, repr=False)

    async def initialize(self, db_engine: Optional[AsyncEngine] = None) -> None:
        """
        Create the engine (unless given), the session factory and the schema.

        Args:
            db_engine: Engine to use instead of one built from settings
        """
        if self._initialized:
            logger.warning("Container already initialized, skipping")
            return

        setup_logging(self.settings)
        self.db_engine = db_engine or build_engine(self.settings.DATABASE_URL, self.settings.DEBUG)
        self.session_factory = build_session_factory(self.db_engine)
        await create_tables(self.db_engine)

        self._initialized = True
        logger.info("Container initialized", template_home=str(self.settings.REPORT_TEMPLATE_HOME))

    def template_service(
        self,
        session: AsyncSession,
        catalog: Optional[ConceptCatalog] = None,
    ) -> TemplateService:
        """Template service bound to ``session``; terms resolve against the database catalog by default"""
        store = TemplateStore(session, self.settings.REPORT_TEMPLATE_HOME)
        resolver = TermResolver(catalog or DatabaseConceptCatalog(session))
        return TemplateService(store, resolver)

    def study_service(self, session: AsyncSession) -> StudyService:
        return StudyService(session, self.uid_generator, self.settings.DICOM_UID_ORG_ROOT)

    async def shutdown(self) -> None:
        if self.db_engine is not None:
            await self.db_engine.dispose()
        self._initialized = False
        logger.info("Container shut down")
