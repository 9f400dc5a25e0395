"""Pytest configuration and fixtures for registry tests"""

from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from report_templates.models import Base, ReportTemplate
from report_templates.services.concept_catalog import StaticConceptCatalog
from report_templates.services.template_service import TemplateService
from report_templates.services.template_store import TemplateStore
from report_templates.services.term_resolver import TermResolver

RESOURCES = Path(__file__).parent / "resources" / "mrrt"


# ==================== Database Fixtures ====================


@pytest_asyncio.fixture(scope="function")
async def db_engine():
    """Create an in-memory SQLite engine with all tables"""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    """Create a database session for testing"""
    async_session_maker = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        yield session


# ==================== Service Fixtures ====================


@pytest.fixture
def template_home(tmp_path):
    """Template home directory (not created up front)"""
    return tmp_path / "mrrt_templates"


@pytest.fixture
def concept_catalog():
    """Catalog knowing two of the three RadLex codes in CTChestAbdomen.html"""
    return StaticConceptCatalog({
        "RADLEX:RID1301": "concept-lung",
        "RADLEX:RID58": "concept-liver",
    })


@pytest.fixture
def template_store(db_session, template_home):
    return TemplateStore(db_session, template_home)


@pytest.fixture
def template_service(template_store, concept_catalog):
    return TemplateService(template_store, TermResolver(concept_catalog))


# ==================== Sample Data Fixtures ====================


@pytest.fixture
def read_resource():
    """Read a sample document byte-for-byte as text"""
    def _read(name: str) -> str:
        return (RESOURCES / name).read_bytes().decode("utf-8")
    return _read


@pytest.fixture
def ct_chest_abdomen(read_resource):
    return read_resource("CTChestAbdomen.html")


@pytest.fixture
def template_without_charset(read_resource):
    return read_resource("invalidMrrtReportTemplate-noMetaElementWithCharsetAttribute.html")


@pytest.fixture
def make_document():
    """Build a minimal MRRT document from dcterms metadata and body markup"""
    def _make(body: str = "<p>Findings</p>", charset: bool = True, **dcterms) -> str:
        head = ['<meta charset="UTF-8"/>'] if charset else []
        head += [
            f'<meta name="dcterms.{key}" content="{value}"/>'
            for key, value in dcterms.items()
        ]
        return f"<html><head>{''.join(head)}</head><body>{body}</body></html>"
    return _make


@pytest.fixture
def sample_template_data():
    """Metadata of the templates stored by ``stored_templates``"""
    return [
        {
            "uuid": "aa551445-def0-4f93-9047-95f0a9afbdce",
            "dcterms_title": "CT Cardiac Bypass Graft",
            "dcterms_description": "CT of cardiac bypass grafts",
            "dcterms_identifier": "identifier1",
            "dcterms_publisher": "IHE CAT Publisher",
            "dcterms_license": "General Public License",
            "dcterms_creator": "creator1",
        },
        {
            "uuid": "59273e52-33b1-4fcb-8c1f-9b670bb11259",
            "dcterms_title": "CT Chest Pulmonary Embolism",
            "dcterms_description": "CT angiography for pulmonary embolism",
            "dcterms_identifier": "identifier2",
            "dcterms_publisher": "Radiology Society Catalog",
            "dcterms_license": "Mozilla Public License",
            "dcterms_creator": "creator2",
        },
        {
            "uuid": "0d6b1c3e-6f1e-4a57-9a57-0b7c6c0f8e11",
            "dcterms_title": "MR Brain",
            "dcterms_description": "MR of the brain without contrast",
            "dcterms_identifier": "identifier3",
            "dcterms_publisher": "Neuro Group",
            "dcterms_license": "Creative Commons",
            "dcterms_creator": "radiologist",
        },
    ]


@pytest_asyncio.fixture
async def stored_templates(db_session, sample_template_data):
    """Templates stored directly in the database, without backing files"""
    templates = [ReportTemplate(**data) for data in sample_template_data]
    db_session.add_all(templates)
    await db_session.commit()
    for template in templates:
        await db_session.refresh(template)
    return templates
