"""Template Service - business logic for report template management"""

from typing import List, Optional

from ..exceptions import DuplicateTemplateError, require
from ..logging_config import get_logger
from ..models.template import ReportTemplate, TemplateTerm
from ..parsing.parser import TemplateFileParser
from ..schemas.search import TemplateSearchCriteria
from .template_query import TemplateQueryEngine
from .template_store import TemplateStore
from .term_resolver import TermResolver

logger = get_logger(__name__)


class TemplateService:
    """Entry point for importing, storing, querying and purging report templates

    Every operation checks its required arguments before touching storage and
    raises InvalidArgumentError naming the missing one.
    """

    def __init__(
        self,
        store: TemplateStore,
        term_resolver: TermResolver,
        parser: Optional[TemplateFileParser] = None,
        query_engine: Optional[TemplateQueryEngine] = None,
    ):
        """Initialize TemplateService

        Args:
            store: Template store
            term_resolver: Resolver for concept-reference markers
            parser: MRRT document parser
            query_engine: Search engine; defaults to one over ``store``
        """
        self.store = store
        self.term_resolver = term_resolver
        self.parser = parser or TemplateFileParser()
        self.query_engine = query_engine or TemplateQueryEngine(store)

    async def get(self, template_id: int) -> Optional[ReportTemplate]:
        """Get template by surrogate id, None if absent"""
        require(template_id, "id")
        return await self.store.get_by_id(template_id)

    async def get_by_uuid(self, uuid: str) -> Optional[ReportTemplate]:
        """Get template by uuid, None if absent"""
        require(uuid, "uuid")
        return await self.store.get_by_uuid(uuid)

    async def get_by_identifier(self, identifier: str) -> Optional[ReportTemplate]:
        """Get template by dcterms.identifier, None if absent"""
        require(identifier, "identifier")
        return await self.store.get_by_identifier(identifier)

    async def save(self, template: ReportTemplate) -> ReportTemplate:
        """Save a new template

        Raises:
            InvalidArgumentError: if template is None
            DuplicateTemplateError: if the template was saved before or its
                identifier is already stored
        """
        require(template, "template")
        if template.template_id is not None:
            raise DuplicateTemplateError()
        return await self.store.create(template)

    async def import_template(self, raw_text: str) -> ReportTemplate:
        """Parse an MRRT document and store it with its resolved terms

        Args:
            raw_text: Complete template document; stored verbatim

        Raises:
            InvalidArgumentError: if raw_text is None
            MalformedTemplateError: if the document fails validation
            DuplicateTemplateError: if its identifier is already stored
        """
        require(raw_text, "template")

        parsed = self.parser.parse(raw_text)
        terms = await self.term_resolver.resolve(parsed.term_references)

        template = ReportTemplate(
            **parsed.metadata(),
            terms=[
                TemplateTerm(
                    position=position,
                    source_marker_text=term.source_marker_text,
                    resolved_concept_id=term.resolved_concept_id,
                )
                for position, term in enumerate(terms)
            ],
        )

        logger.info(
            "Importing template",
            identifier=parsed.dcterms_identifier,
            term_references=len(parsed.term_references),
            resolved_terms=len(terms),
        )
        return await self.store.create(template, content=raw_text)

    async def purge(self, template: ReportTemplate) -> None:
        """Delete template record and its backing file"""
        require(template, "template")
        await self.store.purge(template)

    async def find(self, criteria: TemplateSearchCriteria) -> List[ReportTemplate]:
        """Templates matching the search criteria"""
        require(criteria, "criteria")
        return await self.query_engine.find(criteria)

    async def get_body_html(self, template: ReportTemplate) -> str:
        """Body content of a stored template's document"""
        require(template, "template")
        return await self.store.read_body(template)
