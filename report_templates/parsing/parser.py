"""
MRRT Template File Parser

Turns the text of an MRRT (Management of Radiology Report Templates) HTML
document into a ParsedTemplate. The parser performs no I/O.

Recognized structure::

    <html>
      <head>
        <meta charset="UTF-8"/>
        <meta name="dcterms.title" content="CT Chest Abdomen"/>
        <meta name="dcterms.identifier" content="1.3.6.1.4.1.21367.13.199.1015"/>
      </head>
      <body>
        <p>Findings: <span data-concept-ref="RADLEX:RID10321">lung</span></p>
      </body>
    </html>
"""

import re
from typing import Dict, List, Optional

from bs4 import BeautifulSoup

from ..logging_config import get_logger
from ..schemas.template import DCTERMS_VOCABULARY, ParsedTemplate
from .validator import TemplateMetadataValidator, load_markup

logger = get_logger(__name__)

DCTERMS_PREFIX = "dcterms."

# Attribute carrying the coded concept a placeholder refers to
CONCEPT_REF_ATTRIBUTE = "data-concept-ref"

# Class marking a placeholder whose text is the concept reference
CONCEPT_REF_CLASS = "concept-ref"

# Start tag up to its closing ">", skipping ">" inside quoted attribute values
START_TAG = re.compile(r"""<[^\s/>]+(?:[^>"']|"[^"]*"|'[^']*')*>""")

BODY_END_TAG = re.compile(r"</body\s*>", re.IGNORECASE)
HTML_END_TAG = re.compile(r"</html\s*>", re.IGNORECASE)


def _source_offset(raw_text: str, line: int, column: int) -> int:
    """Index into ``raw_text`` of a (1-based line, 0-based column) position reported by html.parser"""
    offset = 0
    for _ in range(line - 1):
        offset = raw_text.index("\n", offset) + 1
    return offset + column


def extract_body(document: BeautifulSoup, raw_text: str) -> str:
    """Inner content of the document's <body>, sliced verbatim from ``raw_text``

    Returns "" when the document has no <body> element. Without a closing
    </body> tag the content runs to </html> or the end of the text.
    """
    body = document.body
    if body is None:
        return ""

    start = _source_offset(raw_text, body.sourceline, body.sourcepos)
    start_tag = START_TAG.match(raw_text, start)
    if start_tag is None or start_tag.group().endswith("/>"):
        return ""
    content_start = start_tag.end()

    for closing in (BODY_END_TAG, HTML_END_TAG):
        matches = list(closing.finditer(raw_text, content_start))
        if matches:
            return raw_text[content_start:matches[-1].start()]
    return raw_text[content_start:]


def extract_body_from_text(raw_text: str) -> str:
    """Body region of a stored document; no metadata validation is applied"""
    return extract_body(load_markup(raw_text), raw_text)


class TemplateFileParser:
    """Parser for MRRT report template documents"""

    def __init__(self, validator: Optional[TemplateMetadataValidator] = None):
        self.validator = validator or TemplateMetadataValidator()

    def parse(self, raw_text: str) -> ParsedTemplate:
        """Parse an MRRT document

        Args:
            raw_text: Complete HTML document

        Returns:
            ParsedTemplate: metadata, body and unresolved term references

        Raises:
            MalformedTemplateError: if the document is not markup or lacks a
                <meta charset> element in its head
        """
        document = load_markup(raw_text)
        self.validator.validate(document)

        metadata = self._extract_metadata(document)
        term_references = self._extract_term_references(document)

        logger.debug(
            "Parsed template",
            identifier=metadata.get("dcterms_identifier"),
            term_references=len(term_references),
        )

        return ParsedTemplate(
            **metadata,
            body=extract_body(document, raw_text),
            term_references=term_references,
        )

    def _extract_metadata(self, document: BeautifulSoup) -> Dict[str, Optional[str]]:
        metadata: Dict[str, Optional[str]] = {}
        for meta in document.head.find_all("meta", attrs={"name": True}):
            name = meta["name"].strip().lower()
            if not name.startswith(DCTERMS_PREFIX):
                continue
            key = name[len(DCTERMS_PREFIX):]
            if key not in DCTERMS_VOCABULARY:
                continue
            content = (meta.get("content") or "").strip()
            # Later declarations of the same key replace earlier ones
            metadata[f"dcterms_{key}"] = content or None
        return metadata

    def _extract_term_references(self, document: BeautifulSoup) -> List[str]:
        if document.body is None:
            return []

        references = []
        for element in document.body.find_all(True):
            if element.has_attr(CONCEPT_REF_ATTRIBUTE):
                marker = element[CONCEPT_REF_ATTRIBUTE]
            elif CONCEPT_REF_CLASS in (element.get("class") or []):
                marker = element.get_text()
            else:
                continue
            marker = marker.strip()
            if marker:
                references.append(marker)
        return references
