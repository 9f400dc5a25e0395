"""
Template Metadata Validator

Structural checks an MRRT document must pass before its parse result is
handed out.
"""

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

from ..exceptions import MalformedTemplateError
from ..logging_config import get_logger

logger = get_logger(__name__)

MISSING_CHARSET_MESSAGE = "Template does not have meta element with charset attribute"


def load_markup(raw_text: str) -> BeautifulSoup:
    """Build the document tree, mapping any parser failure to MalformedTemplateError

    Positions of html.parser tags (``sourceline``/``sourcepos``) refer to
    ``raw_text`` as given; the body is sliced from it using them.
    """
    if not isinstance(raw_text, str):
        raise MalformedTemplateError(
            "Template content must be text",
            details={"type": type(raw_text).__name__},
        )
    try:
        raw_text.encode("utf-8")
    except UnicodeEncodeError as e:
        # Lone surrogates survive parsing but can never be stored
        raise MalformedTemplateError(
            "Template content is not valid Unicode text",
            details={"error": str(e)},
        ) from e
    try:
        return BeautifulSoup(raw_text, "html.parser")
    except (ParserRejectedMarkup, AssertionError, ValueError) as e:
        # html.parser signals unrecoverable markup with AssertionError/ValueError on some inputs
        raise MalformedTemplateError(
            "Template could not be parsed as markup",
            details={"error": str(e)},
        ) from e


class TemplateMetadataValidator:
    """Validates a parsed MRRT document tree"""

    def validate(self, document: BeautifulSoup) -> None:
        """
        Verify the document is markup and declares its character encoding.

        Args:
            document: Tree built by ``load_markup``

        Raises:
            MalformedTemplateError: if the tree holds no elements, has no head,
                or the head carries no <meta charset> element
        """
        if document.find(True) is None:
            raise MalformedTemplateError("Template does not contain any markup")

        head = document.head
        if head is None or head.find("meta", attrs={"charset": True}) is None:
            logger.info("Rejected template without charset declaration")
            raise MalformedTemplateError(MISSING_CHARSET_MESSAGE)
