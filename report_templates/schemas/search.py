"""Search criteria for querying stored report templates"""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from ..exceptions import require


class TemplateSearchCriteria(BaseModel):
    """
    Immutable set of substring filters over template metadata.

    A field left as None imposes no constraint. Present fields are matched
    case-insensitively anywhere in the corresponding dcterms value and are
    ANDed together. Instances are built through ``TemplateSearchCriteria.Builder``:

        criteria = (
            TemplateSearchCriteria.Builder()
            .with_title("CT")
            .with_creator("creator1")
            .build()
        )
    """

    title: Optional[str] = None
    publisher: Optional[str] = None
    license: Optional[str] = None
    creator: Optional[str] = None

    model_config = ConfigDict(frozen=True, extra="forbid")

    def active_filters(self) -> dict[str, str]:
        """Criteria that were set, keyed by field name"""
        return {name: value for name, value in self.model_dump().items() if value is not None}

    def is_empty(self) -> bool:
        return not self.active_filters()

    class Builder:
        """Fluent builder; every option requires a non-null value"""

        def __init__(self):
            self._values: dict[str, str] = {}

        def with_title(self, title: str) -> "TemplateSearchCriteria.Builder":
            self._values["title"] = require(title, "title")
            return self

        def with_publisher(self, publisher: str) -> "TemplateSearchCriteria.Builder":
            self._values["publisher"] = require(publisher, "publisher")
            return self

        def with_license(self, license_: str) -> "TemplateSearchCriteria.Builder":
            self._values["license"] = require(license_, "license")
            return self

        def with_creator(self, creator: str) -> "TemplateSearchCriteria.Builder":
            self._values["creator"] = require(creator, "creator")
            return self

        def build(self) -> "TemplateSearchCriteria":
            return TemplateSearchCriteria(**self._values)
