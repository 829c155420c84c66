"""Pydantic models for the JSKOS records built from SKOS data.

Attribute names are the JSKOS field names so that a model dump is already
valid JSKOS. Empty fields are left out of the exported records.
"""

from pydantic import BaseModel, ConfigDict

SKOS_NS = "http://www.w3.org/2004/02/skos/core#"
JSKOS_CONTEXT = "https://gbv.github.io/jskos/context.json"


class JskosRef(BaseModel):
    """Reference to another concept by its URI."""

    model_config = ConfigDict(frozen=True)

    uri: str


class JskosItem(BaseModel):
    uri: str
    type: list[str] = []
    prefLabel: dict[str, str] = {}  # noqa: N815
    notation: list[str] = []

    def to_jskos(self) -> dict:
        return {
            key: value
            for key, value in self.model_dump(mode="json").items()
            if value not in (None, [], {})
        }


class JskosScheme(JskosItem):
    type: list[str] = [SKOS_NS + "ConceptScheme"]
    definition: dict[str, list[str]] = {}
    topConcepts: list[JskosRef] = []  # noqa: N815

    def finalize(self) -> None:
        """Sort top concepts by URI for a reproducible export."""
        self.topConcepts.sort(key=lambda ref: ref.uri)

    def to_jskos(self) -> dict:
        return {"@context": JSKOS_CONTEXT, **super().to_jskos()}


class JskosConcept(JskosItem):
    type: list[str] = [SKOS_NS + "Concept"]
    narrower: list[JskosRef] = []
    inScheme: list[str] = []  # noqa: N815

    @classmethod
    def in_scheme(cls, uri: str, scheme_uri: str) -> "JskosConcept":
        return cls(uri=uri, inScheme=[scheme_uri])
