import logging

from rdflib import URIRef

from skos2jskos.accumulator import EntityAccumulator
from skos2jskos.errors import AmbiguousSchemeError, SchemeNotFoundError
from skos2jskos.models import JskosScheme
from skos2jskos.sparql import RdfSource
from skos2jskos.terms import iri_value

logger = logging.getLogger(__name__)

SCHEMES_PATTERN = "?scheme a skos:ConceptScheme ."

SCHEME_METADATA_PATTERN = """
%(scheme)s dct:title ?title .
OPTIONAL {
    { %(scheme)s skos:notation ?notation }
    UNION
    { %(scheme)s vann:preferredNamespacePrefix ?notation }
}
OPTIONAL { %(scheme)s dct:description ?description }
"""

TOP_CONCEPTS_PATTERN = "%(scheme)s skos:hasTopConcept ?top ."


def find_concept_scheme(source: RdfSource) -> str:
    """Return the URI of the only concept scheme in source."""
    candidates = set()
    for row in source.run_query(SCHEMES_PATTERN):
        uri = iri_value(row["scheme"])
        if uri is not None:
            candidates.add(uri)
    if not candidates:
        msg = "RDF contains no ConceptScheme."
        raise SchemeNotFoundError(msg)
    if len(candidates) > 1:
        for uri in sorted(candidates):
            logger.error("-> Found concept scheme: %s", uri)
        raise AmbiguousSchemeError(candidates)
    (uri,) = candidates
    logger.info("Found concept scheme %s", uri)
    return uri


def build_scheme(
    source: RdfSource, scheme_uri: str, accumulator: EntityAccumulator
) -> JskosScheme:
    """Query the metadata and top concepts of the scheme and build its record."""
    params = {"scheme": URIRef(scheme_uri).n3()}
    rows = source.run_query(SCHEME_METADATA_PATTERN % params)
    if not rows:
        msg = f"Concept scheme not found or incomplete (missing dct:title): {scheme_uri}"
        raise SchemeNotFoundError(msg)

    scheme = JskosScheme(uri=scheme_uri)
    for row in rows:
        accumulator.merge_label(scheme, row.get("title"))
        accumulator.merge_notation(scheme, row.get("notation"))
        accumulator.merge_note(scheme, "definition", row.get("description"))

    for row in source.run_query(TOP_CONCEPTS_PATTERN % params):
        accumulator.merge_uri_ref(scheme, "topConcepts", row.get("top"))
    scheme.finalize()
    logger.debug(
        "Concept scheme %s has %i top concepts.", scheme_uri, len(scheme.topConcepts)
    )
    return scheme
