import logging

from rdflib import URIRef

from skos2jskos.accumulator import EntityAccumulator
from skos2jskos.models import JskosConcept
from skos2jskos.sparql import RdfSource
from skos2jskos.terms import iri_value

logger = logging.getLogger(__name__)

CONCEPTS_PATTERN = """
?concept skos:inScheme %(scheme)s .
OPTIONAL { ?concept skos:prefLabel ?pLabel }
OPTIONAL { ?concept skos:notation ?notation }
OPTIONAL { ?concept skos:narrower ?narrower }
"""


def collect_concepts(
    source: RdfSource, scheme_uri: str, accumulator: EntityAccumulator
) -> dict[str, JskosConcept]:
    """Build one record per concept in the scheme, keyed by concept URI."""
    concepts: dict[str, JskosConcept] = {}
    rows = source.run_query(CONCEPTS_PATTERN % {"scheme": URIRef(scheme_uri).n3()})
    for row in rows:
        uri = iri_value(row["concept"])
        if uri is None:
            continue
        concept = concepts.get(uri)
        if concept is None:
            concept = JskosConcept.in_scheme(uri, scheme_uri)
            concepts[uri] = concept
        accumulator.merge_notation(concept, row.get("notation"))
        accumulator.merge_label(concept, row.get("pLabel"))
        accumulator.merge_uri_ref(concept, "narrower", row.get("narrower"))

    if not concepts:
        logger.warning("No concepts found in concept scheme %s", scheme_uri)
    else:
        logger.debug("Collected %i concepts from %i rows.", len(concepts), len(rows))
    return concepts
