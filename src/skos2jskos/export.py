import json
import logging
import os
import tempfile
from pathlib import Path

from skos2jskos.config import ConversionConfig, output_path
from skos2jskos.models import JskosConcept, JskosScheme

logger = logging.getLogger(__name__)


def dump_json(value) -> str:
    """Pretty-printed JSON with sorted keys."""
    return json.dumps(value, indent=2, sort_keys=True, ensure_ascii=False) + "\n"


def write_json(path: Path, value) -> None:
    """
    Write value as JSON to path.

    The content is written to a temporary file in the same directory which
    then replaces path, so readers never see a partially written file.
    """
    text = dump_json(value)
    fd, tmp_name = tempfile.mkstemp(
        dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fp:
            fp.write(text)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    logger.debug("Wrote %i bytes to %s", len(text.encode("utf-8")), path)


def export_scheme(scheme: JskosScheme, config: ConversionConfig) -> Path:
    path = output_path(config, "scheme")
    write_json(path, scheme.to_jskos())
    logger.info("-> Concept scheme written to %s", path)
    return path


def export_concepts(concepts, config: ConversionConfig) -> Path:
    """Write the concepts sorted by URI."""
    records: list[JskosConcept] = sorted(concepts, key=lambda c: c.uri)
    path = output_path(config, "concepts")
    write_json(path, [concept.to_jskos() for concept in records])
    logger.info("-> %i concepts written to %s", len(records), path)
    return path
