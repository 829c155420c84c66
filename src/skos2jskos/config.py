"""Configuration of a conversion run.

A single ``ConversionConfig`` is built from the command line (optionally on top
of a TOML config file) and passed to every component.
"""

import logging
import sys
from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from typing_extensions import Self

from skos2jskos.errors import ConfigurationError

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"
CONFIG_SECTION = "skos2jskos"


class ConversionConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    # Input modes, exactly one of them must be used.
    source_files: list[Path] = []
    source_url: str | None = None
    sparql_endpoint: str | None = None

    outdir: Path = Path(".")
    name: str | None = None
    language: str = DEFAULT_LANGUAGE
    scheme: str | None = None
    unquote_notes: bool = True
    rdf_format: str | None = None

    @field_validator("language")
    @classmethod
    def language_not_empty(cls, value):
        value = value.strip()
        if not value:
            msg = "The default language tag must not be empty."
            raise ValueError(msg)
        return value

    @field_validator("name", "scheme", "source_url", "sparql_endpoint", mode="before")
    @classmethod
    def handle_empty_field(cls, value):
        # None cannot be expressed in toml so we catch an empty string before validation.
        if value == "":
            return None
        return value

    @model_validator(mode="after")
    def one_input_mode(self) -> Self:
        modes = [
            mode
            for mode, used in (
                ("files", bool(self.source_files)),
                ("url", self.source_url is not None),
                ("endpoint", self.sparql_endpoint is not None),
            )
            if used
        ]
        if not modes:
            msg = "No input given. Provide RDF files, a URL or a SPARQL endpoint."
            raise ValueError(msg)
        if len(modes) > 1:
            msg = f"Only one input mode may be used, got: {', '.join(modes)}."
            raise ValueError(msg)
        return self

    @property
    def input_description(self) -> str:
        if self.source_files:
            return ", ".join(str(fp) for fp in self.source_files)
        if self.source_url is not None:
            return self.source_url
        return f"SPARQL endpoint {self.sparql_endpoint}"


def output_path(config: ConversionConfig, kind: str) -> Path:
    """Return the path of the JSON file for kind "scheme" or "concepts"."""
    filename = f"{kind}.json" if not config.name else f"{config.name}-{kind}.json"
    return config.outdir / filename


def load_config_file(config_file: Path) -> dict:
    """Read the [skos2jskos] table of a TOML config file."""
    if not config_file.exists():
        msg = "Config file not found at: %s"
        logger.error(msg, config_file)
        raise ConfigurationError(msg % config_file)
    with config_file.open(mode="rb") as fp:
        try:
            conf = tomllib.load(fp)
        except tomllib.TOMLDecodeError as exc:
            msg = f"Invalid config file {config_file}: {exc}"
            raise ConfigurationError(msg) from exc
    logger.debug("Config loaded from: %s", config_file)
    section = conf.get(CONFIG_SECTION, {})
    if not isinstance(section, dict):
        msg = f'Section "[{CONFIG_SECTION}]" in {config_file} must be a table.'
        raise ConfigurationError(msg)
    return section
