"""
Configuration management for SchemeLens using Pydantic.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Tuple

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Setup Logging ---
log = logging.getLogger(__name__)

# --- Default keyword sets ---

ELIGIBILITY_KEYWORDS: Tuple[str, ...] = (
    "eligible",
    "eligibility",
    "who can apply",
    "who is eligible",
    "applicants",
    "beneficiary",
    "beneficiaries",
    "target group",
)

DOCUMENT_KEYWORDS: Tuple[str, ...] = (
    "document",
    "documents",
    "proof",
    "id proof",
    "identity proof",
    "address proof",
    "income certificate",
    "photo",
    "aadhar",
    "passport",
    "voter id",
)

CLASS_HINTS: Tuple[str, ...] = (
    "eligib",
    "eligibility",
    "who-can",
    "who_can",
    "whois",
    "applicants",
    "benefit",
    "beneficiaries",
    "document",
    "documents",
    "requirement",
    "requirements",
    "proof",
    "howto",
    "how-to",
    "apply",
    "application",
    "criteria",
    "criteria-list",
    "steps",
    "procedure",
    "instructions",
    "notice",
    "announcement",
    "scheme",
    "policy",
)

APPLY_TOKENS: Tuple[str, ...] = ("apply", "registration", "register", "application")

REGULATORY_PATTERN = r"\b(only|must be|should be|eligible if|applicable to|applicants from)\b"


# --- Nested Configuration Models ---


class KeywordConfig(BaseModel):
    """Immutable keyword sets shared by the scorer and the classifiers."""

    model_config = ConfigDict(frozen=True)

    eligibility_keywords: Tuple[str, ...] = Field(default=ELIGIBILITY_KEYWORDS)
    document_keywords: Tuple[str, ...] = Field(default=DOCUMENT_KEYWORDS)
    class_hints: Tuple[str, ...] = Field(default=CLASS_HINTS)
    apply_tokens: Tuple[str, ...] = Field(default=APPLY_TOKENS)
    regulatory_pattern: str = Field(
        default=REGULATORY_PATTERN,
        description="Regex matched against lowercased lines to catch eligibility phrasing.",
    )

    @field_validator("eligibility_keywords", "document_keywords", "class_hints", "apply_tokens")
    @classmethod
    def normalize_keywords(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        """Lowercase, strip and drop blank keywords."""
        cleaned = tuple(k.strip().lower() for k in v if k and k.strip())
        if not cleaned:
            raise ValueError("keyword sets must contain at least one keyword")
        return cleaned

    @field_validator("regulatory_pattern")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"regulatory_pattern is not a valid regex: {e}") from e
        return v


class ExtractionSettings(BaseModel):
    """Thresholds and caps for the block classification pipeline."""

    top_block_threshold: float = Field(
        default=0.35, ge=0.0, le=1.0, description="Minimum block score for a block to count as a top block."
    )
    max_heading_siblings: int = Field(default=30, ge=1, description="Siblings gathered after each heading.")
    max_block_chars: int = Field(default=10_000, ge=1, description="Characters kept per candidate block.")
    min_hint_text_length: int = Field(default=30, ge=0)
    min_density_text_length: int = Field(default=120, ge=0)
    density_threshold: float = Field(default=8.0, ge=0.0, description="Words per descendant element.")
    large_text_length: int = Field(default=800, ge=0)
    max_fallback_paragraphs: int = Field(default=8, ge=1)
    max_line_length: int = Field(default=200, ge=1)
    max_eligibility: int = Field(default=20, ge=0, le=20)
    max_documents: int = Field(default=20, ge=0, le=20)
    max_apply_links: int = Field(default=10, ge=0, le=10)
    snippet_length: int = Field(default=500, ge=0, le=500)
    use_readability: bool = Field(
        default_factory=lambda: os.getenv("SCHEMELENS_USE_READABILITY", "0").lower() in ("1", "true", "yes"),
        description="Run a readability-lxml pass to obtain the article text and title.",
    )
    readability_min_text_length: int = Field(default=25, ge=0)
    parser: str = Field(default="lxml", description="BeautifulSoup tree builder.")

    @field_validator("parser")
    @classmethod
    def validate_parser(cls, v: str) -> str:
        if v not in ("lxml", "html.parser"):
            raise ValueError("parser must be one of 'lxml', 'html.parser'")
        return v


class MonitoringConfig(BaseModel):
    """Configuration for logging."""

    log_level: str = Field(default="INFO", description="Logging level (e.g., DEBUG, INFO, WARNING).")
    log_file: str | None = Field(default=None, description="Path to log file. If None, logs to stderr.")
    json_logs: bool = Field(default=False, description="Render log lines as JSON.")

    @field_validator("log_level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("log_file", mode="before")
    @classmethod
    def create_parent_dir(cls, v: str | Path | None) -> str | None:
        if v is None:
            return None
        path = Path(v)
        path.parent.mkdir(parents=True, exist_ok=True)
        return str(path)


# --- Main Configuration Class ---


class Config(BaseSettings):
    project_name: str = "SchemeLens"
    extraction: ExtractionSettings = Field(default_factory=ExtractionSettings)
    keywords: KeywordConfig = Field(default_factory=KeywordConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)

    model_config = SettingsConfigDict(env_prefix="SCHEMELENS_", env_nested_delimiter="__", case_sensitive=False)

    @classmethod
    def from_yaml(cls, path: Path) -> Config:
        log.debug("Loading configuration from YAML file: %s", path)
        if not path.is_file():
            raise FileNotFoundError(f"Configuration file not found or is not a file: {path}")
        with open(path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
        if not yaml_data:
            log.warning("Configuration file is empty: %s. Using default settings.", path)
            return cls.model_validate({})
        return cls.model_validate(yaml_data)


def find_config_file() -> Path | None:
    current_dir = Path.cwd()
    for name in ("schemelens.yaml", "schemelens.yml"):
        path = current_dir / name
        if path.exists():
            return path
    return None


def load_config(path: Path | None = None) -> Config:
    """Load configuration from an explicit path, a file in the cwd, or defaults."""
    config_path = path or find_config_file()
    if config_path is None:
        log.debug("No config file found. Using default settings.")
        return Config()
    log.info("Loading configuration from: %s", config_path)
    return Config.from_yaml(config_path)
