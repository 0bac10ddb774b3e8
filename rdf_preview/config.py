from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal, Optional


class Neo4jSettings(BaseSettings):
    """Connection to the Neo4j database whose namespace prefixes are preloaded"""
    uri: str = Field(default="bolt://localhost:7687", description="Bolt or neo4j:// URI of the target database")
    username: str = Field(default="neo4j", description="User allowed to read NamespacePrefixDefinition nodes")
    password: str = Field(default="password", description="Password for that user")
    database: str = Field(default="neo4j", description="Database an import would write to")
    max_connection_pool_size: int = Field(default=10, description="Driver connection pool size")
    connection_timeout: int = Field(default=30, description="Seconds to wait when opening a connection")

    model_config = SettingsConfigDict(
        env_prefix='NEO4J_',
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore'
    )


class PreviewSettings(BaseSettings):
    """How RDF statements are translated into the previewed property graph"""
    shorten_uris: bool = Field(
        default=True,
        description="Replace namespaces with prefixes in labels, property names and relationship types"
    )
    types_to_labels: bool = Field(
        default=True,
        description="Turn rdf:type statements into node labels instead of relationships"
    )
    language_filter: Optional[str] = Field(
        default=None,
        description="Keep only literals in this language; '@' keeps all and adds a '<prop>@' language property"
    )
    rdf_format: Optional[str] = Field(
        default=None,
        description="rdflib parser format (turtle, xml, nt, json-ld...); guessed from file name when unset"
    )

    model_config = SettingsConfigDict(
        env_prefix='PREVIEW_',
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore'
    )

    @field_validator("language_filter", "rdf_format", mode="before")
    @classmethod
    def _blank_is_unset(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class AppSettings(BaseSettings):
    """Application settings"""
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level"
    )

    # Component settings
    neo4j: Neo4jSettings = Field(default_factory=Neo4jSettings)
    preview: PreviewSettings = Field(default_factory=PreviewSettings)

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore'
    )


# Singleton instance
_settings: AppSettings | None = None


def get_settings() -> AppSettings:
    """Get application settings (singleton)"""
    global _settings
    if _settings is None:
        _settings = AppSettings()
    return _settings
