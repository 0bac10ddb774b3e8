import logging
from typing import List, Optional, Tuple

from neo4j import GraphDatabase, Driver
from neo4j.exceptions import ServiceUnavailable, SessionExpired, TransientError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..config import Neo4jSettings

logger = logging.getLogger(__name__)

NAMESPACES_QUERY = """
MATCH (n:NamespacePrefixDefinition)
UNWIND keys(n) AS namespace
RETURN namespace, n[namespace] AS prefix
"""


class Neo4jStore:
    """
    Read-only access to the Neo4j database an RDF import would target.

    Graph Model:
    - (:NamespacePrefixDefinition {<namespace>: <prefix>, ...}) - one property
      per namespace already used by previous imports
    """

    def __init__(self, settings: Neo4jSettings):
        self.settings = settings
        self.driver: Optional[Driver] = None
        self._connect()

    def _connect(self):
        """Open the driver used to read existing namespace prefixes"""
        logger.info(f"Opening Neo4j driver at {self.settings.uri} for namespace preload")

        self.driver = GraphDatabase.driver(
            self.settings.uri,
            auth=(self.settings.username, self.settings.password),
            max_connection_pool_size=self.settings.max_connection_pool_size,
            connection_timeout=self.settings.connection_timeout
        )

        # fail here, before parsing, when the database is unreachable
        self.driver.verify_connectivity()
        logger.debug(f"Neo4j reachable, reading prefixes from database '{self.settings.database}'")

    @retry(
        retry=retry_if_exception_type((ServiceUnavailable, SessionExpired, TransientError)),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=5),
        reraise=True
    )
    def fetch_namespaces(self) -> List[Tuple[str, str]]:
        """Namespace prefixes registered by previous imports, as (namespace, prefix) pairs"""
        with self.driver.session(database=self.settings.database) as session:
            result = session.run(NAMESPACES_QUERY)
            namespaces = [(record["namespace"], record["prefix"]) for record in result]

        logger.debug(f"Read {len(namespaces)} namespace prefixes from {self.settings.database}")
        return namespaces

    def close(self):
        """Close database connection"""
        if self.driver:
            self.driver.close()
            self.driver = None
            logger.info("Neo4j connection closed")

    def __enter__(self) -> "Neo4jStore":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
