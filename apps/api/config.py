# apps/api/config.py
import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    def __init__(self):
        self.env = os.getenv("ENV", "development")
        cors = os.getenv("CORS_ORIGINS", "")
        self.cors_origins = [o.strip() for o in cors.split(",") if o.strip()]

        # Neo4j (graph)
        self.neo4j_uri = os.getenv("NEO4J_URI", "bolt://localhost:7687")
        self.neo4j_username = os.getenv("NEO4J_USERNAME", "neo4j")
        self.neo4j_password = os.getenv("NEO4J_PASSWORD", "neo4j")
        self.neo4j_database = os.getenv("NEO4J_DATABASE", "neo4j")

        # HTTP basic auth; disabled when the username is empty
        self.http_username = os.getenv("HTTP_USERNAME", "")
        self.http_password = os.getenv("HTTP_PASSWORD", "")

        # Random bytes per generated entity id (hex-encoded, so 8 -> 16 chars)
        self.id_bytes = int(os.getenv("ID_BYTES", "8"))


settings = Settings()
