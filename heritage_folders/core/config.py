import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables (only in development)
# In containers, environment variables are set directly
if os.getenv("ENVIRONMENT") != "production":
    load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent.parent

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

# Database configuration
DATABASE_TYPE = os.getenv("DATABASE_TYPE", "json")  # Options: 'json', 'memory'

# JSON database configuration
JSON_DB_PATH = os.getenv("JSON_DB_PATH")  # Path to JSON database directory

# CORS
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173").split(",")

# Rate Limiting
RATE_LIMIT_ENABLED = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
RATE_LIMIT_PER_MINUTE = int(os.getenv("RATE_LIMIT_PER_MINUTE", "100"))
RATE_LIMIT_PER_HOUR = int(os.getenv("RATE_LIMIT_PER_HOUR", "1000"))

# Heritage site registry: comma-separated site ids; empty accepts every site
HERITAGE_SITE_IDS = [
    int(site_id) for site_id in os.getenv("HERITAGE_SITE_IDS", "").split(",")
    if site_id.strip()
]

# What happens to documents filed under a deleted subtree.
# Options: 'reassign' (move to the deleted folder's parent), 'delete', 'reject'
DOCUMENT_CASCADE_POLICY = os.getenv("DOCUMENT_CASCADE_POLICY", "reassign").lower()

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_TO_FILE = os.getenv("LOG_TO_FILE", "true").lower() == "true"
LOG_DIR = Path(os.getenv("LOG_DIR", str(BASE_DIR / "logs")))
