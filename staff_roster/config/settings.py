"""
Application configuration and settings.
Centralized environment variables and constants.
"""
import os
from dotenv import load_dotenv

load_dotenv()

# -----------------------------------------------------------------------------
# Environment
# -----------------------------------------------------------------------------
# ENV controls environment-specific behavior:
# - dev  : local development (roster DB created next to the working directory)
# - prod : production (roster DB path must be provided explicitly)
ENV = os.getenv("ENV", "dev").lower()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# -----------------------------------------------------------------------------
# Roster Storage Configuration
# -----------------------------------------------------------------------------
# Records and settings are stored as JSON documents in a SQLite key-value table.
# Bumping a storage key starts from compiled defaults (settings are merged with
# defaults on load, so additive schema changes need no bump).
if ENV == "dev":
    ROSTER_DB_PATH = os.getenv("ROSTER_DB_PATH", "staff_roster.db")
else:
    ROSTER_DB_PATH = os.getenv("ROSTER_DB_PATH", "staff_roster_prod.db")

EMPLOYEE_STORAGE_KEY = os.getenv("EMPLOYEE_STORAGE_KEY", "ksrtc_employees_v1")
SETTINGS_STORAGE_KEY = os.getenv("SETTINGS_STORAGE_KEY", "ksrtc_settings_v3")

# -----------------------------------------------------------------------------
# Azure OpenAI Configuration (bulk text parsing)
# -----------------------------------------------------------------------------
AZURE_OPENAI_API_KEY = os.getenv("AZURE_OPENAI_API_KEY")
AZURE_OPENAI_ENDPOINT = os.getenv("AZURE_OPENAI_ENDPOINT")
AZURE_OPENAI_API_VERSION = os.getenv("AZURE_OPENAI_API_VERSION")

CHAT_MODEL = os.getenv("CHAT_MODEL")

# -----------------------------------------------------------------------------
# Import Configuration
# -----------------------------------------------------------------------------
MAX_IMPORT_FILE_SIZE = int(os.getenv("MAX_IMPORT_FILE_SIZE", str(2 * 1024 * 1024)))  # 2MB

# -----------------------------------------------------------------------------
# Login (shared secrets)
# -----------------------------------------------------------------------------
ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")
UNIT_PASSWORD = os.getenv("UNIT_PASSWORD", "ksrtc")

# Session tokens are HS256 JWTs signed with this secret
JWT_SECRET = os.getenv("JWT_SECRET", "change-me-staff-roster-session-secret")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_TTL_SECONDS = int(os.getenv("JWT_TTL", str(60 * 60 * 12)))  # 12 hours

# -----------------------------------------------------------------------------
# Prompt Paths
# -----------------------------------------------------------------------------
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
BULK_PARSE_PROMPT_PATH = os.getenv(
    "BULK_PARSE_PROMPT_PATH", os.path.join(BASE_DIR, "prompts", "bulk_parse_prompt.txt")
)
