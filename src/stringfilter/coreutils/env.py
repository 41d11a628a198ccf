from dotenv import load_dotenv
import os

load_dotenv()  # take environment variables from .env

LOG_LEVEL_VAR = "STRINGFILTER_LOG_LEVEL"
LOG_DIR_VAR = "STRINGFILTER_LOG_DIR"
DEFAULT_DELIMITER_VAR = "STRINGFILTER_DEFAULT_DELIMITER"


def env_get(key: str, default: str | None = None) -> str | None:
    """Get environment variable or return default."""
    return os.getenv(key, default)
