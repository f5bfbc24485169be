import os
from dotenv import load_dotenv
from pydantic import BaseModel

from .errors import ConfigurationError

load_dotenv()


def _int_env(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e


# Defaults applied to every verifier a registry builds
DEFAULT_ALGORITHM = os.getenv("KEYEDSIG_ALGORITHM", "SHA1withRSA")
DEFAULT_CHARSET = os.getenv("KEYEDSIG_CHARSET", "UTF-8")

# Size of the striped lock table guarding verifier construction
LOCK_STRIPES = _int_env("KEYEDSIG_LOCK_STRIPES", "16")

# Read once by utils.logging when the keyedsig logger is first set up
LOG_LEVEL = os.getenv("KEYEDSIG_LOG_LEVEL", "INFO").upper()


class Settings(BaseModel):
    algorithm: str = DEFAULT_ALGORITHM
    charset: str = DEFAULT_CHARSET
    lock_stripes: int = LOCK_STRIPES


def load_settings() -> Settings:
    """Read settings from the current environment (module defaults are import-time)."""
    return Settings(
        algorithm=os.getenv("KEYEDSIG_ALGORITHM", "SHA1withRSA"),
        charset=os.getenv("KEYEDSIG_CHARSET", "UTF-8"),
        lock_stripes=_int_env("KEYEDSIG_LOCK_STRIPES", "16"),
    )
