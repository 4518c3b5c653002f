"""Load environment variables early for the FastAPI app.

For local dev, loads a .env file based on ENV ("dev" or "prod").
In deployed environments (ENV="staging" or "prod"), env vars are injected by
the host, so no .env file is loaded.
"""

import os
import sys
from typing import Literal
from dotenv import load_dotenv

EnvironmentName = Literal["dev", "staging", "prod"]

# Allowed values for enumerated settings. Unset variables fall back to defaults.
ALLOWED_ENV_VALUES = {
    "STORAGE_BACKEND": ("file", "memory"),
}
# Settings that must parse as positive integers when set.
INTEGER_ENV_VARS = ["STORAGE_QUOTA_BYTES", "MAP_ZOOM_LEVEL"]


def validate_env_vars() -> None:
    """Validate the values of the environment variables the app reads.

    Raises:
        SystemExit: If any variable holds an invalid value.
    """
    problems = []
    for var, allowed in ALLOWED_ENV_VALUES.items():
        value = os.getenv(var)
        if value is not None and value not in allowed:
            problems.append(f"{var}={value!r} (expected one of {', '.join(allowed)})")
    for var in INTEGER_ENV_VARS:
        value = os.getenv(var)
        if value is not None and not (value.isdigit() and int(value) > 0):
            problems.append(f"{var}={value!r} (expected a positive integer)")
    if problems:
        print(
            f"ERROR: Invalid environment variables: {'; '.join(problems)}",
            file=sys.stderr,
        )
        print(
            "Please fix these variables in your .env file or environment.",
            file=sys.stderr,
        )
        sys.exit(1)


# Load env vars before any app code runs.
# For local dev, load from a .env file.
env = os.getenv("ENV", "dev")
if env in ("staging", "prod"):
    print(f"Running in {env} environment (env vars from the host)")
elif env == "dev":
    print("Loading environment variables from .env.dev")
    load_dotenv(".env.dev", verbose=True)
else:
    raise ValueError(f"Invalid ENV value: {env}. Must be 'dev', 'staging', or 'prod'.")

# Validate env vars after loading.
validate_env_vars()


def get_current_environment() -> EnvironmentName:
    """Get the current environment (dev, staging, or prod)."""
    env = os.getenv("ENV", "dev")
    if env in ("dev", "staging", "prod"):
        return env  # type: ignore[return-value]
    raise ValueError(f"Invalid ENV value: {env}. Must be 'dev', 'staging', or 'prod'.")


def get_map_zoom_level() -> int:
    """Get the zoom level used when moving the map to a workout."""
    return int(os.getenv("MAP_ZOOM_LEVEL", "13"))
