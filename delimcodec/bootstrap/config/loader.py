import os
from functools import lru_cache
from pathlib import Path

CONFIG_ENV = "DELIMCODEC_CONFIG"
DEFAULT_FILENAME = "delimcodec.yaml"


@lru_cache
def get_configfile() -> Path | None:
    """
    Locate the optional YAML configuration file.

    Priority: DELIMCODEC_CONFIG environment variable, then `delimcodec.yaml`
    in the current working directory. Without either, settings come from
    the environment and defaults only.
    """
    raw = os.getenv(CONFIG_ENV)

    if raw is None:
        file = Path.cwd() / DEFAULT_FILENAME
        return file if file.is_file() else None

    file = Path(raw)
    if not file.is_file():
        raise SystemExit(
            f"[config] Configuration file not found: '{file}'.\n"
            f"  - Fix or unset the {CONFIG_ENV} environment variable\n"
            f"  - Or place a '{DEFAULT_FILENAME}' file in the current working directory."
        )

    return file
