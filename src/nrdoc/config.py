"""Environment-driven configuration for nrdoc."""

import os


def _flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Settings read once from NRDOC_* environment variables at import."""

    # Where `mod name;` files live when no loader is given
    MODULE_DIR = os.environ.get("NRDOC_MODULE_DIR", "input_files")
    MODULE_DIR_IS_SET = "NRDOC_MODULE_DIR" in os.environ
    MODULE_EXTENSION = os.environ.get("NRDOC_MODULE_EXTENSION", ".nr")

    OUTPUT_DIR = os.environ.get("NRDOC_OUTPUT_DIR", "docs")
    LOG_LEVEL = os.environ.get("NRDOC_LOG_LEVEL", "WARNING").upper()
    STRICT = _flag("NRDOC_STRICT")
