"""
Configuration and shared utilities for the project registry.
"""

import os
import yaml
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

# Pre-import clients so enrichment threads never race on first import
from groq import Groq
from openai import OpenAI

# Client cache, one client per provider
_client_cache: dict = {}

# Load environment variables
load_dotenv()

BASE_DIR = Path(__file__).resolve().parent

# Paths
DATA_DIR = Path(os.environ.get("REGISTRY_DATA_DIR", "data"))
STORE_FILE = Path(os.environ.get("REGISTRY_STORE_FILE", str(DATA_DIR / "projects.json")))
SEED_DIR = BASE_DIR / "seed"
SEED_FILE = Path(os.environ.get("REGISTRY_SEED_FILE", str(SEED_DIR / "projects.yaml")))
DIRECTORY_FILE = Path(os.environ.get("REGISTRY_DIRECTORY_FILE", str(SEED_DIR / "directory.yaml")))

# Store
STORE_BACKEND = os.environ.get("REGISTRY_BACKEND", "json")

# Records whose creator has no directory entry land here
DEFAULT_INSTITUTION_ID = int(os.environ.get("REGISTRY_DEFAULT_INSTITUTION", "1"))

# Enrichment
SUMMARY_MODEL = os.environ.get("REGISTRY_SUMMARY_MODEL", "groq/llama-3.1-8b-instant")
SUMMARY_TIMEOUT = float(os.environ.get("REGISTRY_SUMMARY_TIMEOUT", "10"))
# Enrichment threads; a summarizer that hangs past the timeout keeps one busy
SUMMARY_WORKERS = int(os.environ.get("REGISTRY_SUMMARY_WORKERS", "4"))
SUMMARIES_ENABLED = os.environ.get("REGISTRY_SUMMARIES", "on").lower() not in ("0", "off", "false", "no")

# Identities allowed to call the unfiltered listing
ADMIN_IDENTITIES = frozenset(
    a.strip() for a in os.environ.get("REGISTRY_ADMINS", "").split(",") if a.strip()
)

# Logging
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
ENVIRONMENT = os.environ.get("REGISTRY_ENV", "development")

# HTTP
WEB_PORT = int(os.environ.get("REGISTRY_PORT", "5001"))
VIEWER_HEADER = "X-Viewer-Identity"


def load_yaml(path: Path) -> Optional[dict]:
    """Load a YAML data file. Returns None if it does not exist."""
    if not path.exists():
        return None
    with open(path) as f:
        return yaml.safe_load(f) or {}


def _get_cached_client(provider: str):
    """Get or create a cached client for a provider."""
    if provider in _client_cache:
        return _client_cache[provider]

    if provider == "groq":
        client = Groq(timeout=SUMMARY_TIMEOUT)
    elif provider == "openai":
        client = OpenAI(timeout=SUMMARY_TIMEOUT)
    elif provider == "deepseek":
        client = OpenAI(base_url="https://api.deepseek.com/v1", api_key=os.environ.get("DEEPSEEK_API_KEY"), timeout=SUMMARY_TIMEOUT)
    elif provider == "google":
        client = OpenAI(base_url="https://generativelanguage.googleapis.com/v1beta/openai/", api_key=os.environ.get("GOOGLE_API_KEY"), timeout=SUMMARY_TIMEOUT)
    elif provider == "ollama":
        host = os.environ.get("OLLAMA_HOST", "http://localhost:11434")
        client = OpenAI(base_url=f"{host}/v1", api_key="ollama", timeout=SUMMARY_TIMEOUT)
    else:
        raise ValueError(f"Unknown provider: {provider}")

    _client_cache[provider] = client
    return client


def get_client(model_key: str):
    """
    Get the API client for a "provider/model-name" key.

    Returns (client, model_config) tuple. Keys without a provider
    fall back to Groq.
    """
    if "/" in model_key:
        provider, model_name = model_key.split("/", 1)
        provider = provider.lower()
    else:
        provider, model_name = "groq", model_key

    model_cfg = {"provider": provider, "model": model_name, "temperature": 0.3}
    return _get_cached_client(provider), model_cfg
