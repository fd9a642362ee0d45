"""
Application configuration for the Translation Review annotation tool.

Values can be overridden through environment variables so the same build
runs locally and on a hosted Space.
"""

import os
from pathlib import Path

# Project directories
PROJECT_ROOT = Path(os.environ.get('TRANSLATION_REVIEW_ROOT', Path(__file__).parent))
DATA_DIR = PROJECT_ROOT / "data"

# Input dataset
DATASET_PATH = Path(os.environ.get('TRANSLATION_REVIEW_DATASET', DATA_DIR / "samples.json"))
DATASET_NAME = os.environ.get('TRANSLATION_REVIEW_DATASET_NAME', DATASET_PATH.stem)

# On-device storage
LOCAL_STORAGE_DIR = Path(os.environ.get('TRANSLATION_REVIEW_STORAGE_DIR', DATA_DIR / "local_storage"))
ANNOTATIONS_KEY = "translation-annotations"
AUTH_KEY = "translation-tool-auth"
USER_KEY = "translation-tool-user"

# Export
EXPORT_DIR = Path(os.environ.get('TRANSLATION_REVIEW_EXPORT_DIR', DATA_DIR / "exports"))

# Remote blob store (Azure Blob Storage)
# Either a connection string or an account URL plus SAS token enables sync.
AZURE_STORAGE_CONNECTION_STRING = os.environ.get('AZURE_STORAGE_CONNECTION_STRING', '')
AZURE_STORAGE_ACCOUNT_URL = os.environ.get('AZURE_STORAGE_ACCOUNT_URL', '')
AZURE_STORAGE_SAS_TOKEN = os.environ.get('AZURE_STORAGE_SAS_TOKEN', '')
BLOB_CONTAINER_NAME = os.environ.get('TRANSLATION_REVIEW_CONTAINER', 'annotations')
BLOB_NAME = os.environ.get('TRANSLATION_REVIEW_BLOB', 'annotated_data.json')

# Sync timing (seconds)
AUTOSAVE_DEBOUNCE_SECONDS = float(os.environ.get('TRANSLATION_REVIEW_DEBOUNCE', '3'))
SAVE_STATUS_RESET_SECONDS = 2.0
STATUS_POLL_SECONDS = 1.0

# Login gate. Not a security boundary.
ACCESS_PASSWORD = os.environ.get('TRANSLATION_REVIEW_PASSWORD', 'translate2024')

# UI settings
MAX_STANDARDS_SHOWN = 5
SLOW_OPERATION_SECONDS = 1.0


def remote_sync_configured() -> bool:
    """Whether enough Azure settings are present to enable remote sync."""
    return bool(AZURE_STORAGE_CONNECTION_STRING or AZURE_STORAGE_ACCOUNT_URL)
