"""Business logic services for the Translation Review annotation tool."""

from .data_manager import DataManager
from .status_classifier import classify
from .local_storage import LocalStorage, AnnotationPersistence
from .blob_store import BlobStore, AzureBlobStore
from .export_manager import ExportManager
from .remote_sync import RemoteSyncManager, SaveStatus, parse_snapshot
from .annotation_controller import AnnotationController
from .login_gate import LoginGate
from .render_engine import RenderEngine

__all__ = [
    "DataManager",
    "classify",
    "LocalStorage",
    "AnnotationPersistence",
    "BlobStore",
    "AzureBlobStore",
    "ExportManager",
    "RemoteSyncManager",
    "SaveStatus",
    "parse_snapshot",
    "AnnotationController",
    "LoginGate",
    "RenderEngine",
]
