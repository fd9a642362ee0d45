"""
Remote blob store holding the shared annotated snapshot.

Only two operations are needed: overwrite the single snapshot object and
download it again.
"""

import logging
from typing import Optional

from azure.storage.blob import ContentSettings
from azure.storage.blob.aio import BlobServiceClient

import config

logger = logging.getLogger(__name__)


class BlobStore:
    """Interface of the remote store used by RemoteSyncManager."""

    async def upload(self, data: bytes) -> None:
        """Overwrite the snapshot object with `data`."""
        raise NotImplementedError

    async def download(self) -> bytes:
        """Return the snapshot object's content."""
        raise NotImplementedError


class AzureBlobStore(BlobStore):
    """
    Azure Blob Storage implementation.

    Uploads overwrite `<container>/<blob>`; there is no versioning, so the
    last completed upload wins.
    """

    def __init__(
        self,
        connection_string: str = "",
        account_url: str = "",
        sas_token: str = "",
        container_name: str = config.BLOB_CONTAINER_NAME,
        blob_name: str = config.BLOB_NAME,
    ):
        if not connection_string and not account_url:
            raise ValueError("Either connection_string or account_url is required")
        self.connection_string = connection_string
        self.account_url = account_url
        self.sas_token = sas_token
        self.container_name = container_name
        self.blob_name = blob_name

    @classmethod
    def from_config(cls) -> Optional["AzureBlobStore"]:
        """Build a store from config, or None when sync is not configured."""
        if not config.remote_sync_configured():
            logger.info("Remote sync disabled: no Azure storage settings")
            return None
        return cls(
            connection_string=config.AZURE_STORAGE_CONNECTION_STRING,
            account_url=config.AZURE_STORAGE_ACCOUNT_URL,
            sas_token=config.AZURE_STORAGE_SAS_TOKEN,
        )

    def _service_client(self) -> BlobServiceClient:
        if self.connection_string:
            return BlobServiceClient.from_connection_string(self.connection_string)
        return BlobServiceClient(account_url=self.account_url, credential=self.sas_token or None)

    async def upload(self, data: bytes) -> None:
        async with self._service_client() as service:
            blob = service.get_blob_client(container=self.container_name, blob=self.blob_name)
            await blob.upload_blob(
                data,
                overwrite=True,
                content_settings=ContentSettings(content_type="application/json"),
            )

    async def download(self) -> bytes:
        async with self._service_client() as service:
            blob = service.get_blob_client(container=self.container_name, blob=self.blob_name)
            stream = await blob.download_blob()
            return await stream.readall()
