import logging
import os

import requests

from hostel.exceptions import UploadError

logger = logging.getLogger(__name__)


class LocalBlobStore:
    """Writes uploads below a folder on disk and serves them from a base URL."""

    def __init__(self, root, base_url='/uploads'):
        self.root = root
        self.base_url = base_url.rstrip('/')

    def upload(self, path: str, data: bytes) -> str:
        target = os.path.join(self.root, *path.split('/'))
        try:
            os.makedirs(os.path.dirname(target), exist_ok=True)
            with open(target, 'wb') as fh:
                fh.write(data)
        except OSError as e:
            logger.error("Error writing upload %s: %s", path, e)
            raise UploadError("Failed to store the document") from e
        return self.public_url(path)

    def public_url(self, path: str) -> str:
        return f"{self.base_url}/{path}"


class HttpBlobStore:
    """
    Object storage reachable over a REST API
    (PUT {base_url}/object/{bucket}/{path}, public reads under /object/public/).
    """

    def __init__(self, base_url, api_key=None, bucket='documents', timeout=10):
        if not base_url:
            raise ValueError("BLOB_STORE_URL is required for the http blob store")
        self.base_url = base_url.rstrip('/')
        self.api_key = api_key
        self.bucket = bucket
        self.timeout = timeout

    def upload(self, path: str, data: bytes) -> str:
        headers = {'Content-Type': 'application/octet-stream'}
        if self.api_key:
            headers['Authorization'] = f"Bearer {self.api_key}"
        try:
            response = requests.put(
                f"{self.base_url}/object/{self.bucket}/{path}",
                data=data,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error("Error uploading %s to blob store: %s", path, e)
            raise UploadError("Failed to upload the document") from e
        return self.public_url(path)

    def public_url(self, path: str) -> str:
        return f"{self.base_url}/object/public/{self.bucket}/{path}"


def get_blob_store(config):
    kind = config.get('BLOB_STORE', 'local')
    if kind == 'http':
        return HttpBlobStore(
            config.get('BLOB_STORE_URL'),
            api_key=config.get('BLOB_STORE_KEY'),
            bucket=config.get('BLOB_BUCKET', 'documents'),
        )
    if kind == 'local':
        return LocalBlobStore(config['UPLOAD_FOLDER'], config.get('BLOB_PUBLIC_BASE_URL', '/uploads'))
    raise ValueError(f"Unknown BLOB_STORE '{kind}'")
