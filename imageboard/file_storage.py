"""
Blob storage for uploaded media and thumbnails.
Files live flat under MEDIA_DIR and are addressed only by their generated name.
"""

import os
import aiofiles

from .errors import BlobNotFoundError

# Configuration
MEDIA_DIR = os.getenv('MEDIA_DIR', 'media')


class FileStorage:
    """Write-once byte storage on the local filesystem"""

    def __init__(self, root: str = MEDIA_DIR):
        self.root = root

    @staticmethod
    def is_valid_name(name: str) -> bool:
        """Names are opaque and flat; anything that could walk out of root is rejected"""
        return bool(name) and not name.startswith('.') and '/' not in name and '\\' not in name

    def get_file_path(self, name: str) -> str:
        return os.path.join(self.root, name)

    async def write(self, name: str, data: bytes) -> None:
        if not self.is_valid_name(name):
            raise ValueError(f'invalid blob name: {name!r}')
        os.makedirs(self.root, exist_ok=True)
        async with aiofiles.open(self.get_file_path(name), 'wb') as f:
            await f.write(data)

    async def read(self, name: str) -> bytes:
        if not self.is_valid_name(name):
            raise BlobNotFoundError(name)
        try:
            async with aiofiles.open(self.get_file_path(name), 'rb') as f:
                return await f.read()
        except FileNotFoundError:
            raise BlobNotFoundError(name)


# Global instance
media_storage = FileStorage()


def get_storage() -> FileStorage:
    """FastAPI dependency, overridden in tests"""
    return media_storage
