"""
Local file store for product archives.

Files live flat in one directory under generated names. Reads and writes
go through anyio so a large archive never blocks the event loop and is
never held in memory as a whole.
"""

import uuid
from pathlib import Path
from typing import AsyncIterable, AsyncIterator

import anyio

from .exceptions import FileTooLargeError, InvalidFileNameError


class LocalFileStore:
    """
    Product archives on the local filesystem.

    Satisfies IFileStore.
    """

    def __init__(self, root: Path):
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, name: str) -> Path:
        """
        Resolve a stored-file name to its path.

        Raises:
            InvalidFileNameError: If the name is not a bare file name
        """
        if not name or name in (".", "..") or Path(name).name != name or "\\" in name:
            raise InvalidFileNameError(name)
        return self._root / name

    async def exists(self, name: str) -> bool:
        try:
            path = self.path_for(name)
        except InvalidFileNameError:
            return False
        return await anyio.Path(path).is_file()

    async def size(self, name: str) -> int:
        stat = await anyio.Path(self.path_for(name)).stat()
        return stat.st_size

    async def stream(self, name: str, chunk_size: int) -> AsyncIterator[bytes]:
        """
        Yield the file in chunks of at most `chunk_size` bytes.

        The file is closed as soon as the consumer stops iterating,
        including when the response is cancelled by a disconnect.
        """
        async with await anyio.open_file(self.path_for(name), "rb") as f:
            while True:
                chunk = await f.read(chunk_size)
                if not chunk:
                    break
                yield chunk

    async def save(
        self,
        chunks: AsyncIterable[bytes],
        suffix: str,
        max_bytes: int,
    ) -> tuple[str, int]:
        """
        Write an upload under a new unique name.

        Returns:
            (stored name, size in bytes)

        Raises:
            FileTooLargeError: If more than `max_bytes` arrive; the partial
                file is removed
        """
        await anyio.Path(self._root).mkdir(parents=True, exist_ok=True)
        name = f"{uuid.uuid4().hex}{suffix}"
        path = anyio.Path(self._root / name)

        written = 0
        try:
            async with await anyio.open_file(path, "wb") as f:
                async for chunk in chunks:
                    written += len(chunk)
                    if written > max_bytes:
                        raise FileTooLargeError(max_bytes)
                    await f.write(chunk)
        except BaseException:
            await path.unlink(missing_ok=True)
            raise

        return name, written

    async def delete(self, name: str) -> None:
        await anyio.Path(self.path_for(name)).unlink(missing_ok=True)
