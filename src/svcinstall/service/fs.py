"""Async filesystem primitives used by the backends."""

import asyncio
import logging
import tempfile
from pathlib import Path

import aiofiles
import aiofiles.os

logger = logging.getLogger(__name__)

TEMP_PREFIX = "svcinstall"


async def exists(path: Path) -> bool:
    return await aiofiles.os.path.exists(path)


async def is_file(path: Path) -> bool:
    return await aiofiles.os.path.isfile(path)


async def is_dir(path: Path) -> bool:
    return await aiofiles.os.path.isdir(path)


async def write_text(path: Path, content: str, *, mkdir: bool = False) -> None:
    """Write text to a file, optionally creating parent directories first."""
    if mkdir:
        await aiofiles.os.makedirs(path.parent, exist_ok=True)
    async with aiofiles.open(path, "w", encoding="utf-8") as f:
        await f.write(content)
    logger.info("Wrote %s", path)


async def remove(path: Path) -> None:
    await aiofiles.os.remove(path)
    logger.info("Removed %s", path)


async def make_executable(path: Path) -> None:
    await asyncio.to_thread(path.chmod, 0o755)


async def write_temp_file(filename: str, content: str) -> Path:
    """Write content to a file inside a fresh temporary directory.

    Returns:
        Path of the written file.
    """
    temp_dir = await asyncio.to_thread(tempfile.mkdtemp, prefix=TEMP_PREFIX)
    temp_path = Path(temp_dir) / filename
    await write_text(temp_path, content)
    return temp_path
