import asyncio
import socket
from concurrent.futures import ThreadPoolExecutor
from typing import Optional


def run_sync(func):
    """Run a function in a thread pool executor.

    Args:
        func: The function to run in thread pool.

    Returns:
        An async wrapper function that runs the input function in a thread pool.
    """

    async def wrapper(*args, **kwargs):
        loop = asyncio.get_running_loop()
        with ThreadPoolExecutor() as pool:
            return await loop.run_in_executor(pool, lambda: func(*args, **kwargs))

    return wrapper


def to_primitive_bool(value: Optional[bool]) -> bool:
    """Coerce an optional flag from a service payload into a plain bool; ``None`` is ``False``."""
    return bool(value) if value is not None else False


def get_local_host_address() -> str:
    """Resolve the IPv4 address of the local host.

    Returns:
        str: Dotted IPv4 address of this machine's host name.

    Raises:
        socket.gaierror: If the host name cannot be resolved.
    """
    return socket.gethostbyname(socket.gethostname())
