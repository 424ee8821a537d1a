#!/usr/bin/env python3
"""List nodes and registries of an Alacran server.

Usage:
  # settings come from the environment or a .env file
  ALACRAN_URL=https://alacran.example.com ALACRAN_PASSWORD=... python scripts/example.py
"""

import asyncio
import logging
import sys

from alacran_client import AlacranClient
from alacran_client.auth import CredentialError
from alacran_client.errors import AlacranError, TransportError

logger = logging.getLogger("alacran_example")


async def run() -> None:
    async with AlacranClient.from_env() as client:
        nodes = await client.get_all_nodes()
        logger.info(f"get_all_nodes: {nodes}")

        registries = await client.get_docker_registries()
        logger.info(f"get_docker_registries: {registries}")

        generic = await client.execute_generic_api_command("GET", "/user/registries", {})
        logger.info(f"execute_generic_api_command GET /user/registries: {generic}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    try:
        asyncio.run(run())
    except (AlacranError, CredentialError, TransportError) as e:
        logger.error(f"Request failed: {e!r}")
        sys.exit(1)
