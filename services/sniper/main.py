import asyncio
import sys

from loguru import logger

from reveal_sniper.config import AppSettings
from reveal_sniper.errors import StartupError
from reveal_sniper.execution.swap_executor import SwapExecutor
from reveal_sniper.monitor.poller import Poller


async def run(settings: AppSettings, executor: SwapExecutor):
    poller = Poller.create(settings, executor)
    try:
        return await poller.run()
    finally:
        await executor.wallet.close()


def main():
    settings = AppSettings()
    logger.remove()
    logger.add(lambda m: print(m, end=""), level=settings.log_level)

    try:
        executor = SwapExecutor.create(settings)
    except StartupError as e:
        logger.error("Error: {}", e)
        sys.exit(1)

    try:
        asyncio.run(run(settings, executor))
    except KeyboardInterrupt:
        logger.info("Reveal sniper interrupted; shutting down.")


if __name__ == "__main__":
    main()
