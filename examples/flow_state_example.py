"""
Flow State Example

This example demonstrates how a host component uses a FlowStateController to:
1. Run asynchronous units of work under named keys
2. Observe Loading -> Success / Failure on each key's stream
3. Poll the latest state without subscribing
4. Dispose every stream when the host is torn down
"""

import asyncio
import logging
import random

from flow_state import FlowState, FlowStateController, RegistrySettings, when

logger = logging.getLogger(__name__)


class WeatherScreen:
    """A screen-like component that owns its flow state controller."""

    FORECAST_KEY = "forecast"

    def __init__(self) -> None:
        self.flow = FlowStateController(RegistrySettings(serialize_per_key=True))

    async def refresh(self, city: str) -> None:
        async def fetch_forecast() -> str:
            await asyncio.sleep(0.2)
            if random.random() < 0.3:
                raise ConnectionError(f"weather service unreachable for {city}")
            return f"{city}: {random.randint(-5, 30)}°C"

        async def on_error(error: BaseException, _trace: object) -> None:
            logger.error(f"Forecast refresh failed: {error}")

        await self.flow.execute(
            self.FORECAST_KEY,
            fetch_forecast,
            on_error=on_error,
            on_complete=lambda: logger.info(f"Refresh for {city} finished"),
        )

    def dispose(self) -> None:
        self.flow.dispose()


def render(state: FlowState[str]) -> str:
    return when(
        state,
        loading=lambda: "[ loading... ]",
        success=lambda forecast: f"[ {forecast} ]",
        failure=lambda message: f"[ error: {message} ]",
        or_else=lambda: "[ pull to refresh ]",
    )


async def watch(screen: WeatherScreen) -> None:
    """
    화면 상태를 구독하여 출력하는 비동기 함수
    """
    async for state in screen.flow.get_stream(WeatherScreen.FORECAST_KEY):
        print(render(state))
    print("Stream closed.")


async def main() -> None:
    screen = WeatherScreen()
    screen.flow.init_stream(WeatherScreen.FORECAST_KEY, payload_type=str)

    watcher = asyncio.create_task(watch(screen))

    for city in ("Seoul", "Busan", "Incheon"):
        await screen.refresh(city)
        print(f"snapshot: {screen.flow.current_state(WeatherScreen.FORECAST_KEY)!r}")

    screen.dispose()
    await watcher


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    asyncio.run(main())
