"""Basic usage examples for the tempodica weather pipeline."""

import asyncio

from tempodica import (
    DetailsController,
    WeatherClient,
    WeatherSettings,
    WeatherStateController,
    build_repository,
)

# São Paulo
LATITUDE = -23.5505
LONGITUDE = -46.6333


def show_forecast() -> None:
    with WeatherClient() as client:
        print("=== Current weather ===")
        response = client.forecast(LATITUDE, LONGITUDE)
        current = response.current_weather
        print(f"  {current.temperature}°C, wind {current.wind_speed} km/h - {current.description}")

        if response.hourly is None:
            print("  No hourly data.")
            return

        print("\n=== Next hours ===")
        for stamp, temperature, code in list(response.hourly.entries())[:6]:
            print(f"  {stamp}: {temperature}°C (code {code})")


async def run_controllers() -> None:
    settings = WeatherSettings.from_env()
    repository = build_repository(settings)
    try:
        print("\n=== Home screen state ===")
        controller = WeatherStateController(
            repository,
            LATITUDE,
            LONGITUDE,
            refresh_interval=settings.refresh_interval,
        )
        state = await controller.fetch_weather()
        if state.error_message:
            toast = await controller.next_event()
            print(f"  Error: {toast.message}")
        else:
            print(f"  {state.temperature} - {state.description}")
            print(f"  {state.suggestion}")

        feed = repository.last_measurements(settings.history_limit)
        if feed is not None:
            print("\n=== Recent measurements ===")
            for m in feed.snapshot():
                print(f"  #{m.id} {m.temperature}°C {m.description}")

        print("\n=== Hourly outlook ===")
        details = await DetailsController(repository).fetch_forecast(LATITUDE, LONGITUDE)
        for point in details.hourly:
            print(f"  {point.time}: {point.temperature}°C {point.description}")
    finally:
        await repository.close()


def main() -> None:
    show_forecast()
    asyncio.run(run_controllers())


if __name__ == "__main__":
    main()
