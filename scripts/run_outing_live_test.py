#!/usr/bin/env python
"""
Run this to exercise the live places, forecast, and OpenAI calls end to end.

Requires OPENWEATHER_API_KEY, GOOGLE_PLACES_API_KEY and OPENAI_API_KEY (or
JACKETSCORE_USE_SSM=true with the SSM parameters in place).

Usage (from repo root):
    python scripts/run_outing_live_test.py "Central Park"
"""

import asyncio
import sys

from app.domain import Gender, VenueType
from app.ingestors import ForecastIngestor, PlacesIngestor
from app.services import FormController, FormPhase


async def main(query: str) -> None:
    places = PlacesIngestor()

    print(f"=== Live outing test for {query!r} ===\n")

    print("Requesting place suggestions from Google Places...")
    suggestions = await places.autocomplete(query)
    if not suggestions:
        print("No suggestions returned.")
        return
    for idx, suggestion in enumerate(suggestions[:5], start=1):
        print(f"{idx}. {suggestion.description} ({suggestion.place_id})")

    place = await places.get_place(suggestions[0].place_id)
    print(f"\nResolved place: {place.model_dump()}")

    controller = FormController(ForecastIngestor())
    arrival = controller.arrival_choices()[2]
    controller.select_place(place)
    controller.select_venue_type(VenueType.OUTDOOR)
    controller.select_arrival_time(arrival)
    controller.select_duration(2)
    controller.select_gender(Gender.PREFER_NOT_TO_SAY)

    print(f"\nSubmitting outing arriving at {arrival}...")
    state = await controller.submit()

    if state.phase != FormPhase.RESULTS:
        print(f"\nSubmission ended in {state.phase.value}: {state.error_message}")
        return

    result = state.result
    print(f"\nForecast slot: {result.outing.forecast_time.isoformat()}")
    print(f"Weather: {result.weather.model_dump()}")
    print(f"Jacket score: {result.score} {result.score_error or ''}")
    print(f"Recommendation: {result.recommendation or result.recommendation_error}")
    print(f"Status: {result.status.value}")


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else "Central Park"))
