from datetime import datetime, timezone

import pytest

from app.domain import Gender, UpstreamServiceError, VenueType
from app.models.places import Place
from app.models.weather import WeatherSnapshot
from app.services.form_controller import (
    INVALID_TIME_MESSAGE,
    RECOMMENDATION_ERROR_MESSAGE,
    REQUIRED_FIELDS_MESSAGE,
    FormController,
    FormPhase,
    FormStateError,
    ResultStatus,
)
from app.services.recommendation import RecommendationInput

NOW = datetime(2024, 1, 1, 18, 20, tzinfo=timezone.utc)
PLACE = Place(place_id="abc", name="Central Park", latitude=40.78, longitude=-73.97)


def _snapshot(**overrides) -> WeatherSnapshot:
    values = dict(
        latitude=40.78,
        longitude=-73.97,
        as_of=datetime(2024, 1, 1, 18, 0, tzinfo=timezone.utc),
        temperature_f=30.4,
        wind_speed_mph=19.5,
        precipitation="light snow",
        icon_code="13n",
    )
    values.update(overrides)
    return WeatherSnapshot(**values)


class FakeForecast:
    def __init__(self, snapshot: WeatherSnapshot | None = None, error: Exception | None = None):
        self.snapshot = snapshot or _snapshot()
        self.error = error
        self.calls = []
        self.controller = None
        self.phase_during_call = None

    async def get_forecast(self, lat, lon, timestamp):
        self.calls.append((lat, lon, timestamp))
        if self.controller is not None:
            self.phase_during_call = self.controller.state.phase
        if self.error is not None:
            raise self.error
        return self.snapshot


class FakeRecommender:
    def __init__(self, text: str = "Wear a warm coat.", error: Exception | None = None):
        self.text = text
        self.error = error
        self.inputs: list[RecommendationInput] = []

    async def __call__(self, data: RecommendationInput) -> str:
        self.inputs.append(data)
        if self.error is not None:
            raise self.error
        return self.text


def _controller(forecast=None, recommender=None, scorer=None) -> FormController:
    return FormController(
        forecast or FakeForecast(),
        recommender=recommender or FakeRecommender(),
        scorer=scorer,
        clock=lambda: NOW,
    )


def _fill(controller: FormController, **skip) -> None:
    if "place" not in skip:
        controller.select_place(PLACE)
    if "venue" not in skip:
        controller.select_venue_type("Outdoor")
    if "time" not in skip:
        controller.select_arrival_time("07:00 PM")
    controller.select_duration(3)
    if "gender" not in skip:
        controller.select_gender(Gender.FEMALE)


@pytest.mark.anyio
async def test_submit_reaches_results_with_score_and_recommendation():
    forecast = FakeForecast()
    recommender = FakeRecommender()
    controller = _controller(forecast, recommender)
    forecast.controller = controller
    _fill(controller)

    state = await controller.submit()

    assert state.phase == FormPhase.RESULTS
    assert forecast.phase_during_call == FormPhase.LOADING
    assert state.error_message is None
    result = state.result
    assert result.status == ResultStatus.COMPLETE
    assert result.score == 10
    assert result.recommendation == "Wear a warm coat."
    # weather is rounded half up before use
    assert result.weather.temperature_f == 30
    assert result.weather.wind_speed_mph == 20
    assert result.outing.forecast_time == datetime(2024, 1, 1, 18, 0, tzinfo=timezone.utc)
    assert forecast.calls == [(40.78, -73.97, result.outing.forecast_time)]


@pytest.mark.anyio
async def test_score_and_recommendation_use_same_weather():
    recommender = FakeRecommender()
    seen = {}

    def scorer(temperature, wind, precipitation, venue):
        seen["score_inputs"] = (temperature, wind, precipitation, venue)
        return 7

    controller = _controller(recommender=recommender, scorer=scorer)
    _fill(controller)

    state = await controller.submit()

    prompt_input = recommender.inputs[0]
    assert seen["score_inputs"] == (
        prompt_input.temperature_f,
        prompt_input.wind_mph,
        prompt_input.precipitation,
        prompt_input.venue_type,
    )
    assert state.result.score == 7
    assert prompt_input.location == "Central Park"
    assert prompt_input.time == "07:00 PM"
    assert prompt_input.duration_hours == 3
    assert prompt_input.gender == "Female"


@pytest.mark.anyio
async def test_prefer_not_to_say_omits_gender_from_prompt():
    recommender = FakeRecommender()
    controller = _controller(recommender=recommender)
    _fill(controller, gender=True)
    controller.select_gender("Prefer Not to Say")

    await controller.submit()

    assert recommender.inputs[0].gender is None


@pytest.mark.anyio
@pytest.mark.parametrize("skip", ["place", "venue", "time", "gender"])
async def test_missing_field_blocks_submission_without_network(skip):
    forecast = FakeForecast()
    recommender = FakeRecommender()
    controller = _controller(forecast, recommender)
    _fill(controller, **{skip: True})

    state = await controller.submit()

    assert state.phase == FormPhase.IDLE
    assert state.error_message == REQUIRED_FIELDS_MESSAGE
    assert state.result is None
    assert forecast.calls == []
    assert recommender.inputs == []


@pytest.mark.anyio
async def test_invalid_time_blocks_submission():
    forecast = FakeForecast()
    controller = _controller(forecast)
    _fill(controller, time=True)
    controller.select_arrival_time("half past noon")

    state = await controller.submit()

    assert state.phase == FormPhase.IDLE
    assert state.error_message == INVALID_TIME_MESSAGE
    assert forecast.calls == []


@pytest.mark.anyio
async def test_forecast_failure_enters_error_without_weather():
    forecast = FakeForecast(error=UpstreamServiceError("city not found", status_code=404))
    recommender = FakeRecommender()
    controller = _controller(forecast, recommender)
    _fill(controller)

    state = await controller.submit()

    assert state.phase == FormPhase.ERROR
    assert state.error_message == "city not found"
    assert state.error_status == 404
    assert state.result is None
    assert recommender.inputs == []


@pytest.mark.anyio
async def test_recommendation_failure_still_shows_score():
    recommender = FakeRecommender(error=UpstreamServiceError("quota exceeded", status_code=429))
    controller = _controller(recommender=recommender)
    _fill(controller)

    state = await controller.submit()

    assert state.phase == FormPhase.RESULTS
    assert state.result.score == 10
    assert state.result.weather.precipitation == "light snow"
    assert state.result.recommendation is None
    assert state.result.recommendation_error == "quota exceeded"
    assert state.result.status == ResultStatus.PARTIAL


@pytest.mark.anyio
async def test_score_failure_still_shows_recommendation():
    def broken_scorer(*args):
        raise ArithmeticError("bad table")

    controller = _controller(scorer=broken_scorer)
    _fill(controller)

    state = await controller.submit()

    assert state.phase == FormPhase.RESULTS
    assert state.result.score is None
    assert state.result.score_error == "bad table"
    assert state.result.recommendation == "Wear a warm coat."
    assert state.result.status == ResultStatus.PARTIAL


@pytest.mark.anyio
async def test_both_failures_leave_weather_only():
    def broken_scorer(*args):
        raise ArithmeticError("bad table")

    recommender = FakeRecommender(error=UpstreamServiceError("down", status_code=503))
    controller = _controller(recommender=recommender, scorer=broken_scorer)
    _fill(controller)

    state = await controller.submit()

    assert state.phase == FormPhase.RESULTS
    assert state.result.status == ResultStatus.WEATHER_ONLY
    assert state.result.weather is not None
    assert state.result.score_error == "bad table"
    assert state.result.recommendation_error == "down"


@pytest.mark.anyio
async def test_resubmission_refused_while_loading():
    controller = _controller()
    resubmissions = []

    class ReentrantForecast(FakeForecast):
        async def get_forecast(self, lat, lon, timestamp):
            resubmissions.append(await controller.submit())
            return await super().get_forecast(lat, lon, timestamp)

    forecast = ReentrantForecast()
    controller.forecast_source = forecast
    _fill(controller)

    state = await controller.submit()

    assert resubmissions[0].phase == FormPhase.LOADING
    assert len(forecast.calls) == 1
    assert state.phase == FormPhase.RESULTS


@pytest.mark.anyio
async def test_edit_returns_to_input_keeping_selections():
    forecast = FakeForecast(error=UpstreamServiceError("boom"))
    controller = _controller(forecast)
    _fill(controller)
    await controller.submit()

    state = controller.edit()

    assert state.phase == FormPhase.IDLE
    assert state.error_message is None
    assert state.selections.place == PLACE
    assert state.selections.venue_type == VenueType.OUTDOOR
    assert state.selections.arrival_time == "07:00 PM"
    assert state.selections.duration_hours == 3


@pytest.mark.anyio
async def test_inputs_locked_outside_input_mode():
    controller = _controller()
    _fill(controller)
    await controller.submit()

    with pytest.raises(FormStateError):
        controller.select_duration(4)
    with pytest.raises(FormStateError):
        await controller.submit()

    controller.edit()
    assert controller.select_duration(4).selections.duration_hours == 4


@pytest.mark.anyio
async def test_selecting_place_clears_validation_error():
    controller = _controller()

    state = await controller.submit()
    assert state.error_message == REQUIRED_FIELDS_MESSAGE

    state = controller.select_place(PLACE)
    assert state.error_message is None


@pytest.mark.parametrize("hours", [0, 13, -1])
def test_duration_out_of_range_rejected(hours):
    with pytest.raises(ValueError):
        _controller().select_duration(hours)


def test_unknown_venue_rejected():
    with pytest.raises(ValueError):
        _controller().select_venue_type("Rooftop")


def test_arrival_choices_follow_clock():
    choices = _controller().arrival_choices()

    assert choices[0] == "06:00 PM"
    assert len(choices) == 12


@pytest.mark.anyio
async def test_unexpected_recommendation_error_keeps_score():
    recommender = FakeRecommender(error=RuntimeError("unexpected response shape"))
    controller = _controller(recommender=recommender)
    _fill(controller)

    state = await controller.submit()

    assert state.phase == FormPhase.RESULTS
    assert state.result.status == ResultStatus.PARTIAL
    assert state.result.score == 10
    assert state.result.recommendation is None
    assert state.result.recommendation_error == RECOMMENDATION_ERROR_MESSAGE
