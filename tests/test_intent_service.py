"""Tests for intent dispatch and speech phrasing."""

import pytest

from tram_skill.models.errors import InvalidLeadTime
from tram_skill.services.intent_service import (
    IntentDispatcher,
    IntentRequestData,
    parse_lead_time,
)
from tram_skill.services.itinerary_service import ItineraryEngine
from tram_skill.services.preference_store import InMemoryPreferenceStore
from tram_skill.services.schedule_service import ScheduleResult

CALLER = "amzn1.ask.account.TEST"


@pytest.fixture
def dispatcher(engine: ItineraryEngine) -> IntentDispatcher:
    return IntentDispatcher(engine)


def _intent(name: str, **slots: str | None) -> IntentRequestData:
    return IntentRequestData(name=name, caller_id=CALLER, slots=slots)


class TestParseLeadTime:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("PT10M", 10),
            ("PT1H5M", 65),
            ("PT90S", 2),
            ("pt5m", 5),
            ("00:10", 10),
            ("1:30", 90),
            ("15", 15),
            ("PT0M", 0),
        ],
    )
    def test_valid(self, value: str, expected: int) -> None:
        assert parse_lead_time(value) == expected

    @pytest.mark.parametrize(
        "value",
        ["PT", "P", "dix minutes", "10m", "-5", "²", "٣", "9" * 5000, "PT" + "9" * 5000 + "M"],
    )
    def test_invalid(self, value: str) -> None:
        with pytest.raises(InvalidLeadTime):
            parse_lead_time(value)


class TestLeaveTimeIntent:
    async def test_explicit_stops(self, dispatcher: IntentDispatcher, gateway) -> None:
        gateway.result = ScheduleResult.departure(12)

        outcome = await dispatcher.handle(
            _intent("LeaveTimeIntent", depart="CentralStation", destination="Airport")
        )

        assert outcome.success
        assert "12 minutes" in outcome.text
        assert "CentralStation" in outcome.text
        assert "Airport" in outcome.text
        assert not outcome.end_session

    async def test_default_departure_with_lead(
        self, dispatcher: IntentDispatcher, store: InMemoryPreferenceStore, gateway
    ) -> None:
        store.set_departure(CALLER, 1, 10)
        gateway.result = ScheduleResult.departure(15)

        outcome = await dispatcher.handle(_intent("LeaveTimeIntent", destination="Airport"))

        assert outcome.success
        assert "15 minutes" in outcome.text
        assert "partir dans 5 minutes" in outcome.text

    async def test_lead_equal_says_leave_now(
        self, dispatcher: IntentDispatcher, store: InMemoryPreferenceStore, gateway
    ) -> None:
        store.set_departure(CALLER, 1, 10)
        gateway.result = ScheduleResult.departure(10)

        outcome = await dispatcher.handle(_intent("LeaveTimeIntent", destination="Airport"))

        assert "partir maintenant" in outcome.text

    async def test_missing_departure(self, dispatcher: IntentDispatcher, gateway) -> None:
        outcome = await dispatcher.handle(
            _intent("LeaveTimeIntent", depart=None, destination="Airport")
        )

        assert not outcome.success
        assert "départ manquant" in outcome.text
        assert gateway.calls == []

    async def test_blank_slot_is_missing(self, dispatcher: IntentDispatcher) -> None:
        outcome = await dispatcher.handle(
            _intent("LeaveTimeIntent", depart="  ", destination="Airport")
        )

        assert not outcome.success

    async def test_no_departure_differs_from_failures(
        self, dispatcher: IntentDispatcher, gateway
    ) -> None:
        intent = _intent("LeaveTimeIntent", depart="CentralStation", destination="Airport")

        gateway.result = ScheduleResult.no_departure()
        no_departure = await dispatcher.handle(intent)
        gateway.result = ScheduleResult.network_failure("timeout")
        network = await dispatcher.handle(intent)
        gateway.result = ScheduleResult.unavailable("bad page")
        unavailable = await dispatcher.handle(intent)

        assert no_departure.success
        assert "pas de prochain tram" in no_departure.text
        assert not network.success
        assert not unavailable.success
        assert len({no_departure.text, network.text, unavailable.text}) == 3

    async def test_one_minute_is_singular(self, dispatcher: IntentDispatcher, gateway) -> None:
        gateway.result = ScheduleResult.departure(1)

        outcome = await dispatcher.handle(
            _intent("LeaveTimeIntent", depart="Museum", destination="Stadium")
        )

        assert "dans 1 minute." in outcome.text


class TestPreferenceIntents:
    async def test_set_default_departure(
        self, dispatcher: IntentDispatcher, store: InMemoryPreferenceStore
    ) -> None:
        outcome = await dispatcher.handle(
            _intent("SetDefaultDeparture", depart="CentralStation", temps="PT10M")
        )

        assert outcome.success
        assert "CentralStation" in outcome.text
        assert "10 minutes" in outcome.text
        departure = store.get_departure(CALLER)
        assert (departure.stop_id, departure.lead_minutes) == (1, 10)

    async def test_set_default_departure_without_lead(
        self, dispatcher: IntentDispatcher, store: InMemoryPreferenceStore
    ) -> None:
        await dispatcher.handle(_intent("SetDefaultDeparture", depart="Museum"))

        assert store.get_departure(CALLER).lead_minutes == 0

    async def test_set_default_departure_requires_slot(
        self, dispatcher: IntentDispatcher, store: InMemoryPreferenceStore
    ) -> None:
        outcome = await dispatcher.handle(_intent("SetDefaultDeparture"))

        assert not outcome.success
        assert store.get_departure(CALLER) is None

    async def test_invalid_lead_time(
        self, dispatcher: IntentDispatcher, store: InMemoryPreferenceStore
    ) -> None:
        outcome = await dispatcher.handle(
            _intent("SetDefaultDeparture", depart="Museum", temps="bientôt")
        )

        assert not outcome.success
        assert "bientôt" in outcome.text
        assert store.get_departure(CALLER) is None

    async def test_non_ascii_digit_lead_time(
        self, dispatcher: IntentDispatcher, store: InMemoryPreferenceStore
    ) -> None:
        outcome = await dispatcher.handle(
            _intent("SetDefaultDeparture", depart="Museum", temps="²")
        )

        assert not outcome.success
        assert "²" in outcome.text
        assert store.get_departure(CALLER) is None

    async def test_set_default_destination(
        self, dispatcher: IntentDispatcher, store: InMemoryPreferenceStore
    ) -> None:
        outcome = await dispatcher.handle(_intent("SetDefaultDestination", destination="Harbor"))

        assert outcome.success
        assert "Harbour" in outcome.text
        assert store.get_destination(CALLER) == 4

    async def test_clear_defaults(
        self, dispatcher: IntentDispatcher, store: InMemoryPreferenceStore
    ) -> None:
        store.set_departure(CALLER, 1, 5)
        store.set_destination(CALLER, 3)

        outcome = await dispatcher.handle(_intent("ClearDefaults"))

        assert outcome.success
        assert len(store) == 0

    async def test_defaults_then_query(self, dispatcher: IntentDispatcher, gateway) -> None:
        await dispatcher.handle(_intent("SetDefaultDeparture", depart="Museum", temps="PT3M"))
        await dispatcher.handle(_intent("SetDefaultDestination", destination="Stadium"))
        gateway.result = ScheduleResult.departure(8)

        outcome = await dispatcher.handle(_intent("LeaveTimeIntent"))

        assert outcome.success
        assert "partir dans 5 minutes" in outcome.text


class TestBuiltInIntents:
    async def test_help(self, dispatcher: IntentDispatcher) -> None:
        outcome = await dispatcher.handle(_intent("AMAZON.HelpIntent"))

        assert outcome.success
        assert not outcome.end_session

    @pytest.mark.parametrize("name", ["AMAZON.StopIntent", "AMAZON.CancelIntent"])
    async def test_stop_ends_session(self, dispatcher: IntentDispatcher, name: str) -> None:
        outcome = await dispatcher.handle(_intent(name))

        assert outcome.end_session

    async def test_unsupported_intent(self, dispatcher: IntentDispatcher) -> None:
        outcome = await dispatcher.handle(_intent("OrderPizzaIntent"))

        assert not outcome.success
        assert outcome.text.startswith("Désolé")
