"""
Planning session service.

Handles: plan via the provider, store request and bundle, apply selection
changes as whole-state transitions, derive live costs, finalize and end.
"""

from pydantic import BaseModel

from itinerary_planner.data.models import (
    CostSummary,
    FinalSelection,
    Itinerary,
    ItineraryBundle,
    SelectionState,
    TripRequest,
)
from itinerary_planner.data.session_store import SessionKey, SessionStore
from itinerary_planner.engine.recalculation import (
    apply_summary,
    recalculate_for,
    selected_activities,
)
from itinerary_planner.services.providers import ItineraryProvider
from itinerary_planner.utils.error_handling import ResourceNotFoundError
from itinerary_planner.utils.helpers import generate_session_id
from itinerary_planner.utils.logging import get_logger

logger = get_logger(__name__)


class SessionSnapshot(BaseModel):
    """What a caller sees after each session operation."""

    session_id: str
    selection: SelectionState
    summary: CostSummary


class SessionService:
    """Owns the lifecycle of planning sessions."""

    def __init__(self, store: SessionStore, provider: ItineraryProvider):
        self.store = store
        self.provider = provider

    async def start(
        self, request: TripRequest, session_id: str | None = None
    ) -> tuple[ItineraryBundle, SessionSnapshot]:
        """
        Plan a trip and open a session for it.

        The default selection is the first itinerary with its first hotel and
        commute option and activities as generated. Nothing is stored if
        planning fails.
        """
        bundle = await self.provider.provide(request)
        session_id = session_id or generate_session_id()
        selection = SelectionState.default_for(bundle.itineraries[0])

        self.store.save(session_id, SessionKey.REQUEST, request)
        self.store.save(session_id, SessionKey.BUNDLE, bundle)
        self.store.save(session_id, SessionKey.SELECTION, selection)
        logger.info(f"Started session {session_id} for {request.destination}")

        return bundle, self._snapshot(session_id, request, bundle, selection)

    def select_itinerary(self, session_id: str, itinerary_id: str) -> SessionSnapshot:
        """Switch itinerary; selections reset to that itinerary's defaults."""
        bundle = self._bundle(session_id)
        itinerary = bundle.get_itinerary(itinerary_id)
        if itinerary is None:
            raise ResourceNotFoundError(
                f"Itinerary '{itinerary_id}' not found in session {session_id}"
            )
        return self._transition(session_id, SelectionState.default_for(itinerary))

    def select_hotel(self, session_id: str, hotel_id: str | None) -> SessionSnapshot:
        selection = self._selection(session_id)
        return self._transition(session_id, selection.with_hotel(hotel_id))

    def select_commute(
        self, session_id: str, commute_id: str | None
    ) -> SessionSnapshot:
        selection = self._selection(session_id)
        return self._transition(session_id, selection.with_commute(commute_id))

    def toggle_activity(self, session_id: str, activity_id: str) -> SessionSnapshot:
        """Flip one activity's effective selection."""
        selection = self._selection(session_id)
        activity = self._activity(session_id, selection, activity_id)
        current = selection.activity_selections.get(activity_id, activity.selected)
        return self._transition(
            session_id, selection.with_activity(activity_id, not current)
        )

    def set_activity(
        self, session_id: str, activity_id: str, selected: bool
    ) -> SessionSnapshot:
        selection = self._selection(session_id)
        self._activity(session_id, selection, activity_id)
        return self._transition(
            session_id, selection.with_activity(activity_id, selected)
        )

    def summary(self, session_id: str) -> CostSummary:
        """Live cost summary for the current selections."""
        request = self._request(session_id)
        selection = self._selection(session_id)
        itinerary = self._current_itinerary(session_id, selection)
        return recalculate_for(
            itinerary, selection, request.duration_days, request.budget
        )

    def finalize(self, session_id: str) -> FinalSelection:
        """Freeze the current selections into a FinalSelection and store it."""
        request = self._request(session_id)
        selection = self._selection(session_id)
        itinerary = self._current_itinerary(session_id, selection)
        summary = recalculate_for(
            itinerary, selection, request.duration_days, request.budget
        )

        final = FinalSelection(
            request=request,
            itinerary=apply_summary(itinerary, summary),
            hotel=itinerary.find_hotel(selection.hotel_id),
            commute=itinerary.find_commute(selection.commute_id),
            selected_activities=selected_activities(
                itinerary, selection.activity_selections
            ),
            summary=summary,
        )
        self.store.save(session_id, SessionKey.FINAL, final)
        logger.info(f"Finalized session {session_id} with itinerary {itinerary.id}")
        return final

    def end(self, session_id: str) -> None:
        """Discard every record of the session."""
        self.store.clear(session_id)
        logger.info(f"Ended session {session_id}")

    # --- Helpers ---

    def _load(self, session_id: str, key: SessionKey):
        value = self.store.load(session_id, key)
        if value is None:
            raise ResourceNotFoundError(
                f"Session {session_id} has no {key.value.lower()} record"
            )
        return value

    def _request(self, session_id: str) -> TripRequest:
        return self._load(session_id, SessionKey.REQUEST)

    def _bundle(self, session_id: str) -> ItineraryBundle:
        return self._load(session_id, SessionKey.BUNDLE)

    def _selection(self, session_id: str) -> SelectionState:
        return self._load(session_id, SessionKey.SELECTION)

    def _current_itinerary(
        self, session_id: str, selection: SelectionState
    ) -> Itinerary:
        itinerary = self._bundle(session_id).get_itinerary(selection.itinerary_id)
        if itinerary is None:
            raise ResourceNotFoundError(
                f"Itinerary '{selection.itinerary_id}' not found in session {session_id}"
            )
        return itinerary

    def _activity(self, session_id: str, selection: SelectionState, activity_id: str):
        activity = self._current_itinerary(session_id, selection).find_activity(
            activity_id
        )
        if activity is None:
            raise ResourceNotFoundError(
                f"Activity '{activity_id}' not found in itinerary "
                f"'{selection.itinerary_id}'"
            )
        return activity

    def _transition(self, session_id: str, selection: SelectionState) -> SessionSnapshot:
        request = self._request(session_id)
        bundle = self._bundle(session_id)
        self.store.save(session_id, SessionKey.SELECTION, selection)
        return self._snapshot(session_id, request, bundle, selection)

    @staticmethod
    def _snapshot(
        session_id: str,
        request: TripRequest,
        bundle: ItineraryBundle,
        selection: SelectionState,
    ) -> SessionSnapshot:
        itinerary = bundle.get_itinerary(selection.itinerary_id)
        summary = recalculate_for(
            itinerary, selection, request.duration_days, request.budget
        )
        return SessionSnapshot(session_id=session_id, selection=selection, summary=summary)
