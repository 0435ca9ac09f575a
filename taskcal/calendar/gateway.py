"""Host calendar gateways.

``CalendarGateway`` is the contract the sync engine talks to.
``EventKitCalendarGateway`` implements it for Apple Calendar via PyObjC.
"""

import abc
import threading
import time
from datetime import date, datetime
from typing import List, Optional
import logging

from ..core.exceptions import (
    BindingUnavailableError,
    CalendarError,
    CalendarWriteError,
    EventNotFoundError,
    PermissionDeniedError,
)
from ..core.models import (
    CalendarEvent,
    CalendarInfo,
    EventDetails,
    PermissionStatus,
    RecurrenceFrequency,
)
from ..utils.date import combine_local, local_timezone


class CalendarGateway(abc.ABC):
    """Operations the sync engine needs from a host calendar store."""

    @abc.abstractmethod
    def check_permission(self) -> PermissionStatus:
        """Return the current authorization status without prompting."""

    @abc.abstractmethod
    def request_permission(self) -> PermissionStatus:
        """Ask the user for calendar access and return the resulting status."""

    @abc.abstractmethod
    def save_event(self, title: str, details: EventDetails) -> str:
        """Write one event and return its host identifier."""

    @abc.abstractmethod
    def remove_event(self, event_id: str) -> None:
        """Delete an event by identifier."""

    @abc.abstractmethod
    def find_event_by_id(self, event_id: str) -> Optional[CalendarEvent]:
        """Look up an event; None when it does not exist."""

    @abc.abstractmethod
    def find_calendars(self) -> List[CalendarInfo]:
        """List the calendars available for events."""


# EKAuthorizationStatus raw values
_STATUS_MAP = {
    0: PermissionStatus.UNDETERMINED,
    1: PermissionStatus.RESTRICTED,
    2: PermissionStatus.DENIED,
    3: PermissionStatus.AUTHORIZED,  # Authorized / FullAccess (macOS 14+)
    4: PermissionStatus.DENIED,      # WriteOnly cannot read events back
}

# EKRecurrenceFrequency raw values
_FREQUENCY_MAP = {
    RecurrenceFrequency.DAILY: 0,
    RecurrenceFrequency.WEEKLY: 1,
    RecurrenceFrequency.MONTHLY: 2,
    RecurrenceFrequency.YEARLY: 3,
}

# EKSpan raw values
_SPAN_THIS_EVENT = 0
_SPAN_FUTURE_EVENTS = 1


class EventKitCalendarGateway(CalendarGateway):
    """Gateway for Apple Calendar via EventKit."""

    PERMISSION_TIMEOUT = 30  # seconds

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self._store = None
        self._loaded = False

    def _ensure_eventkit(self):
        """Import EventKit with specific error handling."""
        if self._loaded:
            return
        try:
            from EventKit import (
                EKAlarm, EKEvent, EKEventStore, EKEntityTypeEvent,
                EKRecurrenceEnd, EKRecurrenceRule
            )
            from Foundation import NSRunLoop, NSDate
        except ImportError as e:
            self.logger.error(f"EventKit import failed: {e}")
            raise BindingUnavailableError(
                "EventKit not available. Please install PyObjC framework:\n"
                "  pip install pyobjc-framework-EventKit\n"
                f"Import error details: {e}"
            )

        self._EKAlarm = EKAlarm
        self._EKEvent = EKEvent
        self._EKEventStore = EKEventStore
        self._EKEntityTypeEvent = EKEntityTypeEvent
        self._EKRecurrenceEnd = EKRecurrenceEnd
        self._EKRecurrenceRule = EKRecurrenceRule
        self._NSRunLoop = NSRunLoop
        self._NSDate = NSDate
        self._loaded = True

    def _get_store(self):
        """Get or create the EventKit store."""
        if self._store is not None:
            return self._store

        self._ensure_eventkit()
        try:
            self._store = self._EKEventStore.alloc().init()
            self.logger.debug("EventKit store created successfully")
        except Exception as e:
            self.logger.error(f"Failed to create EventKit store: {e}")
            raise BindingUnavailableError(f"Failed to initialize EventKit store: {e}")
        return self._store

    # ------------------------------------------------------------------
    # Permissions
    # ------------------------------------------------------------------
    def check_permission(self) -> PermissionStatus:
        self._ensure_eventkit()
        status = self._EKEventStore.authorizationStatusForEntityType_(self._EKEntityTypeEvent)
        result = _STATUS_MAP.get(int(status), PermissionStatus.UNDETERMINED)
        self.logger.debug(f"EventKit calendar authorization status: {int(status)} ({result.value})")
        return result

    def request_permission(self) -> PermissionStatus:
        store = self._get_store()

        done = threading.Event()
        result = {'granted': False, 'error': None}

        def completion(granted, error):
            result['granted'] = bool(granted)
            result['error'] = error
            done.set()

        self.logger.info("Requesting EventKit authorization for calendars...")
        if hasattr(store, 'requestFullAccessToEventsWithCompletion_'):
            store.requestFullAccessToEventsWithCompletion_(completion)
        else:
            store.requestAccessToEntityType_completion_(self._EKEntityTypeEvent, completion)

        start_time = time.time()
        while not done.is_set():
            if time.time() - start_time > self.PERMISSION_TIMEOUT:
                raise PermissionDeniedError(
                    f"Authorization request timed out after {self.PERMISSION_TIMEOUT} seconds.\n"
                    "The system may be showing an authorization dialog."
                )
            self._NSRunLoop.currentRunLoop().runUntilDate_(
                self._NSDate.dateWithTimeIntervalSinceNow_(0.1)
            )

        if result['error'] is not None:
            self.logger.warning(f"Authorization request reported: {result['error']}")

        if result['granted']:
            self.logger.info("EventKit calendar authorization granted")
            return PermissionStatus.AUTHORIZED
        return self.check_permission()

    # ------------------------------------------------------------------
    # Conversions
    # ------------------------------------------------------------------
    def _ns_date(self, value: datetime):
        return self._NSDate.dateWithTimeIntervalSince1970_(value.timestamp())

    def _py_datetime(self, ns_date) -> Optional[datetime]:
        if ns_date is None:
            return None
        return datetime.fromtimestamp(ns_date.timeIntervalSince1970(), tz=local_timezone())

    def _recurrence_rule(self, details: EventDetails):
        """Build the EKRecurrenceRule for a write, or None for one-off events."""
        if details.recurrence is None:
            return None

        frequency = details.recurrence
        interval = 1
        end = None

        # The richer rule wins when present
        if details.recurrence_rule is not None:
            frequency = details.recurrence_rule.frequency
            interval = max(1, int(details.recurrence_rule.interval))
            end_date: Optional[date] = details.recurrence_rule.end_date
            if end_date is not None:
                end = self._EKRecurrenceEnd.recurrenceEndWithEndDate_(
                    self._ns_date(combine_local(end_date, 23, 59))
                )

        return self._EKRecurrenceRule.alloc().initRecurrenceWithFrequency_interval_end_(
            _FREQUENCY_MAP[frequency], interval, end
        )

    def _to_calendar_event(self, event) -> CalendarEvent:
        cal = event.calendar()
        return CalendarEvent(
            event_id=str(event.eventIdentifier()),
            title=str(event.title() or 'Untitled'),
            start_time=self._py_datetime(event.startDate()),
            end_time=self._py_datetime(event.endDate()),
            location=str(event.location()) if event.location() else None,
            notes=str(event.notes()) if event.notes() else None,
            is_all_day=bool(event.isAllDay()),
            calendar_name=str(cal.title()) if cal else 'Unknown',
        )

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def save_event(self, title: str, details: EventDetails) -> str:
        store = self._get_store()

        try:
            event = self._EKEvent.eventWithEventStore_(store)
            event.setTitle_(title)
            event.setStartDate_(self._ns_date(details.start_date))
            event.setEndDate_(self._ns_date(details.end_date))
            event.setNotes_(details.notes or None)
            event.setAllDay_(bool(details.all_day))

            if details.calendar_id:
                calendar = store.calendarWithIdentifier_(details.calendar_id)
                if calendar is None:
                    raise CalendarWriteError(
                        f"Calendar with ID '{details.calendar_id}' not found among available calendars"
                    )
            else:
                calendar = store.defaultCalendarForNewEvents()
            event.setCalendar_(calendar)

            for alarm in details.alarms or []:
                event.addAlarm_(self._EKAlarm.alarmWithRelativeOffset_(alarm.offset_minutes * 60))

            rule = self._recurrence_rule(details)
            if rule is not None:
                event.addRecurrenceRule_(rule)

            success, error = store.saveEvent_span_commit_error_(event, _SPAN_THIS_EVENT, True, None)
        except CalendarError:
            raise
        except Exception as e:
            raise CalendarWriteError(f"Failed to save event '{title}': {e}")

        self.logger.debug(f"saveEvent result: success={success}, error={error}")
        if not success:
            raise CalendarWriteError(f"Failed to save event '{title}': error={error}")

        event_id = str(event.eventIdentifier() or '')
        if not event_id:
            raise CalendarWriteError(f"EventKit returned no identifier for '{title}'")
        return event_id

    def remove_event(self, event_id: str) -> None:
        store = self._get_store()

        event = store.eventWithIdentifier_(event_id)
        if event is None:
            raise EventNotFoundError(f"Event '{event_id}' not found")

        try:
            success, error = store.removeEvent_span_commit_error_(
                event, _SPAN_FUTURE_EVENTS, True, None
            )
        except Exception as e:
            raise CalendarWriteError(f"Failed to remove event '{event_id}': {e}")

        if not success:
            raise CalendarWriteError(f"Failed to remove event '{event_id}': error={error}")

    def find_event_by_id(self, event_id: str) -> Optional[CalendarEvent]:
        store = self._get_store()
        event = store.eventWithIdentifier_(event_id)
        if event is None:
            return None
        return self._to_calendar_event(event)

    def find_calendars(self) -> List[CalendarInfo]:
        store = self._get_store()

        result = []
        for cal in store.calendarsForEntityType_(self._EKEntityTypeEvent) or []:
            try:
                source = cal.source()
                result.append(CalendarInfo(
                    identifier=str(cal.calendarIdentifier()),
                    title=str(cal.title() or 'Untitled'),
                    source=str(source.title()) if source is not None else None,
                    allows_modifications=bool(cal.allowsContentModifications()),
                ))
            except Exception as e:
                self.logger.warning(f"Failed to process calendar: {e}")
                continue
        return result
