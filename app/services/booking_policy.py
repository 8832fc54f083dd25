"""Role-aware booking window rules.

standard   (patients, or any role booking under patient rules): same-day slots are
           always blocked; other slots need at least ``minimum_lead_time`` between
           now and the slot start, boundary inclusive.
privileged (admin, staff, doctor, superadmin): any slot strictly after now.

Both rules also honour the organization settings: booking horizon, weekend gate and
the time-of-day booking window.
"""

import logging
from dataclasses import dataclass, replace
from datetime import time, timedelta

from app.core.clock import CivilMoment
from app.services.civil_time import is_weekend
from app.services.domain import AppliedRule, Role, Slot

logger = logging.getLogger(__name__)

REASON_SAME_DAY = "same_day_blocked"
REASON_LEAD_TIME = "lead_time"
REASON_PAST = "past"
REASON_HORIZON = "beyond_booking_horizon"
REASON_WEEKEND = "weekend_disabled"
REASON_OUTSIDE_WINDOW = "outside_booking_window"

DEFAULT_MINIMUM_LEAD_TIME = timedelta(hours=24)


@dataclass(frozen=True)
class SlotDecision:
    available: bool
    applied_rule: AppliedRule
    reason: str | None = None


def select_rule(role: Role | str, override_to_standard_rules: bool = False) -> AppliedRule:
    """Pick the rule for an actor. Unknown roles raise UnknownRole, never default to privileged."""
    parsed = Role.parse(role)
    if parsed.is_privileged and not override_to_standard_rules:
        return AppliedRule.PRIVILEGED
    return AppliedRule.STANDARD


class BookingWindowPolicy:
    def __init__(
        self,
        minimum_lead_time: timedelta = DEFAULT_MINIMUM_LEAD_TIME,
        max_advance_days: int | None = None,
        weekend_booking_enabled: bool = True,
        booking_window: tuple[time, time] | None = None,
    ) -> None:
        self.minimum_lead_time = minimum_lead_time
        self.max_advance_days = max_advance_days
        self.weekend_booking_enabled = weekend_booking_enabled
        self.booking_window = booking_window

    def _organization_reason(self, slot: Slot, now: CivilMoment) -> str | None:
        if self.max_advance_days is not None and slot.date > now.date + timedelta(days=self.max_advance_days):
            return REASON_HORIZON
        if not self.weekend_booking_enabled and is_weekend(slot.date):
            return REASON_WEEKEND
        if self.booking_window is not None:
            window_start, window_end = self.booking_window
            # both ends inclusive, checked against the slot start only
            if not window_start <= slot.start_time <= window_end:
                return REASON_OUTSIDE_WINDOW
        return None

    def _standard_reason(self, slot: Slot, now: CivilMoment) -> str | None:
        if slot.date == now.date:
            return REASON_SAME_DAY
        lead = slot.start - now.as_datetime()
        if lead <= timedelta(0):
            return REASON_PAST
        # timedelta comparison is exact integer arithmetic; equality is bookable
        if lead < self.minimum_lead_time:
            return REASON_LEAD_TIME
        return None

    @staticmethod
    def _privileged_reason(slot: Slot, now: CivilMoment) -> str | None:
        if slot.start > now.as_datetime():
            return None
        return REASON_PAST

    def evaluate(
        self,
        slot: Slot,
        now: CivilMoment,
        role: Role | str,
        override_to_standard_rules: bool = False,
    ) -> SlotDecision:
        rule = select_rule(role, override_to_standard_rules)
        if not slot.available:
            return SlotDecision(False, rule, slot.reason)
        if rule is AppliedRule.PRIVILEGED:
            reason = self._privileged_reason(slot, now)
        else:
            reason = self._standard_reason(slot, now)
        if reason is None:
            reason = self._organization_reason(slot, now)
        return SlotDecision(reason is None, rule, reason)

    def apply(
        self,
        slots: list[Slot],
        now: CivilMoment,
        role: Role | str,
        override_to_standard_rules: bool = False,
    ) -> tuple[list[Slot], AppliedRule]:
        """Return the slots with ``available``/``reason`` updated, plus the rule used."""
        rule = select_rule(role, override_to_standard_rules)
        out: list[Slot] = []
        for slot in slots:
            decision = self.evaluate(slot, now, role, override_to_standard_rules)
            if decision.available == slot.available and decision.reason == slot.reason:
                out.append(slot)
            else:
                out.append(replace(slot, available=decision.available, reason=decision.reason))
        logger.debug("Booking window: role=%s rule=%s now=%s %s", Role.parse(role).value, rule.value, now.date, now.time)
        return out, rule
