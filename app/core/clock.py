"""Calendar clock: the only place the availability code learns what "now" is."""

from dataclasses import dataclass
from datetime import UTC, date, datetime, time
from zoneinfo import ZoneInfo


@dataclass(frozen=True)
class CivilMoment:
    """A civil date and minute-precision time of day, no timezone attached."""

    date: date
    time: time

    def as_datetime(self) -> datetime:
        return datetime.combine(self.date, self.time)

    @classmethod
    def from_datetime(cls, dt: datetime) -> "CivilMoment":
        return cls(date=dt.date(), time=time(dt.hour, dt.minute))


class SystemClock:
    """Reads the system clock and normalizes it to the organization's timezone once."""

    def __init__(self, timezone_name: str) -> None:
        self.tz = ZoneInfo(timezone_name)

    def now(self) -> CivilMoment:
        local = datetime.now(UTC).astimezone(self.tz)
        return CivilMoment.from_datetime(local.replace(tzinfo=None))


class FixedClock:
    def __init__(self, moment: CivilMoment | datetime) -> None:
        if isinstance(moment, datetime):
            moment = CivilMoment.from_datetime(moment)
        self.moment = moment

    def now(self) -> CivilMoment:
        return self.moment
