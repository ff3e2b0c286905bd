"""Historical data provider backed by CSV exports loaded with pandas."""
from __future__ import annotations

from datetime import date, datetime
from pathlib import Path
from typing import Any, Mapping, Optional

import pandas as pd

from src.core.entities import PermittedEvent, StationRidership, StreetAccidentCount, WeatherRecord
from src.core.errors import ProviderError
from src.utils.logger import logger

WEATHER_COLUMNS = {"date"}
ACCIDENT_COLUMNS = {"crash_date", "on_street_name"}
RIDERSHIP_COLUMNS = {"transit_date", "station_complex", "ridership"}
EVENT_COLUMNS = {"event_name", "event_type", "event_borough", "start_date_time", "end_date_time"}


def load_csv(csv_path: Path, required_columns: set[str]) -> pd.DataFrame:
    """Load ``csv_path`` and make sure it carries ``required_columns``."""

    csv_path = Path(csv_path)
    if not csv_path.exists():
        raise FileNotFoundError(f"Dataset not found: {csv_path}")

    data = pd.read_csv(csv_path)
    missing = required_columns - set(data.columns)
    if missing:
        raise ValueError(f"Dataset {csv_path.name} is missing required columns: " + ", ".join(sorted(missing)))
    logger.info("Loaded {} rows from {}", len(data), csv_path)
    return data


def _empty(columns: set[str]) -> pd.DataFrame:
    return pd.DataFrame({column: [] for column in sorted(columns)})


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "y"}
    if pd.isna(value):
        return False
    return bool(value)


def _as_text(value: Any) -> str:
    if value is None or pd.isna(value):
        return ""
    return str(value)


def _as_float(value: Any) -> Optional[float]:
    if value is None or pd.isna(value):
        return None
    return float(value)


class CsvHistoricalDataProvider:
    """Answer historical queries from in-memory DataFrames.

    Date columns are parsed once at construction; all ranges are inclusive on
    both ends and compared at day resolution.
    """

    def __init__(
        self,
        weather: pd.DataFrame | None = None,
        accidents: pd.DataFrame | None = None,
        ridership: pd.DataFrame | None = None,
        events: pd.DataFrame | None = None,
    ) -> None:
        self._weather = self._with_day(weather if weather is not None else _empty(WEATHER_COLUMNS), "date")
        self._accidents = self._with_day(
            accidents if accidents is not None else _empty(ACCIDENT_COLUMNS), "crash_date"
        )
        self._ridership = self._with_day(
            ridership if ridership is not None else _empty(RIDERSHIP_COLUMNS), "transit_date"
        )
        events = (events if events is not None else _empty(EVENT_COLUMNS)).copy()
        events["_start"] = pd.to_datetime(events["start_date_time"], errors="coerce")
        events["_end"] = pd.to_datetime(events["end_date_time"], errors="coerce")
        self._events = events

    @classmethod
    def from_paths(cls, paths: Mapping[str, str]) -> "CsvHistoricalDataProvider":
        """Build the provider from the ``paths`` section of the configuration."""

        def _optional(key: str, columns: set[str]) -> pd.DataFrame | None:
            value = paths.get(key)
            if not value:
                logger.warning("No path configured for '{}' history; treating it as empty", key)
                return None
            try:
                return load_csv(Path(value), columns)
            except (FileNotFoundError, ValueError) as error:
                raise ProviderError("csv", str(error)) from error

        return cls(
            weather=_optional("weather", WEATHER_COLUMNS),
            accidents=_optional("accidents", ACCIDENT_COLUMNS),
            ridership=_optional("subway_ridership", RIDERSHIP_COLUMNS),
            events=_optional("permitted_events", EVENT_COLUMNS),
        )

    @staticmethod
    def _with_day(frame: pd.DataFrame, column: str) -> pd.DataFrame:
        frame = frame.copy()
        frame["_day"] = pd.to_datetime(frame[column], errors="coerce").dt.normalize()
        return frame

    @staticmethod
    def _between(frame: pd.DataFrame, start: date, end: date) -> pd.DataFrame:
        days = frame["_day"]
        return frame[(days >= pd.Timestamp(start)) & (days <= pd.Timestamp(end))]

    def find_weather_by_date(self, day: date) -> Optional[WeatherRecord]:
        rows = self._weather[self._weather["_day"] == pd.Timestamp(day)]
        if rows.empty:
            return None
        row = rows.iloc[0]
        return WeatherRecord(
            date=day,
            snow=_as_float(row.get("snow")),
            has_icing_risk=_as_bool(row.get("has_icing_risk", False)),
            is_severe_weather=_as_bool(row.get("is_severe_weather", False)),
            description=_as_text(row.get("description")),
        )

    def find_accidents_in_range(self, start: date, end: date) -> list[dict[str, Any]]:
        rows = self._between(self._accidents, start, end)
        return rows.drop(columns=["_day"]).to_dict("records")

    def count_accidents_by_street(self, start: date, end: date) -> list[StreetAccidentCount]:
        rows = self._between(self._accidents, start, end)
        streets = rows["on_street_name"].dropna().astype(str).str.strip()
        counts = streets[streets != ""].value_counts().sort_values(ascending=False)
        return [StreetAccidentCount(street=str(street), count=int(count)) for street, count in counts.items()]

    def find_high_density_stations(self, start: date, end: date, floor: int) -> list[StationRidership]:
        rows = self._between(self._ridership, start, end)
        rows = rows[pd.to_numeric(rows["ridership"], errors="coerce") > floor]
        if rows.empty:
            return []

        rows = rows.assign(ridership=pd.to_numeric(rows["ridership"], errors="coerce"))
        peaks = rows.sort_values("ridership", ascending=False).drop_duplicates("station_complex")
        return [
            StationRidership(
                station_complex=str(row["station_complex"]),
                ridership=int(row["ridership"]),
                latitude=_as_float(row.get("latitude")),
                longitude=_as_float(row.get("longitude")),
            )
            for _, row in peaks.iterrows()
        ]

    def find_events_by_borough_and_range(self, borough: str, start: date, end: date) -> list[PermittedEvent]:
        events = self._events
        borough_mask = events["event_borough"].astype(str).str.strip().str.lower() == borough.strip().lower()
        starts = events["_start"].dt.normalize()
        ends = events["_end"].dt.normalize().fillna(starts)
        overlap = (starts <= pd.Timestamp(end)) & (ends >= pd.Timestamp(start))
        rows = events[borough_mask & overlap]
        return [
            PermittedEvent(
                event_name=str(row["event_name"]),
                event_type=str(row["event_type"]),
                impact_level=_as_text(row.get("impact_level")),
                borough=str(row["event_borough"]),
                start=_to_datetime(row["_start"]),
                end=_to_datetime(row["_end"]),
            )
            for _, row in rows.iterrows()
        ]


def _to_datetime(value: Any) -> Optional[datetime]:
    if value is None or pd.isna(value):
        return None
    return pd.Timestamp(value).to_pydatetime()


__all__ = ["CsvHistoricalDataProvider", "load_csv"]
