"""Session data summary and CSV export for Trailmark."""

from __future__ import annotations

import os
from datetime import datetime

import pandas as pd

from core.activity import ActivityKind, round_one_decimal

EXPORT_COLUMNS = [
    'id',
    'date',
    'kind',
    'title',
    'latitude',
    'longitude',
    'distance_km',
    'duration_min',
    'pace_min_per_km',
    'speed_kmh',
    'cadence_spm',
    'elevation_gain_m',
]


class DataManager:
    """Builds DataFrames, session totals, and CSV exports from the session's activities."""

    def __init__(self, export_dir=None):
        self.export_dir = export_dir or os.path.expanduser("~/Downloads")

    @staticmethod
    def _activity_row(activity) -> dict:
        is_run = activity.kind is ActivityKind.RUN
        return {
            'id': activity.id,
            'date': activity.created_at.strftime('%Y-%m-%d %H:%M'),
            'kind': activity.kind.value,
            'title': activity.title,
            'latitude': activity.location[0],
            'longitude': activity.location[1],
            'distance_km': activity.distance_km,
            'duration_min': activity.duration_min,
            'pace_min_per_km': activity.derived_metric if is_run else None,
            'speed_kmh': None if is_run else activity.derived_metric,
            'cadence_spm': activity.kind_specific_value if is_run else None,
            'elevation_gain_m': None if is_run else activity.kind_specific_value,
        }

    def to_dataframe(self, activities) -> pd.DataFrame:
        """One row per activity in creation order; empty frame keeps the export columns."""
        rows = [self._activity_row(a) for a in activities]
        return pd.DataFrame(rows, columns=EXPORT_COLUMNS)

    def session_totals(self, activities) -> dict:
        """Count, distance and duration totals, per-kind counts, and mean derived metrics."""
        df = self.to_dataframe(activities)
        if df.empty:
            return {
                'count': 0,
                'total_distance_km': 0.0,
                'total_duration_min': 0.0,
                'runs': 0,
                'rides': 0,
                'avg_pace_min_per_km': None,
                'avg_speed_kmh': None,
            }

        runs = df[df['kind'] == ActivityKind.RUN.value]
        rides = df[df['kind'] == ActivityKind.RIDE.value]
        return {
            'count': int(len(df)),
            'total_distance_km': round(float(df['distance_km'].sum()), 1),
            'total_duration_min': round(float(df['duration_min'].sum()), 1),
            'runs': int(len(runs)),
            'rides': int(len(rides)),
            'avg_pace_min_per_km': round_one_decimal(float(runs['pace_min_per_km'].mean())) if not runs.empty else None,
            'avg_speed_kmh': round_one_decimal(float(rides['speed_kmh'].mean())) if not rides.empty else None,
        }

    def _generate_csv_content(self, activities) -> str:
        df = self.to_dataframe(activities)
        if df.empty:
            raise ValueError("No data to export")
        return df.to_csv(index=False)

    def export_csv(self, activities, destination_dir=None) -> str:
        """Write the session as CSV to disk and return the saved file path."""
        content = self._generate_csv_content(activities)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = f"trailmark_session_{timestamp}.csv"
        output_dir = destination_dir or self.export_dir
        os.makedirs(output_dir, exist_ok=True)
        file_path = os.path.join(output_dir, filename)

        with open(file_path, 'w', encoding='utf-8') as f:
            f.write(content)

        return file_path
