import dataclasses
import math
import unittest
from datetime import datetime

from core.activity import (
    ActivityKind,
    RideDetails,
    RunDetails,
    activity_summary,
    create_activity,
    create_ride,
    create_run,
    round_one_decimal,
)
from core.errors import InvalidActivityError

OCT_19 = datetime(2026, 10, 19, 8, 30)


class RunConstructionTests(unittest.TestCase):
    def test_pace_and_title(self):
        run = create_run((51.5, -0.1), 25, 5, 170, now=OCT_19)

        self.assertIs(run.kind, ActivityKind.RUN)
        self.assertIsInstance(run.details, RunDetails)
        self.assertEqual(run.details.pace_min_per_km, 5.0)
        self.assertEqual(run.derived_metric, 5.0)
        self.assertEqual(run.kind_specific_value, 170)
        self.assertEqual(run.title, "Running on October 19")
        self.assertEqual(run.location, (51.5, -0.1))
        self.assertEqual(run.created_at, OCT_19)

    def test_pace_is_rounded_to_one_decimal(self):
        cases = [(27, 4.2, 6.4), (61, 10, 6.1), (33.3, 7.7, 4.3), (1, 3, 0.3), (14.5, 10, 1.4)]
        for duration, distance, expected in cases:
            with self.subTest(duration=duration, distance=distance):
                run = create_run((0, 0), duration, distance, 160)
                self.assertEqual(run.details.pace_min_per_km, expected)


class RideConstructionTests(unittest.TestCase):
    def test_speed_and_title(self):
        ride = create_ride((51.5, -0.1), 60, 20, 150, now=OCT_19)

        self.assertIs(ride.kind, ActivityKind.RIDE)
        self.assertIsInstance(ride.details, RideDetails)
        self.assertEqual(ride.details.speed_kmh, 20.0)
        self.assertEqual(ride.kind_specific_value, 150)
        self.assertEqual(ride.title, "Cycling on October 19")

    def test_speed_is_rounded_to_one_decimal(self):
        for duration, distance, expected in [(47, 18.3, 23.4), (90, 42, 28.0), (12.5, 3.3, 15.8)]:
            with self.subTest(duration=duration, distance=distance):
                ride = create_ride((0, 0), duration, distance, 100)
                self.assertEqual(ride.details.speed_kmh, expected)


class RoundingTests(unittest.TestCase):
    def test_half_rounds_up(self):
        self.assertEqual(round_one_decimal(2.25), 2.3)
        self.assertEqual(round_one_decimal(2.35), 2.4)
        self.assertEqual(round_one_decimal(2.24), 2.2)
        self.assertEqual(round_one_decimal(5.0), 5.0)

    def test_uses_the_binary_value_of_the_float(self):
        # 1.45 is stored as 1.4499999999999999556...
        self.assertEqual(round_one_decimal(1.45), 1.4)
        self.assertEqual(round_one_decimal(14.5 / 10), 1.4)


class InvariantTests(unittest.TestCase):
    def test_rejects_non_positive_or_non_finite_fields(self):
        bad = [
            (0, 5, 170),
            (25, 0, 170),
            (25, 5, 0),
            (-25, 5, 170),
            (math.nan, 5, 170),
            (25, math.inf, 170),
            ("25", 5, 170),
        ]
        for duration, distance, cadence in bad:
            with self.subTest(duration=duration, distance=distance, cadence=cadence):
                with self.assertRaises(InvalidActivityError):
                    create_run((51.5, -0.1), duration, distance, cadence)

    def test_rejects_malformed_location(self):
        for location in [(91, 0), (0, 181), (math.nan, 0), ("a", "b"), (1, 2, 3), None]:
            with self.subTest(location=location):
                with self.assertRaises(InvalidActivityError):
                    create_ride(location, 60, 20, 150)

    def test_rejects_unknown_kind(self):
        with self.assertRaises(InvalidActivityError):
            create_activity("swimming", (0, 0), 30, 1, 10)

    def test_invalid_activity_error_is_a_value_error(self):
        with self.assertRaises(ValueError):
            create_run((0, 0), 0, 5, 170)

    def test_ids_are_unique(self):
        ids = {create_run((0, 0), 25, 5, 170).id for _ in range(500)}
        self.assertEqual(len(ids), 500)

    def test_activity_is_immutable(self):
        run = create_run((51.5, -0.1), 25, 5, 170, now=OCT_19)
        title = run.title

        with self.assertRaises(dataclasses.FrozenInstanceError):
            run.title = "Something else"
        with self.assertRaises(dataclasses.FrozenInstanceError):
            run.details.pace_min_per_km = 1.0

        self.assertEqual(run.title, title)
        self.assertEqual(run.title, title)


class SummaryTests(unittest.TestCase):
    def test_run_summary_uses_run_units(self):
        summary = activity_summary(create_run((51.5, -0.1), 25, 5, 170, now=OCT_19))

        self.assertEqual(summary['kind'], 'running')
        self.assertEqual(summary['title'], "Running on October 19")
        self.assertEqual(summary['derived_metric'], 5.0)
        self.assertEqual(summary['kind_specific_value'], 170)
        self.assertEqual(summary['units']['distance'], 'km')
        self.assertEqual(summary['units']['duration'], 'min')
        self.assertEqual(summary['units']['derived_metric'], 'min/km')
        self.assertEqual(summary['units']['kind_specific_value'], 'spm')

    def test_ride_summary_uses_ride_units(self):
        summary = activity_summary(create_ride((51.5, -0.1), 60, 20, 150))

        self.assertEqual(summary['units']['derived_metric'], 'km/h')
        self.assertEqual(summary['units']['kind_specific_value'], 'm')
        self.assertEqual(summary['derived_metric'], 20.0)


if __name__ == "__main__":
    unittest.main()
