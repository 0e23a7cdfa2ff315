# SPDX-License-Identifier: MIT

import unittest

import pendulum

from babylog.edit.value import coerce_value, display_value


class TestCoerceValue(unittest.TestCase):
    def test_amount(self) -> None:
        self.assertEqual(coerce_value("amount", "4.5"), 4.5)
        self.assertEqual(coerce_value("amount", 3), 3.0)
        self.assertIsNone(coerce_value("amount", ""))
        self.assertIsNone(coerce_value("amount", "  "))
        self.assertIsNone(coerce_value("amount", None))
        with self.assertRaises(ValueError):
            coerce_value("amount", "lots")

    def test_duration(self) -> None:
        self.assertEqual(coerce_value("duration", "45"), 45)
        self.assertEqual(coerce_value("duration", 30), 30)
        with self.assertRaises(ValueError):
            coerce_value("duration", "4.5")

    def test_times(self) -> None:
        parsed = coerce_value("start_time", "2024-03-01T13:00:00+00:00")
        self.assertEqual(parsed, pendulum.datetime(2024, 3, 1, 13, 0))
        self.assertIsNone(coerce_value("end_time", ""))
        with self.assertRaises(ValueError):
            coerce_value("start_time", "")

    def test_other_fields_pass_through(self) -> None:
        self.assertEqual(coerce_value("notes", "fussy"), "fussy")
        self.assertEqual(coerce_value("feeding_type", "bottle"), "bottle")


class TestDisplayValue(unittest.TestCase):
    def test_display(self) -> None:
        self.assertEqual(display_value(None), "")
        self.assertEqual(display_value(4.0), "4")
        self.assertEqual(display_value(4.5), "4.5")
        self.assertEqual(display_value(20), "20")
        self.assertEqual(display_value("night"), "night")
        self.assertEqual(
            display_value(pendulum.datetime(2024, 3, 1, 13, 0)),
            "2024-03-01T13:00:00+00:00",
        )


if __name__ == "__main__":
    unittest.main(verbosity=2)
