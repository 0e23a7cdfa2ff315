# SPDX-License-Identifier: MIT

import asyncio
import unittest

from babylog.edit.highlight import HighlightSignal
from babylog.model.event import HighlightCleared, HighlightStarted
from babylog.model.table import Table
from babylog.service.notifier import Notifier

from fakes import EventLog

WINDOW = 0.2


class TestHighlightSignal(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self.notifier = Notifier()
        self.log = EventLog(self.notifier)
        self.highlight = HighlightSignal(Table.FEEDINGS, self.notifier, WINDOW)

    async def test_mark_expires_after_window(self) -> None:
        self.highlight.mark(7, "duration")
        self.assertTrue(self.highlight.is_highlighted(7, "duration"))
        self.assertFalse(self.highlight.is_highlighted(7, "notes"))

        await asyncio.sleep(WINDOW * 3)

        self.assertFalse(self.highlight.is_highlighted(7, "duration"))
        self.assertEqual(
            self.log.of_type(HighlightCleared),
            [HighlightCleared(Table.FEEDINGS, 7, "duration")],
        )

    async def test_remark_replaces_expiry(self) -> None:
        first = self.highlight.mark(7, "duration")
        await asyncio.sleep(WINDOW * 0.6)
        second = self.highlight.mark(7, "duration")

        self.assertGreater(second.expires_at, first.expires_at)
        self.assertEqual(len(self.highlight.marks), 1)

        # Past the first expiry but inside the second
        await asyncio.sleep(WINDOW * 0.6)
        self.assertTrue(self.highlight.is_highlighted(7, "duration"))

        await asyncio.sleep(WINDOW * 2)
        self.assertFalse(self.highlight.is_highlighted(7, "duration"))
        self.assertEqual(len(self.log.of_type(HighlightCleared)), 1)
        self.assertEqual(len(self.log.of_type(HighlightStarted)), 2)

    async def test_marks_are_independent(self) -> None:
        self.highlight.mark(7, "duration")
        self.highlight.mark(8, "notes")
        self.assertEqual(len(self.highlight.marks), 2)

    async def test_clear(self) -> None:
        self.highlight.mark(7, "duration")
        self.highlight.clear()

        self.assertEqual(self.highlight.marks, [])
        await asyncio.sleep(WINDOW * 2)
        self.assertEqual(self.log.of_type(HighlightCleared), [])


if __name__ == "__main__":
    unittest.main(verbosity=2)
