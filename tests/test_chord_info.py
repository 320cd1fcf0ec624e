import unittest
import asyncio
import os
import sys

# Ensure chordmap package is importable
sys.path.insert(0, os.getcwd())

from chordmap.advisor import ChordAnalysis, ChordSubstitution, ChordVoicing
from chordmap.chord_info import ChordInfoController, fetch_panels, functional_context
from chordmap.chord_map import get_column
from chordmap.session import ChordMapSession


class FakeAdvisor:
    """Records requests; any panel listed in `failures` raises instead."""

    def __init__(self, failures=(), slow=(), gated=False):
        self.failures = set(failures)
        self.slow = set(slow)
        self.gated = gated
        self.gate = None
        self.requests = []

    async def _panel(self, name, result):
        if name in self.slow:
            await asyncio.sleep(10)
        if self.gated:
            if self.gate is None:
                self.gate = asyncio.Event()
            await self.gate.wait()
        if name in self.failures:
            raise ValueError(f"bad {name}")
        return result

    async def explain(self, request):
        self.requests.append(request)
        return await self._panel("analysis", ChordAnalysis(usage="Resolves home", feeling="Tense"))

    async def substitutions(self, request):
        return await self._panel("substitutions", [
            ChordSubstitution(chord="Eb7", description="Tritone sub"),
            ChordSubstitution(chord="Xyz", description="Not a chord"),
        ])

    async def voicing(self, request):
        return await self._panel("voicing", ChordVoicing(frets=[3, 2, 0, 0, 0, 1]))


class TestFunctionalContext(unittest.TestCase):
    def test_plain_cell_has_no_category(self):
        v = get_column("v")
        self.assertEqual(functional_context(v, v.cells[1]), "V (Dominant)")

    def test_tagged_cell_appends_category(self):
        v = get_column("v")
        self.assertEqual(functional_context(v, v.cells[13]), "V (Dominant), Secondary Dominant")


class TestChordInfoController(unittest.TestCase):
    def setUp(self):
        self.session = ChordMapSession()

    def test_all_panels(self):
        advisor = FakeAdvisor()
        info = asyncio.run(ChordInfoController(self.session, advisor).show("v", 1))
        self.assertEqual(info.title, "G7")
        self.assertEqual(info.subtitle, "V in C Major")
        self.assertIsNone(info.category)
        self.assertEqual(info.intervals, ["R", "3", "5", "b7"])
        self.assertEqual(info.analysis.usage, "Resolves home")
        self.assertEqual(info.voicing.frets, [3, 2, 0, 0, 0, 1])
        self.assertEqual(info.errors, {})
        self.assertEqual(advisor.requests[0].context, "V (Dominant)")
        self.assertEqual(advisor.requests[0].key_label, "C")

    def test_substitutions_are_located_on_the_map(self):
        info = asyncio.run(ChordInfoController(self.session, FakeAdvisor()).show("v", 1))
        self.assertEqual(info.substitutions[0].map_positions, [("vi", 21)])
        self.assertEqual(info.substitutions[1].map_positions, [])

    def test_partial_failure(self):
        advisor = FakeAdvisor(failures=["voicing"])
        info = asyncio.run(ChordInfoController(self.session, advisor).show("v", 1))
        self.assertIsNone(info.voicing)
        self.assertIsNotNone(info.analysis)
        self.assertIsNotNone(info.substitutions)
        self.assertEqual(info.errors, {"voicing": "bad voicing"})

    def test_everything_fails(self):
        advisor = FakeAdvisor(failures=["analysis", "substitutions", "voicing"])
        info = asyncio.run(ChordInfoController(self.session, advisor).show("vi", 0))
        self.assertEqual(info.title, "Am")
        self.assertIsNone(info.analysis)
        self.assertIsNone(info.substitutions)
        self.assertIsNone(info.voicing)
        self.assertEqual(set(info.errors), {"analysis", "substitutions", "voicing"})

    def test_timeout_only_drops_slow_panel(self):
        advisor = FakeAdvisor(slow=["analysis"])
        info = asyncio.run(ChordInfoController(self.session, advisor, timeout=0.05).show("v", 1))
        self.assertIsNone(info.analysis)
        self.assertEqual(info.errors["analysis"], "timed out after 0.05s")
        self.assertIsNotNone(info.voicing)

    def test_key_and_category_in_request(self):
        self.session.set_key(2)
        advisor = FakeAdvisor()
        info = asyncio.run(ChordInfoController(self.session, advisor).show("v", 13))
        self.assertEqual(info.title, "A(b9)")
        self.assertEqual(info.subtitle, "V in D Major")
        self.assertEqual(info.category, "Secondary Dominant")
        self.assertEqual(advisor.requests[0].context, "V (Dominant), Secondary Dominant")

    def test_localized_subtitle(self):
        self.session.set_language("ja")
        info = asyncio.run(ChordInfoController(self.session, FakeAdvisor()).show("pass1", 2))
        self.assertEqual(info.subtitle, "経過 in C Major")
        self.assertEqual(info.title, "F#dim")

    def test_gap_cell(self):
        controller = ChordInfoController(self.session, FakeAdvisor())
        with self.assertRaises(ValueError):
            asyncio.run(controller.show("iv", 12))

    def test_stale_result_is_dropped(self):
        async def scenario():
            advisor = FakeAdvisor(gated=True)
            controller = ChordInfoController(self.session, advisor)
            first = asyncio.create_task(controller.show("v", 1))       # G7
            while advisor.gate is None:
                await asyncio.sleep(0)
            second = asyncio.create_task(controller.show("vi", 0))     # Am
            while len(advisor.requests) < 2:
                await asyncio.sleep(0)
            advisor.gate.set()
            return await asyncio.gather(first, second)

        first, second = asyncio.run(scenario())
        self.assertIsNone(first)
        self.assertEqual(second.title, "Am")
        self.assertEqual(self.session.selection.chord_name, "Am")

    def test_result_dropped_after_transpose(self):
        async def scenario():
            advisor = FakeAdvisor(gated=True)
            controller = ChordInfoController(self.session, advisor)
            task = asyncio.create_task(controller.show("v", 1))
            while advisor.gate is None:
                await asyncio.sleep(0)
            # Same cell, new key: the G7 answer no longer belongs here
            self.session.transpose(2)
            self.session.select("A7", "v")
            advisor.gate.set()
            return await task

        self.assertIsNone(asyncio.run(scenario()))


class TestFetchPanels(unittest.TestCase):
    def test_errors_are_keyed_by_panel(self):
        from chordmap.advisor import ChordInfoRequest
        request = ChordInfoRequest("G7", "C", "V (Dominant)", "en")
        panels, errors = asyncio.run(fetch_panels(FakeAdvisor(failures=["substitutions"]), request))
        self.assertIsNone(panels["substitutions"])
        self.assertEqual(panels["analysis"].feeling, "Tense")
        self.assertEqual(list(errors), ["substitutions"])

if __name__ == "__main__":
    unittest.main()
