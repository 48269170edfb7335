#!/usr/bin/env python3

import os
import sys
import unittest
from decimal import Decimal

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
	sys.path.insert(0, REPO_ROOT)

from loadlesslib.core import report
from loadlesslib.core import stats
from loadlesslib.core import timeline
from loadlesslib.core import utils
from loadlesslib.core.events import LOAD_CATEGORIES

#============================================

def _render(lines: list) -> str:
	built = timeline.build_timeline(lines)
	return report.format_report(built, stats.aggregate_categories(built),
		stats.run_totals(built))

#============================================

def _empty_blocks() -> dict:
	blocks = {}
	for category in LOAD_CATEGORIES:
		blocks[category.label] = [f"{category.label}: 0", ""]
	return blocks

#============================================

class ReportFormatTest(unittest.TestCase):
	#============================================
	def test_single_menu_load_report(self) -> None:
		"""A single load prints its line, a bare count and the totals."""
		text = _render([
			"00:00:00,,Run start",
			"00:00:05,00:00:08,Menu load",
			"00:00:20,,Run end",
		])
		expected = ["Load #2: 00:00:05.000 | 03.000 | Menu load", ""]
		blocks = _empty_blocks()
		blocks["Menu load"] = ["Menu load: 1", ""]
		for category in LOAD_CATEGORIES:
			expected.extend(blocks[category.label])
		expected.append("Total load times: 00:00:03.000")
		expected.append("RTA Run time: 00:00:20.000")
		expected.append("Loadless Run time: 00:00:17.000")
		self.assertEqual(text, "\n".join(expected) + "\n")

	#============================================
	def test_detail_block_for_two_loads(self) -> None:
		text = _render([
			"00:00:00,,Run start",
			"00:00:01,00:00:02.5,Boss load",
			"00:00:10,00:00:11,Boss load",
			"00:01:00,,Run end",
		])
		lines = text.split("\n")
		self.assertEqual(lines[0], "Load #2: 00:00:01.000 | 01.500 | Boss load")
		self.assertEqual(lines[1], "Load #3: 00:00:10.000 | 01.000 | Boss load")
		start = lines.index("Boss load: 2")
		self.assertEqual(lines[start:start + 7], [
			"Boss load: 2",
			"",
			"    -Average: 01.250",
			"    -Median: 01.500",
			"    -Best: 01.000",
			"    -Worst: 01.500",
			"",
		])
		self.assertEqual(lines[-4], "Total load times: 00:00:02.500")
		self.assertEqual(lines[-2], "Loadless Run time: 00:00:57.500")
		self.assertEqual(lines[-1], "")

	#============================================
	def test_block_order_follows_categories(self) -> None:
		text = _render([
			"00:00:00,00:00:01,Dark gaia load",
			"00:00:02,00:00:03,Menu load",
		])
		self.assertLess(text.index("Menu load: 1"), text.index("Dark gaia load: 1"))
		self.assertNotIn("Run start:", text)

#============================================

class TimeFormatTest(unittest.TestCase):
	#============================================
	def test_clock_format(self) -> None:
		self.assertEqual(utils.format_clock(Decimal("3723.5")), "01:02:03.500")
		self.assertEqual(utils.format_clock(Decimal("0")), "00:00:00.000")

	#============================================
	def test_milliseconds_are_truncated(self) -> None:
		self.assertEqual(utils.format_short(Decimal("1.2349")), "01.234")
		self.assertEqual(utils.format_clock(Decimal("0.0009999")), "00:00:00.000")

	#============================================
	def test_short_format_keeps_seconds_component(self) -> None:
		self.assertEqual(utils.format_short(Decimal("75.25")), "15.250")

	#============================================
	def test_negative_values_keep_sign(self) -> None:
		self.assertEqual(utils.format_clock(Decimal("-5")), "-00:00:05.000")
		self.assertEqual(utils.format_short(Decimal("-0.5")), "-00.500")

#============================================

def main() -> None:
	"""Run the unit tests."""
	unittest.main()

#============================================

if __name__ == "__main__":
	main()
