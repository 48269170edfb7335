#!/usr/bin/env python3

"""
Text rendering of the load report.

The layout is consumed by other tools, so field order, spacing and the
hh:mm:ss.fff / ss.fff time formats must not change.
"""

from loadlesslib.core import utils
from loadlesslib.core.stats import CategoryStats
from loadlesslib.core.stats import RunTotals
from loadlesslib.core.timeline import Timeline

#============================================

def format_load_lines(timeline: Timeline) -> list:
	lines = []
	for (index, event) in timeline.loads():
		lines.append(
			f"Load #{index}: {utils.format_clock(event.start)} | "
			f"{utils.format_short(event.load_duration)} | {event.category.label}"
		)
	return lines

#============================================

def format_category_block(stats: CategoryStats) -> list:
	lines = [f"{stats.category.label}: {stats.count}", ""]
	if not stats.has_details:
		return lines
	lines.append(f"    -Average: {utils.format_short(stats.average)}")
	lines.append(f"    -Median: {utils.format_short(stats.median)}")
	lines.append(f"    -Best: {utils.format_short(stats.best)}")
	lines.append(f"    -Worst: {utils.format_short(stats.worst)}")
	lines.append("")
	return lines

#============================================

def format_totals(totals: RunTotals) -> list:
	return [
		f"Total load times: {utils.format_clock(totals.total_loads)}",
		f"RTA Run time: {utils.format_clock(totals.rta_run_time)}",
		f"Loadless Run time: {utils.format_clock(totals.loadless_run_time)}",
	]

#============================================

def format_report(timeline: Timeline, category_stats: list, totals: RunTotals) -> str:
	"""
	Render the full report.

	Args:
		timeline: Validated timeline.
		category_stats: CategoryStats in category order.
		totals: Run totals.

	Returns:
		str: Report text, every line terminated by a newline.
	"""
	lines = format_load_lines(timeline)
	lines.append("")
	for stats in category_stats:
		lines.extend(format_category_block(stats))
	lines.extend(format_totals(totals))
	return "\n".join(lines) + "\n"
