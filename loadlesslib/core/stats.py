#!/usr/bin/env python3

import dataclasses
import statistics
from decimal import Decimal
from loadlesslib.core import utils
from loadlesslib.core.events import Category
from loadlesslib.core.events import LOAD_CATEGORIES
from loadlesslib.core.timeline import Timeline

#============================================

# average, median, best and worst need at least this many loads
MIN_DETAILED_COUNT = 2

#============================================

@dataclasses.dataclass(frozen=True)
class CategoryStats:
	category: Category
	count: int
	average: Decimal = None
	median: Decimal = None
	best: Decimal = None
	worst: Decimal = None

	#============================
	@property
	def has_details(self) -> bool:
		return self.count >= MIN_DETAILED_COUNT

#============================================

@dataclasses.dataclass(frozen=True)
class RunTotals:
	total_loads: Decimal
	rta_run_time: Decimal
	loadless_run_time: Decimal

#============================================

def average_duration(durations: list) -> Decimal:
	"""
	Mean of durations, computed on real-valued milliseconds.
	"""
	millis = [utils.to_milliseconds(value) for value in durations]
	return utils.from_milliseconds(statistics.fmean(millis))

#============================================

def median_duration(durations: list) -> Decimal:
	"""
	Upper-middle element of the sorted durations, never an interpolation.
	"""
	ordered = sorted(durations, key=utils.to_milliseconds)
	return ordered[len(ordered) // 2]

#============================================

def category_stats(category: Category, durations: list) -> CategoryStats:
	count = len(durations)
	if count < MIN_DETAILED_COUNT:
		return CategoryStats(category, count)
	return CategoryStats(
		category=category,
		count=count,
		average=average_duration(durations),
		median=median_duration(durations),
		best=min(durations),
		worst=max(durations),
	)

#============================================

def aggregate_categories(timeline: Timeline) -> list:
	"""One CategoryStats per load category, in category order."""
	results = []
	for category in LOAD_CATEGORIES:
		durations = [event.load_duration for event in timeline.loads_for(category)]
		results.append(category_stats(category, durations))
	return results

#============================================

def run_totals(timeline: Timeline) -> RunTotals:
	total_loads = utils.ZERO
	for event in timeline.events:
		if not event.is_boundary:
			total_loads += event.load_duration
	rta_run_time = timeline.run_end - timeline.run_start
	return RunTotals(
		total_loads=total_loads,
		rta_run_time=rta_run_time,
		loadless_run_time=rta_run_time - total_loads,
	)
