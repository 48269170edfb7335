#!/usr/bin/env python3

import dataclasses
from decimal import Decimal
from loadlesslib.core import errors
from loadlesslib.core import events as events_module
from loadlesslib.core import utils
from loadlesslib.core.events import Category
from loadlesslib.core.events import Event

#============================================

# line 1 of a log is the column header
FIRST_RECORD_LINE = 2

#============================================

@dataclasses.dataclass(frozen=True)
class Timeline:
	events: tuple
	run_start: Decimal = utils.ZERO
	run_end: Decimal = utils.ZERO
	has_run_start: bool = False
	has_run_end: bool = False
	warnings: tuple = ()

	#============================
	def loads(self) -> list:
		"""Return (load index, event) pairs for every non-boundary event."""
		pairs = []
		for position, event in enumerate(self.events):
			if event.is_boundary:
				continue
			pairs.append((position + 1, event))
		return pairs

	#============================
	def loads_for(self, category: Category) -> list:
		return [event for event in self.events if event.category == category]

#============================================

def parse_records(raw_lines: list, first_line_number: int = FIRST_RECORD_LINE) -> list:
	"""
	Parse record lines in order, stopping at the first bad one.

	Args:
		raw_lines: Record lines, header already removed.
		first_line_number: Log line number of raw_lines[0].

	Returns:
		list: Parsed events.
	"""
	parsed = []
	for offset, raw in enumerate(raw_lines):
		event = events_module.parse_record(raw, line_number=first_line_number + offset)
		parsed.append(event)
	return parsed

#============================================

class TimelineBuilder():
	def __init__(self, strict_boundaries: bool = False):
		self.strict_boundaries = strict_boundaries

	#============================
	def build(self, parsed_events: list) -> Timeline:
		run_start = None
		run_end = None
		warnings = []
		for position, event in enumerate(parsed_events):
			if event.category == Category.RUN_START:
				if run_start is None:
					run_start = event.start
					continue
				self._duplicate_boundary(event, warnings)
				continue
			if event.category == Category.RUN_END:
				if run_end is None:
					run_end = event.start
					continue
				self._duplicate_boundary(event, warnings)
				continue
			if event.load_duration < 0:
				raise errors.NegativeLoadDuration(position + 1,
					line_number=event.line_number, raw=event.raw)
		if run_start is None:
			warnings.append("log has no 'Run start' marker, run start is 00:00:00")
		if run_end is None:
			warnings.append("log has no 'Run end' marker, run end is 00:00:00")
		return Timeline(
			events=tuple(parsed_events),
			run_start=run_start if run_start is not None else utils.ZERO,
			run_end=run_end if run_end is not None else utils.ZERO,
			has_run_start=run_start is not None,
			has_run_end=run_end is not None,
			warnings=tuple(warnings),
		)

	#============================
	def _duplicate_boundary(self, event: Event, warnings: list) -> None:
		label = event.category.label
		if self.strict_boundaries:
			raise errors.DuplicateBoundary(f"duplicate '{label}' marker",
				line_number=event.line_number, raw=event.raw)
		message = f"duplicate '{label}' marker ignored, the first one is used"
		if event.line_number is not None:
			message = f"line {event.line_number}: {message}"
		warnings.append(message)

#============================================

def build_timeline(raw_lines: list, strict_boundaries: bool = False) -> Timeline:
	"""Parse record lines and build a validated timeline."""
	parsed_events = parse_records(raw_lines)
	return TimelineBuilder(strict_boundaries=strict_boundaries).build(parsed_events)
