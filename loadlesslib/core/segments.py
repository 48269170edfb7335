#!/usr/bin/env python3

import dataclasses
from decimal import Decimal
from loadlesslib.core import utils
from loadlesslib.core.events import Category
from loadlesslib.core.timeline import Timeline

#============================================

@dataclasses.dataclass(frozen=True)
class Segment:
	index: int
	start: Decimal
	end: Decimal = None

	#============================
	@property
	def is_open_ended(self) -> bool:
		return self.end is None

	#============================
	@property
	def duration(self) -> Decimal:
		"""Kept length, or None for the open-ended final segment."""
		if self.end is None:
			return None
		return self.end - self.start

	#============================
	def as_dict(self) -> dict:
		return {
			'index': self.index,
			'start': utils.format_clock(self.start),
			'end': utils.format_clock(self.end) if self.end is not None else None,
		}

#============================================

@dataclasses.dataclass(frozen=True)
class SegmentPlan:
	segments: tuple
	warnings: tuple = ()

	#============================
	def __len__(self) -> int:
		return len(self.segments)

	#============================
	def __iter__(self):
		return iter(self.segments)

#============================================

class SegmentPlanner():
	def __init__(self, timeline: Timeline):
		self.timeline = timeline

	#============================
	def plan(self) -> SegmentPlan:
		segments = []
		warnings = []
		cursor = utils.ZERO
		reached_run_end = False
		for event in self.timeline.events:
			if event.category == Category.RUN_START:
				continue
			if event.category == Category.RUN_END:
				segments.append(Segment(len(segments), cursor, None))
				reached_run_end = True
				break
			segment = Segment(len(segments), cursor, event.start)
			if segment.duration < 0:
				warnings.append(
					f"segment {segment.index} ends before it starts "
					f"({utils.format_clock(segment.start)} > "
					f"{utils.format_clock(segment.end)}), loads overlap"
				)
			segments.append(segment)
			cursor = event.end
		if not reached_run_end:
			warnings.append(
				"log has no 'Run end' marker, footage after the last load is dropped"
			)
		return SegmentPlan(tuple(segments), tuple(warnings))

#============================================

def plan_segments(timeline: Timeline) -> SegmentPlan:
	return SegmentPlanner(timeline).plan()
