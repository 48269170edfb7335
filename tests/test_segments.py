#!/usr/bin/env python3

"""
Tests for the keep-segment planner.
"""

# Standard Library
import os
import sys
from decimal import Decimal

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
	sys.path.insert(0, REPO_ROOT)

# local repo modules
from loadlesslib.core import segments
from loadlesslib.core import timeline
from loadlesslib.core.segments import Segment

#============================================

def _plan(lines: list) -> segments.SegmentPlan:
	return segments.plan_segments(timeline.build_timeline(lines))

#============================================

def test_single_load_plan() -> None:
	plan = _plan([
		"00:00:00,,Run start",
		"00:00:05,00:00:08,Menu load",
		"00:00:20,,Run end",
	])
	assert list(plan) == [
		Segment(0, Decimal(0), Decimal(5)),
		Segment(1, Decimal(8), None),
	]
	assert plan.warnings == ()
	assert plan.segments[1].is_open_ended
	assert plan.segments[1].duration is None

#============================================

def test_segments_are_contiguous_around_loads() -> None:
	lines = [
		"00:00:01,,Run start",
		"00:00:05,00:00:08,Menu load",
		"00:01:00,00:01:04.250,Level load",
		"00:02:30,00:02:31,Boss load",
		"00:03:00,,Run end",
	]
	built = timeline.build_timeline(lines)
	plan = segments.plan_segments(built)
	loads = [event for (_, event) in built.loads()]
	assert len(plan) == len(loads) + 1
	for position, load in enumerate(loads):
		assert plan.segments[position].end == load.start
		assert plan.segments[position + 1].start == load.end
	assert [segment.index for segment in plan] == [0, 1, 2, 3]

#============================================

def test_walk_stops_at_run_end() -> None:
	plan = _plan([
		"00:00:00,,Run start",
		"00:00:05,00:00:08,Menu load",
		"00:00:20,,Run end",
		"00:00:25,00:00:30,Hub load",
	])
	assert len(plan) == 2
	assert plan.segments[-1].end is None

#============================================

def test_missing_run_end_warns() -> None:
	plan = _plan([
		"00:00:00,,Run start",
		"00:00:05,00:00:08,Menu load",
		"00:00:12,00:00:13,Hub load",
	])
	assert list(plan) == [
		Segment(0, Decimal(0), Decimal(5)),
		Segment(1, Decimal(8), Decimal(12)),
	]
	assert len(plan.warnings) == 1
	assert "Run end" in plan.warnings[0]

#============================================

def test_cursor_starts_at_zero_not_run_start() -> None:
	plan = _plan([
		"00:00:03,,Run start",
		"00:00:05,00:00:08,Menu load",
		"00:00:20,,Run end",
	])
	assert plan.segments[0].start == Decimal(0)

#============================================

def test_overlapping_loads_warn() -> None:
	plan = _plan([
		"00:00:00,,Run start",
		"00:00:05,00:00:10,Menu load",
		"00:00:08,00:00:09,Respawn load",
		"00:00:20,,Run end",
	])
	assert plan.segments[1] == Segment(1, Decimal(10), Decimal(8))
	assert len(plan.warnings) == 1
	assert "segment 1" in plan.warnings[0]

#============================================

def test_segment_as_dict() -> None:
	assert Segment(2, Decimal("8.5"), None).as_dict() == {
		'index': 2,
		'start': "00:00:08.500",
		'end': None,
	}
