import math

import pytest

from solarsim.data_models import CONFIRMED, PENDING
from solarsim.orbit_detector import OrbitTracker, signed_angle


def circle_point(degrees, radius=100.0):
    a = math.radians(degrees)
    return (radius * math.cos(a), radius * math.sin(a), 0.0)


def feed(tracker, angles, start_time=0.0):
    """Feed one position per angle with time advancing by 1s per tick."""
    events = []
    t = start_time
    for deg in angles:
        events.extend(tracker.update(circle_point(deg), t))
        t += 1.0
    return events, t


@pytest.fixture
def tracker():
    return OrbitTracker.create(1, circle_point(0.0), (0.0, 1.0, 0.0))


def test_create_fixes_reference_state(tracker):
    assert tracker.initial_radius == pytest.approx(100.0)
    assert tracker.initial_position == pytest.approx((100.0, 0.0, 0.0))
    assert tracker.angular_momentum_direction == pytest.approx((0.0, 0.0, 1.0))
    assert tracker.threshold == pytest.approx(10.0)
    assert not tracker.is_pending
    assert tracker.orbit_count == 0


def test_signed_angle_follows_reference():
    assert signed_angle((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0)) == pytest.approx(math.pi / 2)
    assert signed_angle((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, -1.0)) == pytest.approx(-math.pi / 2)
    # zero reference never flips the sign
    assert signed_angle((1.0, 0.0, 0.0), (0.0, -1.0, 0.0), (0.0, 0.0, 0.0)) == pytest.approx(math.pi / 2)


def test_no_event_before_a_full_turn(tracker):
    events, _ = feed(tracker, range(7, 358, 7))
    assert events == []
    assert tracker.angle_accumulated == pytest.approx(math.radians(357))


def test_pending_then_confirmed_at_closest_approach(tracker):
    events, _ = feed(tracker, range(7, 358, 7))  # ticks 0..50
    assert events == []

    # tick 51 crosses 2*pi at 364 deg, chord 6.98 is inside the 10.0 threshold
    events = tracker.update(circle_point(364), 51.0)
    assert [e.status for e in events] == [PENDING, PENDING]
    assert events[0].orbit_count == 1 and events[0].sim_time == 51.0
    assert events[1].sim_time == pytest.approx(51.0)
    assert tracker.pending_orbit_count == 1
    assert tracker.last_detection_distance == pytest.approx(200 * math.sin(math.radians(2)))

    # 371 deg: chord 19.2 sits inside the hysteresis band, nothing happens
    assert tracker.update(circle_point(371), 52.0) == []
    assert tracker.is_pending

    # 378 deg: chord 31.3 leaves twice the threshold
    events = tracker.update(circle_point(378), 53.0)
    assert len(events) == 1
    confirmed = events[0]
    assert confirmed.status == CONFIRMED and confirmed.is_confirmed
    assert confirmed.body_index == 1
    assert confirmed.orbit_count == 1
    assert confirmed.sim_time == pytest.approx(51.0)
    assert tracker.orbit_count == 1
    assert tracker.pending_orbit_count == 0


def test_confirmation_carries_remainder_angle(tracker):
    feed(tracker, list(range(7, 365, 7)) + [371])
    before = tracker.angle_accumulated
    tracker.update(circle_point(378), 99.0)
    assert tracker.orbit_count == 1
    assert tracker.angle_accumulated == pytest.approx(before + math.radians(7) - 2 * math.pi)
    assert tracker.angle_accumulated == pytest.approx(math.radians(18))
    assert tracker.angle_accumulated != 0.0


def test_oscillation_inside_band_confirms_once(tracker):
    _, t = feed(tracker, range(7, 365, 7))
    assert tracker.is_pending

    wobble = [371, 366, 371, 366, 371, 362, 370, 365, 371, 366, 370]
    events, t = feed(tracker, wobble, start_time=t)
    assert all(e.status == PENDING for e in events)
    assert tracker.orbit_count == 0
    assert tracker.pending_orbit_count == 1

    # the closest approach (362 deg, chord 3.49) is tick index 57 overall
    assert tracker.last_detection_distance == pytest.approx(200 * math.sin(math.radians(1)))

    events, t = feed(tracker, [380], start_time=t)
    confirmed = [e for e in events if e.status == CONFIRMED]
    assert len(confirmed) == 1
    assert confirmed[0].sim_time == pytest.approx(57.0)

    # wobbling back into the band after confirmation cannot re-trigger
    events, _ = feed(tracker, [372, 366, 372, 366, 380], start_time=t)
    assert events == []
    assert tracker.orbit_count == 1


def test_orbit_count_steps_by_one(tracker):
    counts = []
    angles = list(range(7, 365, 7)) + [371, 378] + list(range(385, 730, 7)) + [737, 744]
    t = 0.0
    for deg in angles:
        for event in tracker.update(circle_point(deg), t):
            if event.status == CONFIRMED:
                counts.append(event.orbit_count)
        t += 1.0
    assert counts == [1, 2]
    assert tracker.orbit_count == 2


def test_clockwise_orbit_counts_positive_angle():
    tracker = OrbitTracker.create(2, circle_point(0.0), (0.0, -1.0, 0.0))
    assert tracker.angular_momentum_direction == pytest.approx((0.0, 0.0, -1.0))
    events, _ = feed(tracker, [-d for d in range(7, 379, 7)])
    assert tracker.angle_accumulated > 0
    assert [e.orbit_count for e in events if e.status == CONFIRMED] == [1]


def test_reported_time_uses_sixty_frames_per_second(tracker):
    feed(tracker, range(7, 358, 7))
    events = tracker.update(circle_point(364), 12.345)
    assert events[0].sim_time == 12.345
    assert tracker.last_detection_frame == math.floor(12.345 * 60)
    assert events[1].sim_time == pytest.approx(math.floor(12.345 * 60) / 60)
