import pytest

from rps_hand.animation.variants import FingerWave, GestureCycle, WristTurn, default_rotation
from rps_hand.protocol.commands import HandCommand, Move

def test_wrist_turn_is_a_single_pulse(scheduler, sink):
    v = WristTurn(scheduler)
    v.start(sink)
    assert sink.sent == [HandCommand.TURN_WRIST]
    assert not v.running
    assert scheduler.active_timers == []
    v.stop(sink)
    v.stop(sink)
    assert sink.sent == [HandCommand.TURN_WRIST]

def test_gesture_cycle_runs_once_and_stops_itself(scheduler, sink):
    v = GestureCycle(scheduler)
    v.start(sink)
    assert sink.sent == [Move.ROCK]
    scheduler.advance(1.0)
    assert sink.sent == [Move.ROCK, Move.PAPER]
    scheduler.advance(1.0)
    assert sink.sent == [Move.ROCK, Move.PAPER, Move.SCISSORS]
    assert not v.running
    scheduler.advance(10.0)
    assert sink.sent == [Move.ROCK, Move.PAPER, Move.SCISSORS]

def test_gesture_cycle_can_run_again(scheduler, sink):
    v = GestureCycle(scheduler)
    v.start(sink)
    scheduler.advance(5.0)
    v.start(sink)
    scheduler.advance(5.0)
    assert sink.sent == [0, 1, 2, 0, 1, 2]

def test_gesture_cycle_stop_mid_cycle(scheduler, sink):
    v = GestureCycle(scheduler)
    v.start(sink)
    scheduler.advance(1.0)
    v.stop(sink)
    v.stop(sink)
    scheduler.advance(5.0)
    assert sink.sent == [Move.ROCK, Move.PAPER]

def test_finger_wave_sequence_wraps(scheduler, sink):
    v = FingerWave(scheduler)
    v.start(sink)
    scheduler.advance(6.0)
    assert sink.sent == [
        Move.ROCK,
        12, 5,   # curl ring, relax thumb
        14, 7,   # curl pinky, relax pointer
        6, 9,
        8, 11,
        10, 13,  # relax pinky, index at 4
        12, 5,   # wrapped back to thumb
    ]
    assert v.finger == 0
    assert v.running

def test_finger_wave_stop_sends_one_neutral(scheduler, sink):
    v = FingerWave(scheduler)
    v.start(sink)
    scheduler.advance(3.0)
    before = len(sink.sent)
    v.stop(sink)
    v.stop(sink)
    scheduler.advance(5.0)
    assert sink.sent[before:] == [Move.PAPER]
    assert not v.running

def test_finger_wave_stop_without_start_is_silent(scheduler, sink):
    FingerWave(scheduler).stop(sink)
    assert sink.sent == []

@pytest.mark.parametrize("variant_cls", [FingerWave, GestureCycle])
def test_start_while_running_is_an_error(scheduler, sink, variant_cls):
    v = variant_cls(scheduler)
    v.start(sink)
    scheduler.advance(1.0)
    sent = list(sink.sent)
    state = (getattr(v, "move", None), getattr(v, "finger", None))
    with pytest.raises(RuntimeError):
        v.start(sink)
    assert sink.sent == sent
    assert (getattr(v, "move", None), getattr(v, "finger", None)) == state

def test_default_rotation_order(scheduler):
    rotation = default_rotation(scheduler, 0.5)
    assert [v.name for v in rotation] == ["finger_wave", "wrist_turn", "gesture_cycle"]
    assert all(v.interval_s == 0.5 for v in rotation)
