from colorguess.ui.scores import ConfirmLatch


def test_second_press_confirms():
    latch = ConfirmLatch(timeout_ms=3000)
    assert latch.press(1000) is False
    assert latch.armed
    assert latch.press(2500) is True
    assert not latch.armed


def test_latch_disarms_after_timeout():
    latch = ConfirmLatch(timeout_ms=3000)
    latch.press(0)
    latch.update(2999)
    assert latch.armed
    latch.update(3000)
    assert not latch.armed

    # A late second press only re-arms
    latch.press(10000)
    assert latch.press(13500) is False
    assert latch.armed
