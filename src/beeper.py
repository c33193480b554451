# Rep / target-reached tones.
# Plays through simpleaudio; without an audio device it rings the terminal bell.

import logging
import threading

import numpy as np

from settings import BEEP_ON_REP, BEEP_ON_TARGET, REP_TONE, TARGET_TONE

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100


def tone(freq=880, ms=120, sample_rate=SAMPLE_RATE):
    """16-bit mono sine samples for ``ms`` milliseconds."""
    t = np.linspace(0, ms / 1000.0, int(sample_rate * ms / 1000.0), False)
    wave = (0.2 * np.sin(2 * np.pi * freq * t)).astype("float32")
    return (wave * 32767).astype("int16")


def _play(freq, ms):
    try:
        import simpleaudio as sa
        play_obj = sa.play_buffer(tone(freq, ms), 1, 2, SAMPLE_RATE)
        play_obj.wait_done()
    except Exception as e:
        logger.debug("Audio unavailable (%s), using terminal bell", e)
        print("\a", end="", flush=True)


def beep(freq=880, ms=120, async_play=True):
    if async_play:
        threading.Thread(target=_play, args=(freq, ms), daemon=True).start()
    else:
        _play(freq, ms)


def rep_feedback():
    if BEEP_ON_REP:
        beep(*REP_TONE)


def target_feedback():
    if BEEP_ON_TARGET:
        beep(*TARGET_TONE)
