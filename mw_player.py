"""Playback thread management for MorseWave.

This module runs the PlaybackRunner, which walks one event sequence from the
sequencer, and an AudioThread consumer that writes numpy frames to
sounddevice. The Player ties them together and allows one playback at a
time.
"""
import logging
import threading
import time
import queue
from typing import Callable, List, Optional

try:
    import sounddevice as sd
except (ImportError, OSError):
    sd = None

from mw_sequencer import PlaybackEvent, Sequencer, coalesce
from mw_synth import ToneConfig, ToneSynth

logger = logging.getLogger(__name__)

# Audio processing constants
AUDIO_CHUNK_SIZE = 4096
AUDIO_QUEUE_MAX_SIZE = 8
QUEUE_PUT_TIMEOUT = 0.5

EventCallback = Callable[[PlaybackEvent], None]
DoneCallback = Callable[[bool], None]


class AudioThread(threading.Thread):
    """Background thread that pulls frames from a queue and writes them.

    The thread exits on receipt of None or when stop_flag is set.
    """
    def __init__(self, q_frames: queue.Queue, stop_flag: threading.Event, sample_rate: int):
        super().__init__(daemon=True)
        self.q_frames = q_frames
        self.stop_flag = stop_flag
        self.sample_rate = sample_rate

    def run(self):
        """Continuously read frames and write to sound device output stream."""
        if sd is None:
            logger.warning("sounddevice is not available; playing silently")
            return
        try:
            with sd.OutputStream(channels=1, dtype='float32', samplerate=self.sample_rate) as stream:
                while not self.stop_flag.is_set():
                    try:
                        frame = self.q_frames.get(timeout=0.1)
                    except queue.Empty:
                        continue
                    if frame is None:
                        break
                    stream.write(frame)
        except (sd.PortAudioError, ValueError):
            logger.exception("audio output failed")


class PlaybackRunner(threading.Thread):
    """Play one event sequence in real time.

    Responsibilities:
      - Call on_event at each event's scheduled start, so visuals stay in
        step with the audio
      - Render each event and push it into a bounded queue for playback
      - Report completion (True) or cancellation (False) through on_done

    The schedule runs off the monotonic clock, not the audio queue, so a
    missing or failed output device only silences the playback.
    """
    def __init__(self, events: List[PlaybackEvent], synth: ToneSynth,
                 on_event: Optional[EventCallback] = None,
                 on_done: Optional[DoneCallback] = None):
        super().__init__(daemon=True)
        self.events = events
        self.synth = synth
        self.on_event = on_event
        self.on_done = on_done
        self.stop_flag = threading.Event()
        self.q_frames: 'queue.Queue' = queue.Queue(maxsize=AUDIO_QUEUE_MAX_SIZE)

    def stop(self):
        """Signal the runner to stop and attempt to unblock the audio thread."""
        self.stop_flag.set()
        try:
            self.q_frames.put(None, timeout=0.1)
        except queue.Full:
            pass  # audio thread exits via stop_flag

    def _enqueue_audio(self, audio, audio_thr: AudioThread):
        """Break audio into chunks and enqueue them for playback.

        Frames are dropped once the audio thread has exited.
        """
        for i in range(0, len(audio), AUDIO_CHUNK_SIZE):
            while True:
                if self.stop_flag.is_set() or not audio_thr.is_alive():
                    return
                try:
                    self.q_frames.put(audio[i:i+AUDIO_CHUNK_SIZE], timeout=QUEUE_PUT_TIMEOUT)
                    break
                except queue.Full:
                    continue

    def _sleep_until(self, deadline: float) -> bool:
        """Wait for ``deadline`` on the monotonic clock; False if stopped."""
        delay = deadline - time.monotonic()
        if delay > 0:
            return not self.stop_flag.wait(delay)
        return not self.stop_flag.is_set()

    def run(self):
        """Start the audio thread, walk the events on schedule, then report the outcome."""
        audio_thr = AudioThread(self.q_frames, self.stop_flag, self.synth.cfg.sample_rate)
        audio_thr.start()

        start = time.monotonic()
        offset = 0.0
        completed = True
        for ev in self.events:
            if not self._sleep_until(start + offset):
                completed = False
                break
            if self.on_event is not None:
                self.on_event(ev)
            self._enqueue_audio(self.synth.event_audio(ev), audio_thr)
            offset += ev.duration_ms / 1000.0
        if completed:
            completed = self._sleep_until(start + offset)

        if completed and audio_thr.is_alive():
            try:
                self.q_frames.put(None, timeout=QUEUE_PUT_TIMEOUT)
            except queue.Full:
                pass  # audio thread exits via stop_flag
            audio_thr.join(QUEUE_PUT_TIMEOUT)
        self.stop_flag.set()
        if self.on_done is not None:
            self.on_done(completed)


class Player:
    """Own a Sequencer and a ToneSynth and play one Morse string at a time."""

    def __init__(self, sequencer: Optional[Sequencer] = None, tone: Optional[ToneConfig] = None):
        self.sequencer = sequencer if sequencer is not None else Sequencer()
        self.synth = ToneSynth(tone if tone is not None else ToneConfig())
        self._runner: Optional[PlaybackRunner] = None
        self._lock = threading.Lock()

    @property
    def is_playing(self) -> bool:
        with self._lock:
            return self._runner is not None

    def play(self, morse: str, on_event: Optional[EventCallback] = None,
             on_done: Optional[DoneCallback] = None) -> bool:
        """Start playing ``morse`` in the background.

        The event list is taken at the current speed before the thread
        starts, with each gap merged into one silence, so ``on_event`` sees
        one off event per gap.

        Returns:
            False if ``morse`` is blank or a playback is already running.
        """
        if not morse.strip():
            return False
        with self._lock:
            if self._runner is not None:
                logger.warning("playback already in progress; request ignored")
                return False
            events = coalesce(self.sequencer.sequence(morse))

            def finished(completed: bool):
                with self._lock:
                    self._runner = None
                if on_done is not None:
                    on_done(completed)

            self._runner = PlaybackRunner(events, self.synth, on_event, finished)
            self._runner.start()
        return True

    def stop(self):
        """Cancel the current playback, if any, and wait for it to end."""
        with self._lock:
            runner = self._runner
        if runner is None:
            return
        runner.stop()
        runner.join()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the current playback ends; return False on timeout."""
        with self._lock:
            runner = self._runner
        if runner is None:
            return True
        runner.join(timeout)
        return not runner.is_alive()
