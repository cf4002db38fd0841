#!/usr/bin/env python3

import argparse
import dataclasses
import sys
import time
from typing import List, Optional

from .audio.file_input import WavFileInput
from .audio.tuner_service import TunerService
from .core.config import ConfigManager, TunerConfig
from .core.errors import TunerError
from .logger import get_logger
from .logging_config import setup_logging
from .note_matcher import NoteMatcher
from .note_types import TunerReading
from .session import TuningSession
from .tunings import TUNINGS, get_tuning

logger = get_logger(__name__)


def parse_arguments(args: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Tonal Tuner - real-time string tuner"
    )

    parser.add_argument(
        "--tuning",
        type=str,
        choices=sorted(TUNINGS),
        help="Reference tuning (default: from config, normally 'ukulele').",
    )
    parser.add_argument(
        "--target",
        type=str,
        help="String to tune (e.g. A4). Default: match any string.",
    )

    # Audio settings
    parser.add_argument("--device", type=int, help="Audio input device ID.")
    parser.add_argument(
        "--device-name", type=str, help="Pick the first input device whose name contains this."
    )
    parser.add_argument("--sample-rate", type=int, help="Preferred sample rate in Hz.")
    parser.add_argument("--frame-size", type=int, help="Samples per analysis frame.")
    parser.add_argument(
        "--no-filter", action="store_true", help="Disable the input low-pass filter."
    )
    parser.add_argument("--wav", type=str, help="Analyse an audio file instead of live input.")
    parser.add_argument("--loop", action="store_true", help="Loop the --wav file.")
    parser.add_argument(
        "--gain", type=float, default=1.0, help="Linear gain applied to --wav frames (default: 1.0)."
    )
    parser.add_argument(
        "--fast",
        action="store_true",
        help="Analyse every frame of the --wav file as fast as possible and exit.",
    )
    parser.add_argument(
        "--list-devices", action="store_true", help="List audio devices and exit."
    )

    # Front-end
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Print readings to the console instead of opening a window.",
    )
    parser.add_argument(
        "--duration", type=float, help="Stop after this many seconds (headless only)."
    )
    parser.add_argument(
        "--config-dir", type=str, help="Directory holding tuner.json (default: ~/.config/tonal_tuner)."
    )

    # Debugging
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")

    return parser.parse_args(args)


def build_config(args: argparse.Namespace, base: TunerConfig) -> TunerConfig:
    """Apply command line overrides to a loaded configuration."""
    config = base.with_overrides(
        tuning=args.tuning,
        sample_rate=args.sample_rate,
        frame_size=args.frame_size,
    )
    if args.no_filter:
        config = dataclasses.replace(config, lowpass_cutoff_hz=None)
    return config


def list_devices() -> None:
    """Print information about audio devices."""
    import sounddevice as sd

    print("Available audio devices:")
    print("-" * 70)
    for i, device in enumerate(sd.query_devices()):
        print(f"Device {i}: {device['name']}")
        print(f"  Max input channels: {device['max_input_channels']}")
        print(f"  Default sample rate: {device['default_samplerate']} Hz")
    print(f"Default input device: {sd.default.device[0]}")


def format_reading(reading: TunerReading) -> str:
    cents = NoteMatcher.cents_off(reading.frequency, reading.target_frequency)
    line = (
        f"{reading.frequency:8.2f} Hz  {reading.match.note:>4} "
        f"{reading.deviation:+6.2f} Hz {cents:+5.0f} cents  {reading.status.describe()}"
    )
    if reading.confirm:
        line += "  *ding*"
    return line


def run_headless(service: TunerService, duration: Optional[float] = None, tick: float = 1 / 30) -> None:
    """Poll the service at display rate and print every reading."""
    service.events.on_reading(lambda reading: print(format_reading(reading), flush=True))
    service.start()
    start = time.monotonic()
    try:
        while True:
            # Sample the state first so a file's final frame is still drained
            active = service.is_running()
            service.poll()
            if not active:
                break
            if duration is not None and time.monotonic() - start >= duration:
                break
            time.sleep(tick)
    except KeyboardInterrupt:
        pass
    finally:
        service.stop()


def run_offline(service: TunerService, wav: WavFileInput) -> int:
    """Analyse every frame of a file synchronously. Returns the number of readings."""
    count = 0
    for frame in wav.frames():
        reading = service.process(frame)
        if reading is not None:
            count += 1
            print(format_reading(reading), flush=True)
    logger.info(f"Finished offline analysis: {count} reading(s)")
    return count


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point for Tonal Tuner."""
    args = parse_arguments(args)

    # Configure logging
    setup_logging(level="DEBUG" if args.debug else "INFO")

    if args.list_devices:
        list_devices()
        return 0

    try:
        config = build_config(args, ConfigManager(args.config_dir).get_tuner_config())
        session = TuningSession(tuning=get_tuning(config.tuning), config=config)
        if args.target:
            session.select_target(args.target)

        if args.wav:
            audio_input = WavFileInput(
                args.wav,
                frames_per_buffer=config.frame_size,
                loop=args.loop,
                gain=args.gain,
            )
        else:
            from .audio.audio_input import SoundDeviceInput

            audio_input = SoundDeviceInput(
                device_id=args.device,
                device_name=args.device_name,
                sample_rate=config.sample_rate,
                frames_per_buffer=config.frame_size,
            )
        service = TunerService.from_config(audio_input, session)

        if args.wav and args.fast:
            run_offline(service, audio_input)
        elif args.headless:
            run_headless(service, args.duration)
        else:
            from .ui.pygame_ui import PygameUI

            PygameUI(service).run()

    except (TunerError, ValueError) as e:
        logger.error(str(e))
        return 1
    finally:
        logger.info("Tonal Tuner is shutting down.")

    return 0


if __name__ == "__main__":
    sys.exit(main())
