"""
Cross-Platform Sound Player for AgentCraft host integrations.

Playback itself goes through pygame. Host integrations never wait for it:
``dispatch_playback`` starts this module as a detached process and returns
immediately, and every failure (missing file, audio device errors) is logged
and swallowed so it can never reach the host's event handling.
"""

import os
import subprocess
import sys
from pathlib import Path
from typing import Optional, Union

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

from utils.colored_logger import setup_logger  # noqa: E402
from utils.packs import list_sounds, resolve_pack_path  # noqa: E402

logger = setup_logger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def clamp_volume(volume: float) -> float:
    """Clamp a volume scalar into [0.0, 1.0]; non-numbers become 1.0."""
    try:
        value = float(volume)
    except (TypeError, ValueError):
        return 1.0
    if value != value:  # NaN
        return 1.0
    return min(max(value, 0.0), 1.0)


def play_sound(sound_path: Union[str, Path], volume: float = 0.5) -> bool:
    """
    Play a sound file using pygame (blocking until playback ends).

    Args:
        sound_path: Absolute path of the audio file
        volume: Volume level 0.0-1.0 (default: 0.5)

    Returns:
        bool: True if sound played successfully, False otherwise
    """
    path = Path(sound_path)
    if not path.is_file():
        logger.debug(f"Sound file not found: {path}")
        return False

    try:
        pygame.mixer.init()
        pygame.mixer.music.load(str(path))
        pygame.mixer.music.set_volume(clamp_volume(volume))
        pygame.mixer.music.play()

        # Wait for playback to finish
        while pygame.mixer.music.get_busy():
            pygame.time.wait(100)
        return True
    except pygame.error as e:
        logger.warning(f"Pygame audio error for {path}: {e}")
        return False
    finally:
        if pygame.mixer.get_init():
            pygame.mixer.quit()


def dispatch_playback(sound_path: Union[str, Path], volume: float) -> bool:
    """
    Fire-and-forget playback in a detached player process.

    Args:
        sound_path: Absolute path of the audio file
        volume: Volume level 0.0-1.0

    Returns:
        bool: True if the player process was started
    """
    path = Path(sound_path)
    if not path.is_file():
        logger.debug(f"Skipping playback, file not found: {path}")
        return False

    command = [
        sys.executable,
        "-m",
        "utils.sound_player",
        str(path),
        "--volume",
        str(clamp_volume(volume)),
    ]
    try:
        subprocess.Popen(
            command,
            cwd=str(PROJECT_ROOT),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as e:
        logger.warning(f"Could not start sound player for {path}: {e}")
        return False
    return True


def resolve_target(target: str, packs_root: Optional[Path] = None) -> Optional[Path]:
    """Accept either a filesystem path or a sound reference."""
    candidate = Path(target).expanduser()
    if candidate.is_absolute():
        return candidate
    return resolve_pack_path(target, packs_root)


def main():
    """
    Command-line interface for sound player.

    Usage:
    - python -m utils.sound_player /abs/path.mp3              # Play a file
    - python -m utils.sound_player pub/pack:sfx/done.mp3      # Play a reference
    - python -m utils.sound_player --list                     # List installed sounds
    - python -m utils.sound_player --volume 0.3 sfx/done.mp3  # Play with custom volume
    """
    import argparse

    parser = argparse.ArgumentParser(description="AgentCraft Sound Player")
    parser.add_argument(
        "sound", nargs="?", help="Absolute file path or sound reference to play"
    )
    parser.add_argument(
        "--volume",
        "-v",
        type=float,
        default=0.5,
        help="Volume level 0.0-1.0 (default: 0.5)",
    )
    parser.add_argument(
        "--packs-dir", type=Path, default=None, help="Override the packs root"
    )
    parser.add_argument(
        "--list", "-l", action="store_true", help="List installed sound references"
    )

    args = parser.parse_args()

    if args.list:
        sounds = list_sounds(args.packs_dir)
        if not sounds:
            print("No sounds found in installed packs")
        for sound in sounds:
            print(sound["path"])
        return

    if not args.sound:
        parser.error("a sound path or reference is required")

    target = resolve_target(args.sound, args.packs_dir)
    if target is None or not play_sound(target, args.volume):
        print(f"Error: could not play {args.sound}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
