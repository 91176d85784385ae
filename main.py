import argparse, logging

import config
from logging_setup import setup_logging


def main(argv=None):
    ap = argparse.ArgumentParser(description="Looping hero video reel")
    ap.add_argument("--videos", default=config.VIDEOS_PATH,
                    help=f"folder with hero-1.mp4 … (default: {config.VIDEOS_PATH})")
    ap.add_argument("--audio", default=config.AUDIO_PATH,
                    help="ambient audio loop toggled from the nav bar")
    ap.add_argument("--windowed", action="store_true", help="run in a window")
    ap.add_argument("--fullscreen", action="store_true", help="run fullscreen")
    ap.add_argument("--overlay", action="store_true", help="start with diagnostics shown")
    ap.add_argument("--log-level", default=config.LOG_LEVEL)
    ap.add_argument("--log-file", default=config.LOG_FILE)
    args = ap.parse_args(argv)

    config.VIDEOS_PATH = args.videos
    config.AUDIO_PATH = args.audio
    if args.fullscreen:
        config.FULLSCREEN = True
    if args.windowed:
        config.FULLSCREEN = False
    if args.overlay:
        config.SHOW_OVERLAYS = True

    setup_logging(args.log_level, args.log_file)
    logging.getLogger(__name__).info("hero reel: %s clips from %s",
                                     config.TOTAL_VIDEOS, config.VIDEOS_PATH)

    from app import HeroSite     # pulls in pygame + GStreamer
    HeroSite().run()


if __name__ == "__main__":
    main()
