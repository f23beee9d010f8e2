"""Entry point for the Seefunk trainer CLI client."""

import argparse
import logging
import sys

from cli.api_client import SeefunkAPIClient
from cli.audio import SubprocessAudioPlayer
from cli.console import ConsoleUI


def main():
    parser = argparse.ArgumentParser(description='Seefunk - maritime radio exam practice')
    parser.add_argument(
        '--server',
        default='http://localhost:8000',
        help='Server URL (default: http://localhost:8000)'
    )
    parser.add_argument(
        '--user',
        default='default',
        help='User ID (default: default)'
    )
    parser.add_argument(
        '--player',
        default=None,
        help='Audio player command, e.g. "mpv --no-video" (default: first one found)'
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.WARNING)

    client = SeefunkAPIClient(base_url=args.server, user_id=args.user)
    player = SubprocessAudioPlayer(args.player.split() if args.player else None)
    ui = ConsoleUI(client, player)

    try:
        ui.run()
    except KeyboardInterrupt:
        player.stop()
        print('\nAuf Wiedersehen!')
        sys.exit(0)


if __name__ == '__main__':
    main()
