import random
import sys

from colorama import Fore, Style, init

from npminspector import __version__


def get_ascii_art(color: bool = True) -> str:
    """
    Return a randomly chosen ASCII-art banner, coloured line by line.
    """
    banner1 = r"""
                       _                           _
  _ __  _ __  _ __ ___ (_)_ __  ___ _ __   ___  ___| |_ ___  _ __
 | '_ \| '_ \| '_ ` _ \| | '_ \/ __| '_ \ / _ \/ __| __/ _ \| '__|
 | | | | |_) | | | | | | | | | \__ \ |_) |  __/ (__| || (_) | |
 |_| |_| .__/|_| |_| |_|_|_| |_|___/ .__/ \___|\___|\__\___/|_|
       |_|                         |_|
"""

    banner2 = r"""
  ╔╗╔╔═╗╔╦╗  ╦╔╗╔╔═╗╔═╗╔═╗╔═╗╔╦╗╔═╗╦═╗
  ║║║╠═╝║║║  ║║║║╚═╗╠═╝║╣ ║   ║ ║ ║╠╦╝
  ╝╚╝╩  ╩ ╩  ╩╝╚╝╚═╝╩  ╚═╝╚═╝ ╩ ╚═╝╩╚═
"""

    art = random.choice([banner1, banner2])
    art += f"\n  Offline malware heuristics for npm packages  v{__version__}\n"
    if not color:
        return art

    color_choices = [Fore.RED, Fore.GREEN, Fore.BLUE]
    art_with_color = ""
    for line in art.split("\n"):
        art_with_color += random.choice(color_choices) + line + "\n"
    art_with_color += Style.RESET_ALL
    return art_with_color


def print_banner(color: bool = True) -> None:
    """
    Print the banner to stderr so it never mixes with the report on stdout.
    """
    if color:
        init(autoreset=True)
    print(get_ascii_art(color), file=sys.stderr)
