import logging
import re
from typing import Iterable, Optional

logger = logging.getLogger(__name__)

NUMBER = r"[0-9.+-]+(?:[eE][+-]?[0-9]+)?"

re_flexible_float = re.compile(
    r"^[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?$"
)
re_coord = re.compile(rf"\((?P<x>{NUMBER}),(?P<y>{NUMBER})\)")
"""
The body between the outer brackets must be nothing but coordinate groups, so that
text like "(bad,4)" fails the whole parse instead of being skipped over.
"""
re_coords_body = re.compile(rf"(?:\s*\({NUMBER},{NUMBER}\))*\s*")


def parse_flexible_float(text: str) -> float:
    """
    Accepts an optional leading sign, a missing integer or fractional part (".5",
    "3.") and an exponent. Raises ValueError for anything else, including "nan" and
    "inf", which float() alone would let through.
    """
    token = text.strip()
    if not re_flexible_float.match(token):
        raise ValueError(f"Cannot parse {text!r} as a number")
    return float(token)


def split_pairs(text: Optional[str], delimiter: str) -> Optional[list[float]]:
    """
    Splits `text` on the `delimiter` regex and parses every token. Returns None
    instead of raising when the text is missing, has an odd number of tokens or
    holds a token that is not a number.
    """
    if text is None:
        return None

    tokens = re.split(delimiter, text.strip())
    # trailing delimiters do not produce tokens
    while len(tokens) > 1 and tokens[-1] == "":
        tokens.pop()

    if len(tokens) % 2 != 0:
        logger.debug(f"Odd number of tokens ({len(tokens)}) in {text!r}")
        return None

    try:
        return [parse_flexible_float(token) for token in tokens]
    except ValueError as e:
        logger.debug(f"Bad pair text {text!r}: {e}")
        return None


def parse_coords(text: Optional[str]) -> Optional[list[tuple[float, float]]]:
    """
    Parses "[(x0,y0)(x1,y1)...]". Returns None on any failure; a partially parsed
    list is never returned.
    """
    if text is None:
        return None

    text = text.strip()
    if not (text.startswith("[") and text.endswith("]")):
        logger.debug(f"Coordinates not enclosed in brackets: {text!r}")
        return None

    body = text[1:-1]
    if not re_coords_body.fullmatch(body):
        logger.debug(f"Bad coordinate text: {text!r}")
        return None

    coords = []
    for match in re_coord.finditer(body):
        try:
            x = parse_flexible_float(match["x"])
            y = parse_flexible_float(match["y"])
        except ValueError as e:
            logger.debug(f"Bad coordinate {match[0]!r}: {e}")
            return None
        coords.append((x, y))
    return coords


def format_flat(xs: Iterable[float], ys: Iterable[float]) -> str:
    # don't change this format, other tools read it back
    return " ".join(f"{float(x)} {float(y)}" for x, y in zip(xs, ys))


def format_bracketed(xs: Iterable[float], ys: Iterable[float]) -> str:
    # don't change this format either, parse_coords has to read it back
    return "[" + "".join(f"({float(x)},{float(y)})" for x, y in zip(xs, ys)) + "]"
