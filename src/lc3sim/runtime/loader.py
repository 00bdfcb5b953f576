import struct
import logging as lg
from typing import Sequence

from lc3sim.common.hwconf import MEMORY_SIZE, WORD_SIZE, WORD_MASK


class ImageError(ValueError):
    pass


def read_image(image: bytes) -> tuple[int, list[int]]:
    ''' Splits an object image into its origin and the words that follow it '''
    if len(image) < WORD_SIZE:
        raise ImageError('Image is too short to hold an origin')

    if len(image) % WORD_SIZE != 0:
        raise ImageError(f'Image has an odd length of {len(image)} bytes')

    count = len(image) // WORD_SIZE
    (origin, *words) = struct.unpack(f'>{count}H', image)
    return origin, words


def check_fit(origin: int, count: int):
    if origin + count > MEMORY_SIZE:
        raise ImageError(f'{count} words at 0x{origin:04X} do not fit in memory')


def load_image(image: bytes, memory: list[int] | None = None) -> list[int]:
    origin, words = read_image(image)
    check_fit(origin, len(words))

    if memory is None:
        memory = [0] * MEMORY_SIZE

    memory[origin:origin + len(words)] = words
    lg.debug(f'Loaded {len(words)} words @ 0x{origin:04X}')
    return memory


def build_image(origin: int, words: Sequence[int]) -> bytes:
    return struct.pack(f'>{len(words) + 1}H', origin, *(w & WORD_MASK for w in words))
