from pathlib import Path
from typing import Iterator

import click

from lc3sim.codec.codec import decode, CodecError
from lc3sim.codec.disasm import disassemble
from lc3sim.runtime.loader import read_image, check_fit, ImageError


def listing(image: bytes) -> Iterator[str]:
    origin, words = read_image(image)
    check_fit(origin, len(words))

    for address, word in enumerate(words, start=origin):
        try:
            text = disassemble(decode(word), address)
        except CodecError:
            text = f'.FILL x{word:04X}'

        yield f'x{address:04X}  {word:04X}  {text}'


@click.command()
@click.argument('image_filename', type=click.Path(exists=True, dir_okay=False, path_type=Path))
def dump(image_filename: Path):
    try:
        lines = list(listing(image_filename.read_bytes()))
    except ImageError as e:
        raise click.ClickException(f'{image_filename}: {e}')

    for line in lines:
        click.echo(line)


if __name__ == '__main__':
    dump()
