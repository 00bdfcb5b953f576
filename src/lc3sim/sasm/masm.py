from pathlib import Path
import logging as lg

import click

from lc3sim.sasm.asm import assemble


def assemble_file(filepath: str | Path) -> bytes:
    if isinstance(filepath, str):
        filepath = Path(filepath)

    lg.debug(f'Assembling file {filepath}')
    return assemble(filepath.read_text())


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.argument('source', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument('binary', type=Path)
def compile(verbose: bool, source: Path, binary: Path):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info('LC3 ASM')

    bytestr = assemble_file(source)
    binary.parent.mkdir(parents=True, exist_ok=True)
    binary.write_bytes(bytestr)
    lg.info(f'Wrote {len(bytestr)} bytes to {binary}')


if __name__ == '__main__':
    compile()
