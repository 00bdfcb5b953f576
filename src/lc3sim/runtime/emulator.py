import sys
from pathlib import Path
import logging as lg
import traceback

import click

from lc3sim.runtime.console import Console
import lc3sim.runtime.cpu as cpu


EXIT_HALT = 0
EXIT_KEYBOARD = 3
EXIT_EXEC_ERROR = 100


def execute(image: bytes, console: Console | None = None, trace: bool = False) -> cpu.CPU:
    proc = cpu.CPU.from_image(image, console)
    proc.trace = trace
    proc.run()
    return proc


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('--trace', is_flag=True, help='Logs every executed instruction')
@click.argument('image_filename', type=click.Path(exists=True, dir_okay=False, path_type=Path))
def run(verbose: bool, trace: bool, image_filename: Path):
    lg.basicConfig(level=lg.DEBUG if verbose or trace else lg.INFO)
    lg.info('LC3SIM')

    try:
        image = image_filename.read_bytes()
        execute(image, trace=trace)
        lg.info('Execution halted gracefully')
        sys.exit(EXIT_HALT)

    except KeyboardInterrupt:
        lg.info('Execution halted by the user')
        sys.exit(EXIT_KEYBOARD)

    except Exception as e:
        lg.error(f'Execution halted on general error {e}')
        traceback.print_exc()
        sys.exit(EXIT_EXEC_ERROR)


if __name__ == '__main__':
    run()
