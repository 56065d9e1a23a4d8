"""
Plain-text reports of decoded modules.

The pattern dump follows the usual tracker layout, one line per row and one "| C-4 01 A0F " column
per channel, followed by the classified effect names of the row.
"""

from modinfo.song import Module
from modinfo.types import Instrument, Pattern

__all__ = ['format_header', 'format_instrument', 'format_pattern', 'format_module', 'save_as_ascii']


def format_header(module: Module) -> str:
    lines = [
        f"Title: {module.title}",
        f"Signature: {module.signature}",
        f"Song Length: {module.song_length}",
        f"Restart: {module.restart}",
        f"Order List: {' '.join(str(p) for p in module.pattern_seq)}",
        f"Patterns: {module.n_patterns}",
        f"Instruments: {module.n_actual_samples}",
    ]
    return '\n'.join(lines)


def format_instrument(idx: int, inst: Instrument) -> str:
    return (f"{idx:02d} {inst.name:<22} length={inst.length:5d} ({len(inst.payload)} bytes) "
            f"finetune={inst.finetune:+d} volume={inst.volume:2d} "
            f"repeat={inst.repeat_point}+{inst.repeat_len}")


def format_pattern(pattern: Pattern) -> str:
    """
    Renders all the rows of a pattern. Each row ends with the effect name and the raw x/y
    arguments of every channel, e.g. "VolumeSlide(0,15)".
    """

    lines = []
    for r in range(pattern.n_rows):
        cells = [pattern.channels[c].rows[r] for c in range(pattern.n_channels)]
        s = f"{r:02d} "
        s += ''.join(f"| {cell} " for cell in cells) + '|'
        s += ' ' + ' '.join(f"{cell.effect}({cell.x},{cell.y})" for cell in cells)
        lines.append(s)
    return '\n'.join(lines)


def format_module(module: Module, patterns: bool = True) -> str:
    """
    Renders a module as readable text.

    :param module: The decoded module.
    :param patterns: False to leave out the pattern data.
    :return: The report, without a trailing newline.
    """

    parts = [format_header(module), '']

    for i, inst in enumerate(module.instruments):
        parts.append(format_instrument(i + 1, inst))

    if patterns:
        for p, pattern in enumerate(module.patterns):
            parts.append('')
            parts.append(f"Pattern {p}")
            parts.append(format_pattern(pattern))

    return '\n'.join(parts)


def save_as_ascii(module: Module, fname: str, patterns: bool = True, verbose: bool = True):
    """
    Writes the module report as readable text with ASCII encoding.
    Characters that can't be encoded (e.g. from malformed names) are written as '?'.

    :param module: The decoded module.
    :param fname: Complete file path.
    :param patterns: False to leave out the pattern data.
    :param verbose: False for silent saving.
    :return: None.
    """

    if verbose:
        print(f'Saving to {fname}... ', end='', flush=True)

    with open(fname, 'w', encoding='ascii', errors='replace') as file:
        file.write(format_module(module, patterns))
        file.write('\n')

    if verbose:
        print('done.')
